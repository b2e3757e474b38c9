# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Token estimation utilities.

Uses tiktoken when available, falls back to a chars/4 heuristic.
"""

from __future__ import annotations

import logging
from typing import Iterable

CHARS_PER_TOKEN_FALLBACK = 4

logger = logging.getLogger(__name__)

try:
    import tiktoken

    _encoding = tiktoken.encoding_for_model("gpt-4o")

    def estimate_tokens(text: str) -> int:
        """Estimate token count using tiktoken.

        Args:
            text (str): Text to tokenize.

        Returns:
            int: Number of tokens produced by the tiktoken encoder.
        """
        return len(_encoding.encode(text, disallowed_special=()))

except Exception:
    logger.info("tiktoken unavailable, using chars/%d heuristic", CHARS_PER_TOKEN_FALLBACK)

    def estimate_tokens(text: str) -> int:  # type: ignore[misc]
        """Estimate token count using character heuristic.

        Args:
            text (str): Text to estimate tokens for.

        Returns:
            int: Estimated token count (at least 1 for non-empty text).
        """
        if not text:
            return 0
        return max(1, len(text) // CHARS_PER_TOKEN_FALLBACK)


def estimate_contents_tokens(contents: Iterable[str]) -> int:
    """Total estimated tokens across a sequence of text fragments.

    Args:
        contents (Iterable[str]): Fragments, e.g. from
            ``collect_content_in_range``.

    Returns:
        int: Sum of per-fragment estimates.
    """
    return sum(estimate_tokens(text) for text in contents)
