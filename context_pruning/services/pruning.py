# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Argument handling for the prune, distill, and compress tools.

The model refers to tool results by the numbers shown in the
``<prunable-tools>`` block; those are resolved against
``SessionState.tool_id_list``.  Compress selects a span of conversation by
its first and last text instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from context_pruning.exceptions import InvalidPruneArgumentsError, InvalidRangeError
from context_pruning.schemas.session import CompressSummary, SessionMessage, SessionState
from context_pruning.services.matching.engine import (
    END_STRING,
    START_STRING,
    MatchResult,
    find_string_in_messages,
)
from context_pruning.services.matching.ranges import (
    collect_content_in_range,
    collect_message_ids_in_range,
    collect_tool_ids_in_range,
)
from context_pruning.services.settings import FuzzyConfig, PruningSettings
from context_pruning.services.tokens import estimate_contents_tokens

logger = logging.getLogger(__name__)


def resolve_tool_ids(ids: Any, state: SessionState) -> List[str]:
    """Map numeric string ids from the prunable-tools list to call ids.

    Args:
        ids (Any): Tool argument, expected to be a non-empty list of numeric
            strings such as ``["0", "12"]``.
        state (SessionState): Provides ``tool_id_list``.

    Returns:
        List[str]: Call ids in argument order, duplicates removed.

    Raises:
        InvalidPruneArgumentsError: Missing, non-numeric, or unknown ids.
    """
    if not ids or not isinstance(ids, list):
        logger.debug("Prune tool called without ids: %r", ids)
        raise InvalidPruneArgumentsError("Missing ids. You must provide at least one ID to prune.")

    if not all(isinstance(i, str) and i.strip() for i in ids):
        logger.debug("Prune tool called with invalid ids: %r", ids)
        raise InvalidPruneArgumentsError(
            'Invalid ids. All IDs must be numeric strings (e.g., "1", "23") from the <prunable-tools> list.'
        )

    call_ids: List[str] = []
    for raw in ids:
        text = raw.strip()
        if not text.isdigit():
            raise InvalidPruneArgumentsError(
                f'Invalid id "{raw}". IDs must be numeric strings from the <prunable-tools> list.'
            )
        index = int(text)
        if index >= len(state.tool_id_list):
            raise InvalidPruneArgumentsError(
                f"Unknown id {index}. Use only IDs shown in the current <prunable-tools> list."
            )
        call_id = state.tool_id_list[index]
        if call_id not in call_ids:
            call_ids.append(call_id)
    return call_ids


def build_prune_replacements(
    call_ids: Sequence[str],
    settings: Optional[PruningSettings] = None,
) -> Dict[str, str]:
    """Placeholder replacement for every call id."""
    settings = settings or PruningSettings()
    return {call_id: settings.pruned_placeholder for call_id in call_ids}


def build_distill_replacements(
    ids: Any,
    distillation: Any,
    state: SessionState,
    settings: Optional[PruningSettings] = None,
) -> Dict[str, str]:
    """Pair each id with its distilled text (``distillation[i]`` for ``ids[i]``).

    Args:
        ids (Any): Numeric string ids from the prunable-tools list.
        distillation (Any): One distilled string per id.
        state (SessionState): Provides ``tool_id_list``.
        settings (Optional[PruningSettings]): Supplies the distilled prefix.

    Returns:
        Dict[str, str]: Replacement content per call id.

    Raises:
        InvalidPruneArgumentsError: Bad ids, missing or non-string
            distillation, or a count mismatch.
    """
    settings = settings or PruningSettings()
    resolve_tool_ids(ids, state)

    if not distillation or not isinstance(distillation, list):
        logger.debug("Distill tool called without distillation: %r", distillation)
        raise InvalidPruneArgumentsError(
            'Missing distillation. You must provide an array of strings (e.g., ["summary 1", "summary 2"]).'
        )
    if not all(isinstance(d, str) for d in distillation):
        logger.debug("Distill tool called with non-string distillation: %r", distillation)
        raise InvalidPruneArgumentsError("Invalid distillation. All distillation entries must be strings.")
    if len(ids) != len(distillation):
        raise InvalidPruneArgumentsError(
            f"Got {len(ids)} ids but {len(distillation)} distillation entries. "
            "Provide exactly one distillation per id."
        )

    replacements: Dict[str, str] = {}
    for raw, text in zip(ids, distillation):
        call_id = resolve_tool_ids([raw], state)[0]
        if call_id in replacements:
            raise InvalidPruneArgumentsError(
                f'Duplicate id "{raw.strip()}". Provide each id once with a single distillation.'
            )
        replacements[call_id] = f"{settings.distilled_prefix}{text}"
    return replacements


@dataclass
class RangeSelection:
    """A resolved conversation span.

    Attributes:
        start (MatchResult): Match for the first message.
        end (MatchResult): Match for the last message.
        tool_ids (List[str]): Tool call ids inside the span.
        message_ids (List[str]): Message ids inside the span.
        contents (List[str]): Text inside the span.
        estimated_tokens (int): Token estimate of ``contents``.
    """

    start: MatchResult
    end: MatchResult
    tool_ids: List[str] = field(default_factory=list)
    message_ids: List[str] = field(default_factory=list)
    contents: List[str] = field(default_factory=list)
    estimated_tokens: int = 0

    @property
    def fuzzy_matches(self) -> List[MatchResult]:
        """Boundaries that were resolved by fuzzy matching."""
        return [m for m in (self.start, self.end) if m.is_fuzzy]


def select_range(
    messages: Sequence[SessionMessage],
    start_string: str,
    end_string: str,
    compress_summaries: Sequence[CompressSummary] = (),
    fuzzy_config: Optional[FuzzyConfig] = None,
) -> RangeSelection:
    """Resolve a span by its first and last text.

    Args:
        messages (Sequence[SessionMessage]): Conversation in order.
        start_string (str): Text inside the first message of the span.
        end_string (str): Text inside the last message of the span.
        compress_summaries (Sequence[CompressSummary]): Earlier summaries.
        fuzzy_config (Optional[FuzzyConfig]): Match thresholds.

    Returns:
        RangeSelection: The span with everything it contains.

    Raises:
        AmbiguousMatchError: Either boundary is ambiguous.
        MatchNotFoundError: Either boundary is not found.
        InvalidRangeError: The end resolves before the start.
    """
    start = find_string_in_messages(messages, start_string, compress_summaries, START_STRING, fuzzy_config)
    end = find_string_in_messages(messages, end_string, compress_summaries, END_STRING, fuzzy_config)

    if end.message_index < start.message_index:
        raise InvalidRangeError(
            f"endString (message {end.message_index}) appears before startString "
            f"(message {start.message_index}). Swap them or pick different text.",
            start_index=start.message_index,
            end_index=end.message_index,
        )

    contents = collect_content_in_range(messages, start.message_index, end.message_index)
    selection = RangeSelection(
        start=start,
        end=end,
        tool_ids=collect_tool_ids_in_range(messages, start.message_index, end.message_index),
        message_ids=collect_message_ids_in_range(messages, start.message_index, end.message_index),
        contents=contents,
        estimated_tokens=estimate_contents_tokens(contents),
    )
    logger.info(
        "Selected messages %d..%d: %d messages, %d tool calls, ~%d tokens",
        start.message_index,
        end.message_index,
        len(selection.message_ids),
        len(selection.tool_ids),
        selection.estimated_tokens,
    )
    return selection
