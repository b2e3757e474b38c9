# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Match engine: locate the single message a search string refers to.

Two phases:
  Phase 1  exact:  literal substring search.  One hit wins, several hits
                   fail as ambiguous.
  Phase 2  fuzzy:  partial-ratio scoring, only when there is no exact hit.
                   The best candidate must clear ``min_score`` and beat the
                   runner-up by at least ``min_gap``.

Compress summaries are searched before raw messages; a summary hit resolves
to its anchor message, and that message is not scored again on its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from rapidfuzz import fuzz, utils

from context_pruning.exceptions import AmbiguousMatchError, MatchNotFoundError
from context_pruning.schemas.session import CompressSummary, SessionMessage
from context_pruning.services.matching.content import extract_message_content
from context_pruning.services.settings import FuzzyConfig

logger = logging.getLogger(__name__)

START_STRING = "startString"
END_STRING = "endString"


class MatchType(str, Enum):
    """How a match was established."""

    EXACT = "exact"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class MatchResult:
    """A resolved message locator.

    Attributes:
        message_id (str): Identifier of the matched message.
        message_index (int): Position of the message in the conversation.
        score (float): 100 for exact matches, the partial-ratio score otherwise.
        match_type (MatchType): Whether the match was exact or fuzzy.
    """

    message_id: str
    message_index: int
    score: float
    match_type: MatchType

    @property
    def is_fuzzy(self) -> bool:
        return self.match_type == MatchType.FUZZY


def partial_ratio(needle: str, haystack: str) -> float:
    """Substring-tolerant similarity between ``needle`` and ``haystack`` (0-100).

    Both sides are lower-cased and stripped of punctuation before scoring,
    so whitespace and formatting drift do not count against a candidate.
    """
    return round(fuzz.partial_ratio(needle, haystack, processor=utils.default_process))


def _index_messages(messages: Sequence[SessionMessage]) -> Dict[str, int]:
    index: Dict[str, int] = {}
    for i, msg in enumerate(messages):
        index.setdefault(msg.id, i)
    return index


def _scan(
    messages: Sequence[SessionMessage],
    compress_summaries: Sequence[CompressSummary],
    score_text: Callable[[str], Optional[float]],
    match_type: MatchType,
) -> List[MatchResult]:
    """Score summaries then messages, one candidate per message id.

    ``score_text`` returns ``None`` for texts that are not candidates.
    """
    matches: List[MatchResult] = []
    seen: set[str] = set()
    positions = _index_messages(messages)

    for summary in compress_summaries:
        score = score_text(summary.summary)
        if score is None:
            continue
        anchor_index = positions.get(summary.anchor_message_id)
        if anchor_index is None or summary.anchor_message_id in seen:
            continue
        seen.add(summary.anchor_message_id)
        matches.append(
            MatchResult(
                message_id=summary.anchor_message_id,
                message_index=anchor_index,
                score=score,
                match_type=match_type,
            )
        )

    for i, msg in enumerate(messages):
        if msg.id in seen:
            continue
        score = score_text(extract_message_content(msg))
        if score is None:
            continue
        seen.add(msg.id)
        matches.append(MatchResult(message_id=msg.id, message_index=i, score=score, match_type=match_type))

    return matches


def find_exact_matches(
    messages: Sequence[SessionMessage],
    search_string: str,
    compress_summaries: Sequence[CompressSummary] = (),
) -> List[MatchResult]:
    """Find every message (or summary anchor) literally containing ``search_string``.

    Args:
        messages (Sequence[SessionMessage]): Conversation in order.
        search_string (str): Text to look for.
        compress_summaries (Sequence[CompressSummary]): Summaries searched
            before raw messages.

    Returns:
        List[MatchResult]: One exact result per distinct message id.
    """
    return _scan(
        messages,
        compress_summaries,
        lambda text: 100 if search_string in text else None,
        MatchType.EXACT,
    )


def find_fuzzy_matches(
    messages: Sequence[SessionMessage],
    search_string: str,
    compress_summaries: Sequence[CompressSummary] = (),
    min_score: float = 85,
) -> List[MatchResult]:
    """Find every message (or summary anchor) scoring at least ``min_score``.

    Args:
        messages (Sequence[SessionMessage]): Conversation in order.
        search_string (str): Text to look for.
        compress_summaries (Sequence[CompressSummary]): Summaries searched
            before raw messages.
        min_score (float): Score floor below which candidates are dropped.

    Returns:
        List[MatchResult]: Fuzzy results in scan order (not sorted).
    """

    def _score(text: str) -> Optional[float]:
        score = partial_ratio(search_string, text)
        return score if score >= min_score else None

    return _scan(messages, compress_summaries, _score, MatchType.FUZZY)


def find_string_in_messages(
    messages: Sequence[SessionMessage],
    search_string: str,
    compress_summaries: Sequence[CompressSummary] = (),
    string_type: str = START_STRING,
    fuzzy_config: Optional[FuzzyConfig] = None,
) -> MatchResult:
    """Resolve ``search_string`` to exactly one message.

    Uses exact matching first, then falls back to fuzzy matching with
    confidence thresholds.  Never guesses between tied candidates.

    Args:
        messages (Sequence[SessionMessage]): Conversation in order.
        search_string (str): Text identifying the message.
        compress_summaries (Sequence[CompressSummary]): Earlier summaries;
            a hit resolves to the summary's anchor message.
        string_type (str): Which range boundary is being resolved, used in
            error messages and logs.
        fuzzy_config (Optional[FuzzyConfig]): Thresholds. Defaults to
            ``FuzzyConfig()``.

    Returns:
        MatchResult: The unique match. ``match_type`` tells the caller
            whether the resolution was fuzzy, with its score.

    Raises:
        AmbiguousMatchError: Several exact hits, or the fuzzy runner-up is
            within ``min_gap`` of the best candidate.
        MatchNotFoundError: No exact hit and no fuzzy candidate above
            ``min_score``.
    """
    config = fuzzy_config or FuzzyConfig()

    exact = find_exact_matches(messages, search_string, compress_summaries)
    if len(exact) == 1:
        return exact[0]
    if len(exact) > 1:
        raise AmbiguousMatchError(
            f"Found multiple exact matches for {string_type}. "
            f"Provide more surrounding context to uniquely identify the intended match.",
            search_string=search_string,
            string_type=string_type,
            scores=[m.score for m in exact],
        )

    fuzzy = find_fuzzy_matches(messages, search_string, compress_summaries, config.min_score)
    if not fuzzy:
        raise MatchNotFoundError(
            f"{string_type} not found in conversation (exact or fuzzy). "
            f"Make sure the string exists and is spelled correctly.",
            search_string=search_string,
            string_type=string_type,
        )

    fuzzy.sort(key=lambda m: m.score, reverse=True)
    best = fuzzy[0]
    if len(fuzzy) > 1:
        second = fuzzy[1]
        if best.score - second.score < config.min_gap:
            raise AmbiguousMatchError(
                f"Ambiguous fuzzy match for {string_type}: two candidates scored similarly "
                f"({best.score:g}% vs {second.score:g}%). Provide more unique text to disambiguate.",
                search_string=search_string,
                string_type=string_type,
                scores=[best.score, second.score],
            )

    logger.info(
        "Fuzzy matched %s with %s%% confidence at message index %d",
        string_type,
        best.score,
        best.message_index,
    )
    return best
