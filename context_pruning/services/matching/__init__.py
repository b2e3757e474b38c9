# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Message matching: text extraction, exact/fuzzy resolution, range collection.

Usage:

    start = find_string_in_messages(messages, "first line", summaries, "startString")
    end = find_string_in_messages(messages, "last line", summaries, "endString")
    tool_ids = collect_tool_ids_in_range(messages, start.message_index, end.message_index)
"""

from context_pruning.services.matching.content import extract_message_content
from context_pruning.services.matching.engine import (
    END_STRING,
    START_STRING,
    MatchResult,
    MatchType,
    find_exact_matches,
    find_fuzzy_matches,
    find_string_in_messages,
    partial_ratio,
)
from context_pruning.services.matching.ranges import (
    collect_content_in_range,
    collect_message_ids_in_range,
    collect_tool_ids_in_range,
)

__all__ = [
    "END_STRING",
    "START_STRING",
    "MatchResult",
    "MatchType",
    "extract_message_content",
    "find_exact_matches",
    "find_fuzzy_matches",
    "find_string_in_messages",
    "partial_ratio",
    "collect_content_in_range",
    "collect_message_ids_in_range",
    "collect_tool_ids_in_range",
]
