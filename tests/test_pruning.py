# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Tests for prune/distill argument handling and compress range selection."""

import pytest
from context_pruning.exceptions import (
    AmbiguousMatchError,
    InvalidPruneArgumentsError,
    InvalidRangeError,
    MatchNotFoundError,
)
from context_pruning.schemas.session import CompressSummary
from context_pruning.services.matching import MatchType
from context_pruning.services.pruning import (
    build_distill_replacements,
    build_prune_replacements,
    resolve_tool_ids,
    select_range,
)
from context_pruning.services.settings import PruningSettings

# ---------------------------------------------------------------------------
# resolve_tool_ids
# ---------------------------------------------------------------------------


class TestResolveToolIds:
    """Tests for numeric id resolution against the prunable-tools list."""

    def test_maps_indices(self, session_state):
        """Verify numeric ids map to call ids in argument order."""
        assert resolve_tool_ids(["2", "0"], session_state) == ["toolu_789", "toolu_123"]

    def test_deduplicates(self, session_state):
        """Verify repeated ids are resolved once."""
        assert resolve_tool_ids(["1", " 1 "], session_state) == ["toolu_456"]

    @pytest.mark.parametrize("ids", [None, [], "0"])
    def test_missing_ids(self, session_state, ids):
        """Verify missing or non-list ids are rejected."""
        with pytest.raises(InvalidPruneArgumentsError, match="Missing ids"):
            resolve_tool_ids(ids, session_state)

    def test_blank_id(self, session_state):
        """Verify blank strings are rejected."""
        with pytest.raises(InvalidPruneArgumentsError, match="Invalid ids"):
            resolve_tool_ids(["0", "  "], session_state)

    def test_non_numeric_id(self, session_state):
        """Verify raw call ids are rejected in favour of list numbers."""
        with pytest.raises(InvalidPruneArgumentsError, match="Invalid id"):
            resolve_tool_ids(["toolu_123"], session_state)

    def test_out_of_range(self, session_state):
        """Verify ids beyond the list are rejected."""
        with pytest.raises(InvalidPruneArgumentsError, match="Unknown id 3"):
            resolve_tool_ids(["3"], session_state)


# ---------------------------------------------------------------------------
# Replacement builders
# ---------------------------------------------------------------------------


class TestReplacementBuilders:
    """Tests for build_prune_replacements and build_distill_replacements."""

    def test_prune_placeholder(self):
        """Verify every call id maps to the configured placeholder."""
        settings = PruningSettings(pruned_placeholder="[gone]")
        assert build_prune_replacements(["a", "b"], settings) == {"a": "[gone]", "b": "[gone]"}

    def test_distill_positional(self, session_state):
        """Verify distillation[i] pairs with ids[i] and carries the prefix."""
        settings = PruningSettings(distilled_prefix="[distilled] ")
        result = build_distill_replacements(["1", "0"], ["tests pass", "app prints hello"], session_state, settings)
        assert result == {
            "toolu_456": "[distilled] tests pass",
            "toolu_123": "[distilled] app prints hello",
        }

    def test_distill_missing_distillation(self, session_state):
        """Verify an empty distillation list is rejected."""
        with pytest.raises(InvalidPruneArgumentsError, match="Missing distillation"):
            build_distill_replacements(["0"], [], session_state)

    def test_distill_non_string(self, session_state):
        """Verify non-string distillation entries are rejected."""
        with pytest.raises(InvalidPruneArgumentsError, match="All distillation entries must be strings"):
            build_distill_replacements(["0"], [{"text": "x"}], session_state)

    def test_distill_count_mismatch(self, session_state):
        """Verify ids and distillation must have the same length."""
        with pytest.raises(InvalidPruneArgumentsError, match="2 ids but 1"):
            build_distill_replacements(["0", "1"], ["only one"], session_state)

    def test_distill_duplicate_ids(self, session_state):
        """Verify the same id twice is rejected instead of keeping one distillation."""
        with pytest.raises(InvalidPruneArgumentsError, match='Duplicate id "0"'):
            build_distill_replacements(["0", " 0"], ["first", "second"], session_state)

    def test_distill_validates_ids_first(self, session_state):
        """Verify bad ids are reported before distillation problems."""
        with pytest.raises(InvalidPruneArgumentsError, match="Missing ids"):
            build_distill_replacements([], None, session_state)


# ---------------------------------------------------------------------------
# select_range
# ---------------------------------------------------------------------------


class TestSelectRange:
    """Tests for compress range selection."""

    def test_resolves_span(self, conversation):
        """Verify both ends resolve and the span contents are collected."""
        selection = select_range(conversation, "Reading it now", "settings file is missing")

        assert selection.start.message_id == "m2"
        assert selection.end.message_id == "m4"
        assert selection.message_ids == ["m2", "m3", "m4"]
        assert selection.tool_ids == ["call_a", "call_b"]
        assert "FileNotFoundError: settings.toml" in selection.contents
        assert selection.estimated_tokens > 0
        assert selection.fuzzy_matches == []

    def test_single_message_span(self, conversation):
        """Verify start and end may resolve to the same message."""
        selection = select_range(conversation, "def load_config", "Reading it now")
        assert selection.message_ids == ["m2"]
        assert selection.tool_ids == ["call_a"]

    def test_end_before_start(self, conversation):
        """Verify an end preceding the start is rejected."""
        with pytest.raises(InvalidRangeError) as exc_info:
            select_range(conversation, "settings file is missing", "config loader")
        assert exc_info.value.start_index == 3
        assert exc_info.value.end_index == 0

    def test_fuzzy_boundary_reported(self, conversation):
        """Verify a fuzzy boundary is surfaced on the selection."""
        selection = select_range(conversation, "Please raed the config loader", "settings file is missing")
        assert selection.start.message_id == "m1"
        assert selection.start.match_type == MatchType.FUZZY
        assert selection.fuzzy_matches == [selection.start]

    def test_summary_anchor(self, conversation):
        """Verify summaries resolve to their anchor when selecting ranges."""
        summaries = [CompressSummary(anchorMessageId="m3", summary="[compressed] investigated missing settings")]
        selection = select_range(conversation, "investigated missing settings", "settings file is missing", summaries)
        assert selection.message_ids == ["m3", "m4"]

    def test_boundary_errors_propagate(self, conversation):
        """Verify match failures surface unchanged."""
        with pytest.raises(MatchNotFoundError):
            select_range(conversation, "zzzz qqqq xxxx", "settings file is missing")
        with pytest.raises(AmbiguousMatchError):
            select_range(conversation, "settings", "settings file is missing")
