# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Pruning settings.

Per-call tuning knobs.  Defaults come from the environment-driven
``context_pruning.config.settings`` so a deployment can shift them without
code changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from context_pruning.config import settings as _env


@dataclass(frozen=True)
class FuzzyConfig:
    """Confidence thresholds for fuzzy message matching.

    Attributes:
        min_score (float): Minimum partial-ratio score (0-100) to accept.
        min_gap (float): Minimum gap between best and second-best scores.
    """

    min_score: float = field(default_factory=lambda: _env.FUZZY_MIN_SCORE)
    min_gap: float = field(default_factory=lambda: _env.FUZZY_MIN_GAP)


@dataclass(frozen=True)
class ToolPruningConfig:
    """Selective tool pruning via allow/deny glob patterns.

    When both are ``None``, all tools are prunable.
    When ``allow`` is set, only matching tools are prunable.
    When ``deny`` is set, matching tools are never pruned.
    ``deny`` takes precedence over ``allow``.

    Patterns use ``fnmatch`` syntax (e.g. ``"bash"``, ``"todo*"``).

    Attributes:
        allow (Optional[List[str]]): Glob patterns of tools that may be pruned.
        deny (Optional[List[str]]): Glob patterns of tools that must not be pruned.
    """

    allow: Optional[List[str]] = None
    deny: Optional[List[str]] = field(default_factory=lambda: list(_env.PROTECTED_TOOLS))


@dataclass(frozen=True)
class PruningSettings:
    """All pruning-related configuration in one place.

    Attributes:
        fuzzy (FuzzyConfig): Match engine thresholds.
        tool_pruning (ToolPruningConfig): Protected tool patterns.
        pruned_placeholder (str): Replacement text for pruned outputs.
        distilled_prefix (str): Prefix placed before distilled outputs.
        inject_prunable_tools (bool): Whether the prunable-tools list is
            injected into the system channel.
    """

    fuzzy: FuzzyConfig = field(default_factory=FuzzyConfig)
    tool_pruning: ToolPruningConfig = field(default_factory=ToolPruningConfig)
    pruned_placeholder: str = field(default_factory=lambda: _env.PRUNED_TOOL_PLACEHOLDER)
    distilled_prefix: str = field(default_factory=lambda: _env.DISTILLED_TOOL_PREFIX)
    inject_prunable_tools: bool = field(default_factory=lambda: _env.INJECT_PRUNABLE_TOOLS)
