# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Request mutator: apply pruning to an outbound request body in place.

Steps:
  1. Pick the format descriptor (unknown formats abort the whole call).
  2. Inject the context text into the format's system channel.
  3. Replace each requested tool output.  A miss is recorded and the batch
     carries on.
"""

from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional

from context_pruning.schemas.session import SessionState
from context_pruning.services.formats.base import Body
from context_pruning.services.formats.registry import FormatRegistry, default_registry
from context_pruning.services.prompts.base import build_injection_text, render_prunable_tools
from context_pruning.services.settings import PruningSettings, ToolPruningConfig

logger = logging.getLogger(__name__)


class ReplacementStatus(str, Enum):
    """Per-id replacement outcome.

    Attributes:
        REPLACED (str): The tool result content was overwritten.
        NOT_APPLICABLE (str): No tool result with that id is in the body.
        PROTECTED (str): The tool is excluded from pruning by configuration.
    """

    REPLACED = "replaced"
    NOT_APPLICABLE = "not_applicable"
    PROTECTED = "protected"


@dataclass
class PruneOutcome:
    """Result of one ``apply_pruning`` call.

    Attributes:
        format_name (str): Name of the descriptor used.
        injected (bool): Whether the context text was injected.
        results (Dict[str, ReplacementStatus]): Outcome per requested id.
    """

    format_name: str
    injected: bool
    results: Dict[str, ReplacementStatus] = field(default_factory=dict)

    @property
    def succeeded(self) -> Dict[str, bool]:
        """Per-id success flags."""
        return {tool_id: status == ReplacementStatus.REPLACED for tool_id, status in self.results.items()}

    @property
    def replaced_ids(self) -> List[str]:
        return [tool_id for tool_id, status in self.results.items() if status == ReplacementStatus.REPLACED]

    @property
    def missed_ids(self) -> List[str]:
        return [tool_id for tool_id, status in self.results.items() if status != ReplacementStatus.REPLACED]


def is_tool_prunable(tool_name: Optional[str], config: ToolPruningConfig) -> bool:
    """Check whether a tool's output may be pruned.

    ``deny`` takes precedence over ``allow``; patterns are case-insensitive
    ``fnmatch`` globs.

    Args:
        tool_name (Optional[str]): Name of the tool, or ``None`` if unknown.
        config (ToolPruningConfig): Allow/deny pattern configuration.

    Returns:
        bool: ``True`` if the tool result may be pruned.
    """
    if not config.deny and not config.allow:
        return True

    name = (tool_name or "").strip().lower()

    if config.deny:
        for pattern in config.deny:
            if fnmatch.fnmatch(name, pattern.strip().lower()):
                return False

    if config.allow:
        for pattern in config.allow:
            if fnmatch.fnmatch(name, pattern.strip().lower()):
                return True
        return False

    return True


def apply_pruning(
    body: Body,
    injection_text: Optional[str],
    replacements: Mapping[str, str],
    state: Optional[SessionState] = None,
    *,
    registry: Optional[FormatRegistry] = None,
    tool_pruning: Optional[ToolPruningConfig] = None,
) -> PruneOutcome:
    """Inject context text and replace tool outputs in ``body``.

    Args:
        body (Body): Outbound request body, mutated in place.
        injection_text (Optional[str]): System-context text; skipped when
            empty.
        replacements (Mapping[str, str]): New content per tool call id.
        state (Optional[SessionState]): Tool metadata used by descriptors and
            for protected-tool checks.
        registry (Optional[FormatRegistry]): Descriptor registry. Defaults to
            the built-in one.
        tool_pruning (Optional[ToolPruningConfig]): When given, tools whose
            remembered name is not prunable are left alone.

    Returns:
        PruneOutcome: Format used, injection flag, and per-id results.

    Raises:
        UnknownFormatError: No descriptor recognised the body.
    """
    descriptor = (registry or default_registry).detect(body)

    injected = False
    if injection_text:
        injected = descriptor.inject_system_message(body, injection_text)
        if not injected:
            logger.warning("Could not inject context into %s request: no system channel", descriptor.name)

    outcome = PruneOutcome(format_name=descriptor.name, injected=injected)

    for tool_id, new_content in replacements.items():
        if tool_pruning is not None and state is not None:
            meta = state.get_tool_metadata(tool_id)
            if meta is not None and not is_tool_prunable(meta.tool, tool_pruning):
                logger.warning("Refusing to prune protected tool %s (%s)", meta.tool, tool_id)
                outcome.results[tool_id] = ReplacementStatus.PROTECTED
                continue

        if descriptor.replace_tool_output(body, tool_id, new_content, state):
            outcome.results[tool_id] = ReplacementStatus.REPLACED
        else:
            logger.debug("No tool result for %s in %s request", tool_id, descriptor.name)
            outcome.results[tool_id] = ReplacementStatus.NOT_APPLICABLE

    if replacements:
        logger.info(
            "Pruned %d/%d tool outputs in %s request",
            len(outcome.replaced_ids),
            len(replacements),
            descriptor.name,
        )
    return outcome


def prune_request(
    body: Body,
    state: SessionState,
    replacements: Mapping[str, str],
    settings: Optional[PruningSettings] = None,
    *,
    registry: Optional[FormatRegistry] = None,
) -> PruneOutcome:
    """Prune a request using session state and the numbered tool list.

    Replacements are applied first, so the injected ``<prunable-tools>``
    block lists only outputs that are still intact.

    Args:
        body (Body): Outbound request body, mutated in place.
        state (SessionState): Session tool metadata and numbering.
        replacements (Mapping[str, str]): New content per tool call id.
        settings (Optional[PruningSettings]): Pruning configuration.
        registry (Optional[FormatRegistry]): Descriptor registry.

    Returns:
        PruneOutcome: Format used, injection flag, and per-id results.

    Raises:
        UnknownFormatError: No descriptor recognised the body.
    """
    settings = settings or PruningSettings()
    registry = registry or default_registry

    outcome = apply_pruning(
        body,
        None,
        replacements,
        state,
        registry=registry,
        tool_pruning=settings.tool_pruning,
    )

    if settings.inject_prunable_tools:
        descriptor = registry.detect(body)
        outputs = [
            output
            for output in descriptor.extract_tool_outputs(body, state)
            if is_tool_prunable(output.metadata.get("tool_name"), settings.tool_pruning)
        ]
        listing = render_prunable_tools(
            outputs,
            state,
            pruned_markers=(settings.pruned_placeholder, settings.distilled_prefix),
        )
        outcome.injected = descriptor.inject_system_message(body, build_injection_text(listing))

    return outcome
