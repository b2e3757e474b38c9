# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Context text injected into the system channel of outbound requests.

The ``<prunable-tools>`` block numbers every tool result still present in the
request so the model can refer to it by index when calling the prune or
distill tools.  Indices are positions in ``SessionState.tool_id_list`` and
stay stable across requests.
"""

from typing import Any, Dict, Iterable, List, Optional

from context_pruning.schemas.session import SessionState
from context_pruning.services.formats.base import ToolOutput, normalize_id

PRUNABLE_TOOLS_OPEN = "<prunable-tools>"
PRUNABLE_TOOLS_CLOSE = "</prunable-tools>"
MAX_PARAM_CHARS = 60

# Parameter keys that best identify what a tool call touched.
_SUMMARY_KEYS = ("filePath", "file_path", "path", "command", "pattern", "url", "query", "description")

PRUNING_CONTEXT_PROMPT = """
<context_management>
Tool results listed in <prunable-tools> can be removed from the conversation
once you no longer need them. Use the prune tool to drop outputs entirely, or
the distill tool to replace them with a short summary of what matters.
Refer to results by the number shown before each entry.
</context_management>
"""


def _summarize_parameters(parameters: Dict[str, Any]) -> str:
    for key in _SUMMARY_KEYS:
        value = parameters.get(key)
        if isinstance(value, str) and value:
            if len(value) > MAX_PARAM_CHARS:
                value = value[: MAX_PARAM_CHARS - 3] + "..."
            return value
    return ""


def render_prunable_tools(
    outputs: Iterable[ToolOutput],
    state: SessionState,
    pruned_markers: Iterable[str] = (),
) -> Optional[str]:
    """Render the numbered list of prunable tool results.

    Args:
        outputs (Iterable[ToolOutput]): Tool results found in the request.
        state (SessionState): Provides stable numbering and tool metadata.
        pruned_markers (Iterable[str]): Prefixes that mark an output as
            already pruned; such outputs are left out.

    Returns:
        Optional[str]: The block, or ``None`` when nothing is listed.
    """
    markers = tuple(m for m in pruned_markers if m)
    numbering = {normalize_id(call_id): n for n, call_id in enumerate(state.tool_id_list)}

    lines: List[str] = []
    for output in outputs:
        if markers and isinstance(output.content, str) and output.content.startswith(markers):
            continue
        n = numbering.get(output.id)
        if n is None:
            continue
        name = output.metadata.get("tool_name") or "unknown"
        detail = _summarize_parameters(output.metadata.get("parameters") or {})
        lines.append(f"{n}: {name}, {detail}" if detail else f"{n}: {name}")

    if not lines:
        return None
    return "\n".join([PRUNABLE_TOOLS_OPEN, *lines, PRUNABLE_TOOLS_CLOSE])


def build_injection_text(prunable_tools: Optional[str]) -> str:
    """Full system-context text: the instructions plus the numbered list."""
    if not prunable_tools:
        return PRUNING_CONTEXT_PROMPT.strip()
    return f"{PRUNING_CONTEXT_PROMPT.strip()}\n\n{prunable_tools}"
