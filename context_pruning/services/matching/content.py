# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Flattened text projection of a session message, used for matching.

Best-effort: fields that are absent or not strings are skipped silently.
"""

from __future__ import annotations

import json
from typing import Any, List

from context_pruning.schemas.session import PartType, SessionMessage, ToolStatus


def stringify(value: Any) -> str:
    """Return ``value`` unchanged if it is a string, else its JSON form."""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def extract_message_content(msg: SessionMessage) -> str:
    """Concatenate the searchable text of a message, space separated.

    Covers text and reasoning parts, tool outputs (completed) or errors
    (error) followed by the tool input, compaction summaries, and subtask
    summaries plus results.

    Args:
        msg (SessionMessage): Message to project.

    Returns:
        str: Flattened text, each fragment preceded by a single space.
    """
    chunks: List[str] = []

    for part in msg.parts:
        if part.type in (PartType.TEXT, PartType.REASONING):
            if isinstance(part.text, str):
                chunks.append(part.text)

        elif part.type == PartType.TOOL:
            state = part.state
            if state is None:
                continue
            if state.status == ToolStatus.COMPLETED and isinstance(state.output, str):
                chunks.append(state.output)
            elif state.status == ToolStatus.ERROR and isinstance(state.error, str):
                chunks.append(state.error)
            if state.input:
                chunks.append(stringify(state.input))

        elif part.type == PartType.COMPACTION:
            if isinstance(part.summary, str):
                chunks.append(part.summary)

        elif part.type == PartType.SUBTASK:
            if isinstance(part.summary, str):
                chunks.append(part.summary)
            if isinstance(part.result, str):
                chunks.append(part.result)

    return "".join(" " + chunk for chunk in chunks)
