# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Range collection over an inclusive span of message indices.

Pure projections.  ``start_index <= end_index`` and both indices in range
are preconditions of every function here.
"""

from __future__ import annotations

from typing import List, Sequence

from context_pruning.schemas.session import PartType, SessionMessage, ToolStatus
from context_pruning.services.matching.content import stringify


def collect_tool_ids_in_range(
    messages: Sequence[SessionMessage],
    start_index: int,
    end_index: int,
) -> List[str]:
    """Tool call ids inside the span, first-seen order, without duplicates.

    Args:
        messages (Sequence[SessionMessage]): Conversation in order.
        start_index (int): First message index (inclusive).
        end_index (int): Last message index (inclusive).

    Returns:
        List[str]: Unique call identifiers.
    """
    tool_ids: List[str] = []
    seen: set[str] = set()

    for msg in messages[start_index : end_index + 1]:
        for part in msg.parts:
            if part.type == PartType.TOOL and part.call_id and part.call_id not in seen:
                seen.add(part.call_id)
                tool_ids.append(part.call_id)

    return tool_ids


def collect_message_ids_in_range(
    messages: Sequence[SessionMessage],
    start_index: int,
    end_index: int,
) -> List[str]:
    """Message ids inside the span, first-seen order, without duplicates."""
    message_ids: List[str] = []
    for msg in messages[start_index : end_index + 1]:
        if msg.id not in message_ids:
            message_ids.append(msg.id)
    return message_ids


def collect_content_in_range(
    messages: Sequence[SessionMessage],
    start_index: int,
    end_index: int,
) -> List[str]:
    """All text in the span, used for size estimation.

    Collects text parts, then for each tool part its input followed by its
    output (completed) or error (error), stringified when not already text.

    Args:
        messages (Sequence[SessionMessage]): Conversation in order.
        start_index (int): First message index (inclusive).
        end_index (int): Last message index (inclusive).

    Returns:
        List[str]: Text fragments in encounter order.
    """
    contents: List[str] = []

    for msg in messages[start_index : end_index + 1]:
        for part in msg.parts:
            if part.type == PartType.TEXT:
                if isinstance(part.text, str):
                    contents.append(part.text)
            elif part.type == PartType.TOOL and part.state is not None:
                state = part.state
                if state.input:
                    contents.append(stringify(state.input))
                if state.status == ToolStatus.COMPLETED and state.output:
                    contents.append(stringify(state.output))
                elif state.status == ToolStatus.ERROR and state.error:
                    contents.append(stringify(state.error))

    return contents
