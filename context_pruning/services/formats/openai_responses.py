# Copyright (c) 2026 Heureum AI. All rights reserved.

"""OpenAI Responses format.

Based on https://www.openresponses.org/specification

The conversation is a flat ``input`` list of items, or a single string that
stands for one user message.  Tool results are
``function_call_output`` items keyed by ``call_id`` with their text in
``output``.  System context is added as a system message item placed after
any leading system/developer items.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

from context_pruning.schemas.session import SessionState
from context_pruning.services.formats.base import (
    Body,
    FormatDescriptor,
    ToolOutput,
    normalize_id,
    tool_metadata,
)

FUNCTION_CALL_OUTPUT = "function_call_output"

_SYSTEM_ROLES = frozenset({"system", "developer"})


def _iter_function_outputs(items: Any) -> Iterator[Dict[str, Any]]:
    if not isinstance(items, list):
        return
    for item in items:
        if isinstance(item, dict) and item.get("type") == FUNCTION_CALL_OUTPUT and item.get("call_id"):
            yield item


def _user_message(text: str) -> Dict[str, Any]:
    return {"type": "message", "role": "user", "content": [{"type": "input_text", "text": text}]}


class OpenAIResponsesFormat(FormatDescriptor):
    """Flat ``input`` item list (or string shorthand)."""

    name = "openai-responses"

    def detect(self, body: Body) -> bool:
        return isinstance(body.get("input"), (str, list))

    def inject_system_message(self, body: Body, text: str) -> bool:
        items = body.get("input")
        if isinstance(items, str):
            # Expand the shorthand so the system item can sit beside it.
            items = body["input"] = [_user_message(items)]
        if not isinstance(items, list):
            return False

        insert_at = 0
        for i, item in enumerate(items):
            is_message = isinstance(item, dict) and item.get("type", "message") == "message"
            if is_message and item.get("role") in _SYSTEM_ROLES:
                insert_at = i + 1
            else:
                break

        items.insert(
            insert_at,
            {
                "type": "message",
                "role": "system",
                "content": [{"type": "input_text", "text": text}],
            },
        )
        return True

    def extract_tool_outputs(self, body: Body, state: Optional[SessionState] = None) -> List[ToolOutput]:
        outputs: List[ToolOutput] = []
        for item in _iter_function_outputs(body.get("input")):
            call_id = normalize_id(item["call_id"])
            outputs.append(ToolOutput(id=call_id, content=item.get("output"), metadata=tool_metadata(call_id, state)))
        return outputs

    def replace_tool_output(
        self,
        body: Body,
        tool_id: str,
        new_content: str,
        state: Optional[SessionState] = None,
    ) -> bool:
        wanted = normalize_id(tool_id)
        replaced = False
        for item in _iter_function_outputs(body.get("input")):
            if normalize_id(item["call_id"]) == wanted:
                item["output"] = new_content
                replaced = True
        return replaced
