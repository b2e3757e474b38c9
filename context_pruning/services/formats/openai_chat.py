# Copyright (c) 2026 Heureum AI. All rights reserved.

"""OpenAI Chat Completions format.

System context lives in ``role: "system"`` messages inside ``messages``.
Tool results are ``role: "tool"`` messages keyed by ``tool_call_id``.
Some gateways forward Anthropic-style ``tool_result`` blocks through this
shape, so those are recognised as well.
"""

from __future__ import annotations

from typing import List, Optional

from context_pruning.schemas.session import SessionState
from context_pruning.services.formats.anthropic import iter_tool_result_blocks
from context_pruning.services.formats.base import (
    Body,
    FormatDescriptor,
    ToolOutput,
    normalize_id,
    tool_metadata,
)

_SYSTEM_ROLES = frozenset({"system", "developer"})


class OpenAIChatFormat(FormatDescriptor):
    """Only a ``messages`` array; no top-level system channel."""

    name = "openai-chat"

    def detect(self, body: Body) -> bool:
        return isinstance(body.get("messages"), list)

    def inject_system_message(self, body: Body, text: str) -> bool:
        messages = body.get("messages")
        if not isinstance(messages, list):
            return False

        # Keep leading system messages contiguous.
        insert_at = 0
        for i, msg in enumerate(messages):
            if isinstance(msg, dict) and msg.get("role") in _SYSTEM_ROLES:
                insert_at = i + 1
            else:
                break

        messages.insert(insert_at, {"role": "system", "content": text})
        return True

    def extract_tool_outputs(self, body: Body, state: Optional[SessionState] = None) -> List[ToolOutput]:
        messages = body.get("messages")
        if not isinstance(messages, list):
            return []

        outputs: List[ToolOutput] = []
        for msg in messages:
            if isinstance(msg, dict) and msg.get("role") == "tool" and msg.get("tool_call_id"):
                call_id = normalize_id(msg["tool_call_id"])
                outputs.append(
                    ToolOutput(id=call_id, content=msg.get("content"), metadata=tool_metadata(call_id, state))
                )
        for block in iter_tool_result_blocks(messages):
            call_id = normalize_id(block["tool_use_id"])
            outputs.append(
                ToolOutput(id=call_id, content=block.get("content"), metadata=tool_metadata(call_id, state))
            )
        return outputs

    def replace_tool_output(
        self,
        body: Body,
        tool_id: str,
        new_content: str,
        state: Optional[SessionState] = None,
    ) -> bool:
        messages = body.get("messages")
        if not isinstance(messages, list):
            return False

        wanted = normalize_id(tool_id)
        replaced = False
        for msg in messages:
            if (
                isinstance(msg, dict)
                and msg.get("role") == "tool"
                and msg.get("tool_call_id")
                and normalize_id(msg["tool_call_id"]) == wanted
            ):
                msg["content"] = new_content
                replaced = True
        for block in iter_tool_result_blocks(messages):
            if normalize_id(block["tool_use_id"]) == wanted:
                block["content"] = new_content
                replaced = True
        return replaced
