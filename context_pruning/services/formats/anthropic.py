# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Anthropic Messages format.

Shape::

    {
        "system": "..." | [{"type": "text", "text": "..."}],
        "messages": [
            {"role": "user", "content": [
                {"type": "tool_result", "tool_use_id": "toolu_1", "content": "..."}
            ]}
        ]
    }

Tool results are content blocks nested inside user-role messages.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

from context_pruning.schemas.session import SessionState
from context_pruning.services.formats.base import (
    Body,
    FormatDescriptor,
    ToolOutput,
    append_system_fragment,
    normalize_id,
    tool_metadata,
)

logger = logging.getLogger(__name__)

TOOL_RESULT_BLOCK = "tool_result"


def iter_tool_result_blocks(messages: Any) -> Iterator[Dict[str, Any]]:
    """Yield ``tool_result`` blocks nested in user-role messages."""
    if not isinstance(messages, list):
        return
    for msg in messages:
        if not isinstance(msg, dict) or msg.get("role") != "user":
            continue
        content = msg.get("content")
        if not isinstance(content, list):
            continue
        for block in content:
            if isinstance(block, dict) and block.get("type") == TOOL_RESULT_BLOCK and block.get("tool_use_id"):
                yield block


def _text_block(text: str) -> Dict[str, Any]:
    return {"type": "text", "text": text}


class AnthropicFormat(FormatDescriptor):
    """Top-level ``system`` channel plus ``messages``, no inference config."""

    name = "anthropic"

    def detect(self, body: Body) -> bool:
        return (
            "system" in body
            and isinstance(body.get("messages"), list)
            and "inferenceConfig" not in body
        )

    def inject_system_message(self, body: Body, text: str) -> bool:
        return append_system_fragment(body, "system", text, _text_block)

    def extract_tool_outputs(self, body: Body, state: Optional[SessionState] = None) -> List[ToolOutput]:
        outputs: List[ToolOutput] = []
        for block in iter_tool_result_blocks(body.get("messages")):
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
        wanted = normalize_id(tool_id)
        replaced = False
        for block in iter_tool_result_blocks(body.get("messages")):
            if normalize_id(block["tool_use_id"]) == wanted:
                block["content"] = new_content
                replaced = True
        return replaced
