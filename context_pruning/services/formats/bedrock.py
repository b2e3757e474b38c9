# Copyright (c) 2026 Heureum AI. All rights reserved.

"""AWS Bedrock Converse format.

Shape::

    {
        "system": [{"text": "..."}],
        "inferenceConfig": {...},
        "messages": [
            {"role": "user", "content": [
                {"toolResult": {"toolUseId": "t1", "content": [{"text": "..."}], "status": "success"}}
            ]}
        ]
    }
"""

from __future__ import annotations

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


def _iter_tool_results(messages: Any) -> Iterator[Dict[str, Any]]:
    if not isinstance(messages, list):
        return
    for msg in messages:
        if not isinstance(msg, dict) or msg.get("role") != "user":
            continue
        content = msg.get("content")
        if not isinstance(content, list):
            continue
        for block in content:
            result = block.get("toolResult") if isinstance(block, dict) else None
            if isinstance(result, dict) and result.get("toolUseId"):
                yield result


class BedrockFormat(FormatDescriptor):
    """Top-level ``system`` channel plus an ``inferenceConfig`` block."""

    name = "bedrock"

    def detect(self, body: Body) -> bool:
        # Converse bodies without ``system`` fall through to openai-chat.
        return "system" in body and "inferenceConfig" in body

    def inject_system_message(self, body: Body, text: str) -> bool:
        return append_system_fragment(body, "system", text, lambda t: {"text": t})

    def extract_tool_outputs(self, body: Body, state: Optional[SessionState] = None) -> List[ToolOutput]:
        outputs: List[ToolOutput] = []
        for result in _iter_tool_results(body.get("messages")):
            call_id = normalize_id(result["toolUseId"])
            outputs.append(ToolOutput(id=call_id, content=result.get("content"), metadata=tool_metadata(call_id, state)))
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
        for result in _iter_tool_results(body.get("messages")):
            if normalize_id(result["toolUseId"]) == wanted:
                result["content"] = [{"text": new_content}]
                replaced = True
        return replaced
