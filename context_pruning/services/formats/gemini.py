# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Google Gemini format.

The conversation is a ``contents`` list of ``{role, parts}`` entries.  System
context lives in ``systemInstruction.parts``.  Tool results are
``functionResponse`` parts; only responses that carry an ``id`` can be
addressed.
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


def _iter_function_responses(contents: Any) -> Iterator[Dict[str, Any]]:
    if not isinstance(contents, list):
        return
    for entry in contents:
        parts = entry.get("parts") if isinstance(entry, dict) else None
        if not isinstance(parts, list):
            continue
        for part in parts:
            response = part.get("functionResponse") if isinstance(part, dict) else None
            if isinstance(response, dict) and response.get("id"):
                yield response


class GeminiFormat(FormatDescriptor):
    """Top-level ``contents`` array."""

    name = "gemini"

    def detect(self, body: Body) -> bool:
        return isinstance(body.get("contents"), list)

    def inject_system_message(self, body: Body, text: str) -> bool:
        instruction = body.get("systemInstruction")
        if instruction is None:
            instruction = {"parts": []}
        elif isinstance(instruction, str):
            instruction = {"parts": [{"text": instruction}]}
        elif not isinstance(instruction, dict):
            return False

        parts = instruction.get("parts")
        if parts is None:
            parts = instruction["parts"] = []
        elif not isinstance(parts, list):
            return False

        parts.append({"text": text})
        body["systemInstruction"] = instruction
        return True

    def extract_tool_outputs(self, body: Body, state: Optional[SessionState] = None) -> List[ToolOutput]:
        outputs: List[ToolOutput] = []
        for response in _iter_function_responses(body.get("contents")):
            call_id = normalize_id(response["id"])
            metadata = tool_metadata(call_id, state)
            if "tool_name" not in metadata and response.get("name"):
                metadata["tool_name"] = response["name"]
            outputs.append(ToolOutput(id=call_id, content=response.get("response"), metadata=metadata))
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
        for response in _iter_function_responses(body.get("contents")):
            if normalize_id(response["id"]) == wanted:
                response["response"] = {"output": new_content}
                replaced = True
        return replaced
