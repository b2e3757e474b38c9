# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Shared test fixtures for the context-pruning test suite."""

from typing import Any, Dict, List, Optional

import pytest
from context_pruning.schemas.session import (
    CompressSummary,
    MessageInfo,
    Part,
    SessionMessage,
    SessionState,
    ToolState,
)


# ---------------------------------------------------------------------------
# Part / Message factories
# ---------------------------------------------------------------------------


def text_part(text: Any, part_type: str = "text") -> Part:
    """Create a text (or reasoning) part."""
    return Part(type=part_type, text=text)


def tool_part(
    call_id: str,
    output: Any = None,
    status: str = "completed",
    input: Any = None,
    error: Any = None,
    tool: str = "read",
) -> Part:
    """Create a tool part with its state sub-record."""
    return Part(
        type="tool",
        callID=call_id,
        tool=tool,
        state=ToolState(status=status, input=input, output=output, error=error),
    )


def message(message_id: str, *parts: Part, role: str = "assistant") -> SessionMessage:
    """Create a session message from parts."""
    return SessionMessage(info=MessageInfo(id=message_id, role=role), parts=list(parts))


@pytest.fixture
def make_message():
    """Factory fixture for creating SessionMessage instances."""
    return message


@pytest.fixture
def conversation() -> List[SessionMessage]:
    """A small conversation with text, tool, and error parts."""
    return [
        message("m1", text_part("Please read the config loader"), role="user"),
        message(
            "m2",
            text_part("Reading it now"),
            tool_part("call_a", output="def load_config(path): ...", input={"filePath": "config.py"}),
        ),
        message(
            "m3",
            tool_part("call_b", status="error", error="FileNotFoundError: settings.toml", input={"filePath": "settings.toml"}),
        ),
        message("m4", text_part("The settings file is missing"), role="assistant"),
    ]


@pytest.fixture
def summary_factory():
    """Factory fixture for creating CompressSummary instances."""

    def _factory(anchor: str, summary: str) -> CompressSummary:
        return CompressSummary(anchorMessageId=anchor, summary=summary)

    return _factory


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------


@pytest.fixture
def session_state() -> SessionState:
    """Session state remembering three tool calls."""
    state = SessionState()
    state.remember_tool("toolu_123", "read", {"filePath": "src/app.py"})
    state.remember_tool("toolu_456", "bash", {"command": "pytest -q"})
    state.remember_tool("toolu_789", "todowrite", {"todos": []})
    return state


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


@pytest.fixture
def anthropic_body() -> Dict[str, Any]:
    """Anthropic Messages request with one tool round-trip."""
    return {
        "model": "claude-sonnet-4",
        "max_tokens": 1024,
        "system": "You are a helpful assistant",
        "messages": [
            {"role": "user", "content": "Read app.py"},
            {
                "role": "assistant",
                "content": [{"type": "tool_use", "id": "toolu_123", "name": "read", "input": {"filePath": "src/app.py"}}],
            },
            {
                "role": "user",
                "content": [
                    {
                        "type": "tool_result",
                        "tool_use_id": "toolu_123",
                        "content": "print('hello')",
                        "is_error": False,
                        "cache_control": {"type": "ephemeral"},
                    }
                ],
            },
        ],
    }


@pytest.fixture
def openai_chat_body() -> Dict[str, Any]:
    """OpenAI Chat Completions request with one tool round-trip."""
    return {
        "model": "gpt-4o",
        "messages": [
            {"role": "system", "content": "You are a helpful assistant"},
            {"role": "user", "content": "Run the tests"},
            {
                "role": "assistant",
                "content": None,
                "tool_calls": [
                    {"id": "call_1", "type": "function", "function": {"name": "bash", "arguments": "{}"}}
                ],
            },
            {"role": "tool", "tool_call_id": "call_1", "content": "3 passed"},
        ],
    }


@pytest.fixture
def openai_responses_body() -> Dict[str, Any]:
    """OpenAI Responses request with one tool round-trip."""
    return {
        "model": "gpt-4o",
        "instructions": "Be brief",
        "input": [
            {"type": "message", "role": "developer", "content": [{"type": "input_text", "text": "rules"}]},
            {"type": "message", "role": "user", "content": [{"type": "input_text", "text": "list files"}]},
            {"type": "function_call", "call_id": "call_ls", "name": "ls", "arguments": "{}"},
            {"type": "function_call_output", "call_id": "call_ls", "output": "a.py\nb.py"},
        ],
    }


@pytest.fixture
def bedrock_body() -> Dict[str, Any]:
    """Bedrock Converse request with one tool round-trip."""
    return {
        "modelId": "anthropic.claude-3-5-sonnet",
        "system": [{"text": "You are a helpful assistant"}],
        "inferenceConfig": {"maxTokens": 512},
        "messages": [
            {"role": "user", "content": [{"text": "weather?"}]},
            {"role": "assistant", "content": [{"toolUse": {"toolUseId": "tu_1", "name": "weather", "input": {}}}]},
            {
                "role": "user",
                "content": [
                    {"toolResult": {"toolUseId": "tu_1", "content": [{"text": "sunny"}], "status": "success"}}
                ],
            },
        ],
    }


@pytest.fixture
def gemini_body() -> Dict[str, Any]:
    """Gemini generateContent request with one tool round-trip."""
    return {
        "contents": [
            {"role": "user", "parts": [{"text": "weather?"}]},
            {"role": "model", "parts": [{"functionCall": {"id": "fc_1", "name": "weather", "args": {}}}]},
            {
                "role": "user",
                "parts": [{"functionResponse": {"id": "fc_1", "name": "weather", "response": {"output": "sunny"}}}],
            },
        ],
        "generationConfig": {"temperature": 0.2},
    }
