# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Provider request formats.

Each provider shape is handled by one ``FormatDescriptor``:

    descriptor = detect_format(body)
    descriptor.inject_system_message(body, text)
    for output in descriptor.extract_tool_outputs(body, state):
        ...
    descriptor.replace_tool_output(body, call_id, "[pruned]", state)
"""

from context_pruning.services.formats.anthropic import AnthropicFormat
from context_pruning.services.formats.base import FormatDescriptor, ToolOutput, normalize_id
from context_pruning.services.formats.bedrock import BedrockFormat
from context_pruning.services.formats.gemini import GeminiFormat
from context_pruning.services.formats.openai_chat import OpenAIChatFormat
from context_pruning.services.formats.openai_responses import OpenAIResponsesFormat
from context_pruning.services.formats.registry import (
    FormatRegistry,
    create_default_registry,
    default_registry,
    detect_format,
)

__all__ = [
    "AnthropicFormat",
    "BedrockFormat",
    "FormatDescriptor",
    "FormatRegistry",
    "GeminiFormat",
    "OpenAIChatFormat",
    "OpenAIResponsesFormat",
    "ToolOutput",
    "create_default_registry",
    "default_registry",
    "detect_format",
    "normalize_id",
]
