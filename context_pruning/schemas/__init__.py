# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Schema package for session conversation models."""

from context_pruning.schemas.session import (
    CompressSummary,
    MessageInfo,
    MessageRole,
    Part,
    PartType,
    SessionMessage,
    SessionState,
    ToolMetadata,
    ToolState,
    ToolStatus,
)

__all__ = [
    "CompressSummary",
    "MessageInfo",
    "MessageRole",
    "Part",
    "PartType",
    "SessionMessage",
    "SessionState",
    "ToolMetadata",
    "ToolState",
    "ToolStatus",
]
