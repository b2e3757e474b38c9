# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Session conversation schemas.

Mirrors the host runtime's message shape: every message carries an ``info``
record (identifier and role) and an ordered list of parts.  Field names accept
the host's camelCase keys (``callID``, ``anchorMessageId``) as well as the
snake_case attribute names.

Parts are intentionally permissive: unknown part types and unexpected field
types are kept rather than rejected, because text extraction is best-effort.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    """Message role enumeration.

    Attributes:
        USER (str): User role.
        ASSISTANT (str): Assistant role.
        SYSTEM (str): System role.
    """

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class PartType(str, Enum):
    """Known message part types.

    Attributes:
        TEXT (str): Plain text.
        REASONING (str): Model reasoning text.
        TOOL (str): Tool invocation with its state.
        COMPACTION (str): Compaction summary left by the host.
        SUBTASK (str): Result of a delegated subtask.
    """

    TEXT = "text"
    REASONING = "reasoning"
    TOOL = "tool"
    COMPACTION = "compaction"
    SUBTASK = "subtask"


class ToolStatus(str, Enum):
    """Tool invocation lifecycle status."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    ERROR = "error"


class ToolState(BaseModel):
    """State sub-record of a tool part.

    Attributes:
        status (Optional[str]): One of :class:`ToolStatus` values.
        input (Any): Tool arguments, either a string or a JSON-like object.
        output (Any): Tool output when ``status`` is ``completed``.
        error (Any): Error text when ``status`` is ``error``.
    """

    model_config = ConfigDict(extra="allow")

    status: Optional[str] = None
    input: Any = None
    output: Any = None
    error: Any = None


class Part(BaseModel):
    """A single part of a session message (tagged by ``type``).

    Attributes:
        type (str): Part type; compared against :class:`PartType`.
        text (Any): Text for ``text`` / ``reasoning`` parts.
        call_id (Optional[str]): Tool call identifier (``callID``).
        tool (Optional[str]): Tool name for ``tool`` parts.
        state (Optional[ToolState]): Tool invocation state.
        summary (Any): Summary for ``compaction`` / ``subtask`` parts.
        result (Any): Result text for ``subtask`` parts.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str
    text: Any = None
    call_id: Optional[str] = Field(default=None, alias="callID")
    tool: Optional[str] = None
    state: Optional[ToolState] = None
    summary: Any = None
    result: Any = None


class MessageInfo(BaseModel):
    """Message header.

    Attributes:
        id (str): Stable message identifier.
        role (str): Role of the message author.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    role: str = MessageRole.USER.value


class SessionMessage(BaseModel):
    """A conversation message with its ordered parts."""

    info: MessageInfo
    parts: List[Part] = Field(default_factory=list)

    @property
    def id(self) -> str:
        return self.info.id


class CompressSummary(BaseModel):
    """A previously generated summary standing in for an anchor message.

    Attributes:
        anchor_message_id (str): Identifier of the message this summary
            replaces in the visible conversation.
        summary (str): Summary text.
    """

    model_config = ConfigDict(populate_by_name=True)

    anchor_message_id: str = Field(alias="anchorMessageId")
    summary: str


class ToolMetadata(BaseModel):
    """Remembered information about a tool call.

    Attributes:
        tool (str): Name of the tool that was invoked.
        parameters (Dict[str, Any]): Arguments the tool was invoked with.
    """

    tool: str
    parameters: Dict[str, Any] = Field(default_factory=dict)


class SessionState(BaseModel):
    """Per-session lookup state passed explicitly into format operations.

    Attributes:
        tool_parameters (Dict[str, ToolMetadata]): Tool metadata keyed by call
            identifier. Lookups are case-insensitive.
        tool_id_list (List[str]): Call identifiers in the order they were
            numbered for the model in the prunable-tools list.
    """

    tool_parameters: Dict[str, ToolMetadata] = Field(default_factory=dict)
    tool_id_list: List[str] = Field(default_factory=list)

    def get_tool_metadata(self, call_id: str) -> Optional[ToolMetadata]:
        """Look up tool metadata by call id, ignoring case.

        Args:
            call_id (str): Call identifier as it appears in a request body.

        Returns:
            Optional[ToolMetadata]: The remembered metadata, or ``None``.
        """
        found = self.tool_parameters.get(call_id)
        if found is not None:
            return found
        wanted = call_id.lower()
        for key, meta in self.tool_parameters.items():
            if key.lower() == wanted:
                return meta
        return None

    def remember_tool(self, call_id: str, tool: str, parameters: Optional[Dict[str, Any]] = None) -> None:
        """Record metadata for a tool call and number it if it is new."""
        self.tool_parameters[call_id] = ToolMetadata(tool=tool, parameters=parameters or {})
        if call_id not in self.tool_id_list:
            self.tool_id_list.append(call_id)
