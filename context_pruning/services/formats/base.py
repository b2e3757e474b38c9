# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Format descriptor contract shared by every provider adapter.

A descriptor is a stateless strategy over one provider's request body shape.
Callers never branch on provider; they ask the registry for the descriptor
and use the four operations below.

Request bodies are plain JSON-like dicts owned by the caller and mutated in
place.  Only the system channel and tool-result content fields are touched.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from context_pruning.schemas.session import SessionState

Body = Dict[str, Any]


@dataclass
class ToolOutput:
    """A tool result found in a request body.

    Attributes:
        id (str): Case-folded call identifier.
        content (Any): The result content exactly as it appears in the body.
        metadata (Dict[str, Any]): Side-channel data from the session state,
            e.g. ``tool_name`` and ``parameters``.
    """

    id: str
    content: Any
    metadata: Dict[str, Any] = field(default_factory=dict)


def normalize_id(call_id: Any) -> str:
    """Case-fold a call identifier for lookup."""
    return str(call_id).lower()


def tool_metadata(call_id: str, state: Optional[SessionState]) -> Dict[str, Any]:
    """Metadata remembered for ``call_id``, empty when unknown."""
    if state is None:
        return {}
    meta = state.get_tool_metadata(call_id)
    if meta is None:
        return {}
    return {"tool_name": meta.tool, "parameters": dict(meta.parameters)}


def append_system_fragment(
    body: Body,
    key: str,
    text: str,
    make_fragment: Callable[[str], Dict[str, Any]],
) -> bool:
    """Append ``text`` to a top-level system channel held at ``body[key]``.

    A string channel becomes a list whose first fragment is the original
    text.  A missing channel becomes an empty list.  Any other shape is not
    addressable and leaves the body untouched.

    Args:
        body (Body): Request body to mutate.
        key (str): Name of the top-level system field.
        text (str): Text to append.
        make_fragment (Callable[[str], Dict[str, Any]]): Builds one
            provider-shaped text fragment.

    Returns:
        bool: ``True`` if the fragment was appended.
    """
    channel = body.get(key)
    if channel is None:
        channel = []
    elif isinstance(channel, str):
        channel = [make_fragment(channel)]
    elif not isinstance(channel, list):
        return False

    channel.append(make_fragment(text))
    body[key] = channel
    return True


class FormatDescriptor(ABC):
    """Provider-specific request body adapter.

    Attributes:
        name (str): Stable identifier of the format, used in logs and outcomes.
    """

    name: str = ""

    @abstractmethod
    def detect(self, body: Body) -> bool:
        """Structural predicate over the body's top-level shape."""

    @abstractmethod
    def inject_system_message(self, body: Body, text: str) -> bool:
        """Append ``text`` as an extra system-context fragment.

        Returns ``False`` when the body has no addressable system channel.
        """

    @abstractmethod
    def extract_tool_outputs(self, body: Body, state: Optional[SessionState] = None) -> List[ToolOutput]:
        """All tool results in the body, ids case-folded, enriched from ``state``."""

    @abstractmethod
    def replace_tool_output(
        self,
        body: Body,
        tool_id: str,
        new_content: str,
        state: Optional[SessionState] = None,
    ) -> bool:
        """Overwrite the content of the tool result with ``tool_id``.

        Sibling fields on the entry are left untouched.  Returns ``False``
        when no entry matches.
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
