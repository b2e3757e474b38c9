# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Format registry: priority-ordered, first-match descriptor dispatch.

Detection order (lowest priority value first):

    10  openai-responses   top-level ``input`` list
    20  bedrock            ``system`` + ``inferenceConfig``
    30  anthropic          ``system`` + ``messages``
    40  openai-chat        ``messages`` only
    50  gemini             ``contents`` list

Bedrock is a strict superset of the Anthropic signature and Anthropic a
strict superset of the OpenAI Chat one, so each must be tried before the
next.  The order is kept by priority, not by registration sequence.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from context_pruning.exceptions import UnknownFormatError
from context_pruning.services.formats.anthropic import AnthropicFormat
from context_pruning.services.formats.base import Body, FormatDescriptor
from context_pruning.services.formats.bedrock import BedrockFormat
from context_pruning.services.formats.gemini import GeminiFormat
from context_pruning.services.formats.openai_chat import OpenAIChatFormat
from context_pruning.services.formats.openai_responses import OpenAIResponsesFormat

logger = logging.getLogger(__name__)

DEFAULT_PRIORITIES: Dict[str, int] = {
    OpenAIResponsesFormat.name: 10,
    BedrockFormat.name: 20,
    AnthropicFormat.name: 30,
    OpenAIChatFormat.name: 40,
    GeminiFormat.name: 50,
}


class FormatRegistry:
    """Ordered collection of ``(priority, descriptor)`` pairs.

    Descriptors with equal priority keep their registration order.
    """

    def __init__(self) -> None:
        self._entries: List[Tuple[int, FormatDescriptor]] = []

    def register(self, descriptor: FormatDescriptor, priority: Optional[int] = None) -> None:
        """Register a descriptor.

        Args:
            descriptor (FormatDescriptor): Adapter to add.
            priority (Optional[int]): Position in the decision list. Defaults
                to the built-in priority for the descriptor's name, or after
                every built-in format for unknown names.
        """
        if priority is None:
            priority = DEFAULT_PRIORITIES.get(descriptor.name, max(DEFAULT_PRIORITIES.values()) + 10)
        self._entries.append((priority, descriptor))
        self._entries.sort(key=lambda entry: entry[0])

    def clear(self) -> None:
        """Remove all registered descriptors."""
        self._entries.clear()

    @property
    def descriptors(self) -> List[FormatDescriptor]:
        """Descriptors in evaluation order."""
        return [descriptor for _, descriptor in self._entries]

    def find(self, body: Body) -> Optional[FormatDescriptor]:
        """Return the first descriptor whose ``detect`` accepts ``body``."""
        if not isinstance(body, dict):
            return None
        for _, descriptor in self._entries:
            if descriptor.detect(body):
                return descriptor
        return None

    def detect(self, body: Body) -> FormatDescriptor:
        """Return the descriptor for ``body``.

        Raises:
            UnknownFormatError: No descriptor matched.
        """
        descriptor = self.find(body)
        if descriptor is None:
            keys = list(body.keys()) if isinstance(body, dict) else []
            logger.warning("No format descriptor matched request body (keys=%s)", sorted(keys))
            raise UnknownFormatError(keys)
        logger.debug("Detected request format: %s", descriptor.name)
        return descriptor


def create_default_registry() -> FormatRegistry:
    """Registry holding every built-in provider format."""
    registry = FormatRegistry()
    for descriptor in (
        OpenAIChatFormat(),
        AnthropicFormat(),
        BedrockFormat(),
        GeminiFormat(),
        OpenAIResponsesFormat(),
    ):
        registry.register(descriptor)
    return registry


default_registry = create_default_registry()


def detect_format(body: Body) -> FormatDescriptor:
    """Pick the descriptor for ``body`` from the default registry.

    Raises:
        UnknownFormatError: No descriptor matched.
    """
    return default_registry.detect(body)
