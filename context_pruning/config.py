# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Library configuration using pydantic-settings.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Context pruning settings.

    Attributes:
        FUZZY_MIN_SCORE (int): Minimum partial-ratio score (0-100) a fuzzy
            candidate needs to be considered at all.
        FUZZY_MIN_GAP (int): Minimum score gap between the best and the
            second-best fuzzy candidate.
        PRUNED_TOOL_PLACEHOLDER (str): Text that replaces a pruned tool output.
        DISTILLED_TOOL_PREFIX (str): Prefix placed before distilled text.
        PROTECTED_TOOLS (List[str]): Tool name patterns that are never pruned.
        INJECT_PRUNABLE_TOOLS (bool): Whether the numbered prunable-tools list
            is injected into the system channel.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    FUZZY_MIN_SCORE: int = 85
    FUZZY_MIN_GAP: int = 15

    PRUNED_TOOL_PLACEHOLDER: str = (
        "[Output removed to save context - information superseded or no longer needed]"
    )
    DISTILLED_TOOL_PREFIX: str = "[Distilled output]\n"

    PROTECTED_TOOLS: List[str] = ["task", "todowrite", "todoread", "prune", "distill", "compress"]
    INJECT_PRUNABLE_TOOLS: bool = True


settings = Settings()
