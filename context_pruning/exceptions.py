# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Error taxonomy for match resolution, format dispatch, and tool arguments."""

from typing import List, Optional, Sequence


class ContextPruningError(Exception):
    """Base class for all context pruning failures."""


class MatchError(ContextPruningError, ValueError):
    """A search string could not be resolved to a single message.

    Attributes:
        search_string (str): The string the caller searched for.
        string_type (str): Which end of the range was being resolved
            (``"startString"`` or ``"endString"``).
    """

    def __init__(self, message: str, search_string: str, string_type: str) -> None:
        super().__init__(message)
        self.search_string = search_string
        self.string_type = string_type


class AmbiguousMatchError(MatchError):
    """More than one candidate matched and none could be preferred.

    Attributes:
        scores (List[float]): Competing candidate scores, best first.
    """

    def __init__(
        self,
        message: str,
        search_string: str,
        string_type: str,
        scores: Sequence[float],
    ) -> None:
        super().__init__(message, search_string, string_type)
        self.scores: List[float] = list(scores)


class MatchNotFoundError(MatchError):
    """No candidate reached the fuzzy score floor."""


class InvalidRangeError(ContextPruningError, ValueError):
    """The end of a range resolved to a message before its start."""

    def __init__(self, message: str, start_index: int, end_index: int) -> None:
        super().__init__(message)
        self.start_index = start_index
        self.end_index = end_index


class UnknownFormatError(ContextPruningError):
    """No format descriptor recognised the request body.

    Attributes:
        keys (List[str]): Sorted top-level keys of the rejected body.
    """

    def __init__(self, keys: Optional[Sequence[str]] = None) -> None:
        self.keys: List[str] = sorted(keys or [])
        super().__init__(f"Unknown request format (top-level keys: {self.keys})")


class InvalidPruneArgumentsError(ContextPruningError, ValueError):
    """Prune or distill tool arguments are malformed."""
