# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Context pruning: rewrites outbound chat-completion requests so that stale
tool outputs can be pruned or distilled before they reach the provider.
"""

__version__ = "0.1.0"
