"""Depth-limited alpha-beta search agent for python-chess positions.

Modules:
- config: dataclass configuration, optionally read from TOML
- core: node adapter, evaluator, move ordering, search and deadline executor
- agent: per-side turn manager with a time bank
- validator: alpha-beta vs minimax cross-checking
"""

from .agent import Agent
from .validator import ShadowValidator

__all__ = ["Agent", "ShadowValidator"]
