# alphabeta/config.py
from dataclasses import dataclass, field
from typing import Dict, Optional
import os
import tomllib  # python >=3.11

# Point values per piece type, keyed by python-chess piece name.
PIECE_VALUES = {
    "PAWN": 1,
    "KNIGHT": 3,
    "BISHOP": 3,
    "ROOK": 5,
    "QUEEN": 9,
    "KING": 0,
}

@dataclass
class SearchConfig:
    depth: int = 3
    time_limit_ms: Optional[int] = None  # None means the caller supplies the budget
    validate_moves: int = 10  # shadow validator quits after this many checks

@dataclass
class EvalConfig:
    piece_values: Dict[str, int] = field(default_factory=lambda: PIECE_VALUES.copy())
    weights: Dict[str, float] = field(default_factory=lambda: {
        "material": 12.0, "mobility": 5.0, "king_safety": 8.0, "pawn_structure": 2.0
    })
    king_safety: Dict[str, int] = field(default_factory=lambda: {
        "friendly": 2, "enemy": -3, "empty": -1
    })
    pawn_structure: Dict[str, int] = field(default_factory=lambda: {
        "doubled": -2, "isolated": -3
    })

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        # only known keys are merged; tables in [eval] update the defaults in place
        if "search" in raw:
            for k, v in raw["search"].items():
                if hasattr(cfg.search, k):
                    setattr(cfg.search, k, v)
        if "eval" in raw:
            for k, v in raw["eval"].items():
                if not hasattr(cfg.eval, k):
                    continue
                current = getattr(cfg.eval, k)
                if isinstance(current, dict) and isinstance(v, dict):
                    current.update(v)
                else:
                    setattr(cfg.eval, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"]).upper()
        return cfg

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("ALPHABETA_CONFIG_TOML", "config.toml"))
# allow env override of depth for quick debugging
override_depth = os.environ.get("ALPHABETA_SEARCH_DEPTH")
if override_depth and override_depth.strip().isdigit():
    CONFIG.search.depth = int(override_depth)
