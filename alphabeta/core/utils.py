"""Logging helpers shared by the search core."""

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from alphabeta.config import CONFIG
from alphabeta.core.evaluator import KING_CAPTURED_SCORE


def setup_logging(level: Optional[str] = None, log_file: Optional[Union[str, Path]] = None) -> None:
    """Replace loguru's default handler with a formatted stderr sink.

    Args:
        level: Minimum log level to display; defaults to CONFIG.log_level.
        log_file: Optional path to a rotating log file.
    """
    level = level or CONFIG.log_level
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
            rotation="10 MB",
            retention="1 week",
        )


def format_info(depth, score, nodes, elapsed_ms, move=None, cutoffs=0):
    """UCI-style one-line summary of a finished search."""
    nps = int(nodes * 1000 / elapsed_ms) if elapsed_ms > 0 else 0
    move_str = move.uci() if hasattr(move, "uci") else (str(move) if move is not None else "-")
    if score is None:
        score_str = "none"
    elif abs(score) == float("inf"):
        score_str = "inf" if score > 0 else "-inf"
    elif abs(score) >= KING_CAPTURED_SCORE:
        score_str = "mate" if score > 0 else "mated"
    else:
        score_str = f"{score:g}"

    return (f"info depth {depth} score {score_str} nodes {nodes} cutoffs {cutoffs} "
            f"nps {nps} time {int(elapsed_ms)} move {move_str}")
