"""Run one search on a background worker under a wall-clock deadline."""

import concurrent.futures
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Union

from loguru import logger

from alphabeta.core.errors import SearchFailure
from alphabeta.core.search import AlphaBetaSearch, BaseSearch, SearchResult, SearchTask


@dataclass(frozen=True)
class TimedOut:
    """No move this cycle. ``charged_ms`` is the whole budget that was allotted."""
    charged_ms: int


def run_with_deadline(
    task: SearchTask,
    deadline_ms: int,
    searcher: Optional[BaseSearch] = None,
) -> Union[SearchResult, TimedOut]:
    """Run ``searcher.run(task)`` on a single worker, waiting at most ``deadline_ms``.

    On expiry the searcher is told to stop and the worker is abandoned; its
    result, if it ever produces one, is never read. Any exception raised by
    the search is fatal and re-raised as ``SearchFailure``.
    """
    searcher = searcher or AlphaBetaSearch()
    deadline_ms = max(0, int(deadline_ms))

    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="alphabeta-search")
    future = pool.submit(searcher.run, task)
    try:
        result = future.result(timeout=deadline_ms / 1000.0)
    except concurrent.futures.TimeoutError:
        searcher.stop()
        future.cancel()
        logger.warning(f"search timed out after {deadline_ms} ms (depth {task.depth})")
        return TimedOut(charged_ms=deadline_ms)
    except Exception as exc:
        logger.exception(f"search failed at depth {task.depth}")
        raise SearchFailure(f"search failed: {exc!r}") from exc
    finally:
        pool.shutdown(wait=False, cancel_futures=True)

    return result
