"""
Post-Commit Actions
Best-effort side effects queued during a write and run after it succeeds
"""

import logging
from typing import Any, Awaitable, Callable, List, Tuple


class PostCommitActions:
    """
    Collects side effects (emails, notifications, bookkeeping) that must not
    affect the outcome of the primary write.
    """

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)
        self._actions: List[Tuple[str, Callable[..., Awaitable[Any]], tuple, dict]] = []

    def add(self, name: str, func: Callable[..., Awaitable[Any]], *args, **kwargs) -> None:
        self._actions.append((name, func, args, kwargs))

    def __len__(self) -> int:
        return len(self._actions)

    async def run(self) -> dict:
        """Run every queued action once; returns name -> succeeded"""
        results = {}
        actions, self._actions = self._actions, []

        for name, func, args, kwargs in actions:
            try:
                await func(*args, **kwargs)
                results[name] = True
            except Exception:
                self.logger.exception("Post-commit action '%s' failed", name)
                results[name] = False

        return results
