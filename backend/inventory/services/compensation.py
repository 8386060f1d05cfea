"""Compensation stack for multi-step writes the store cannot make atomic."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class Compensation:
    description: str
    action: Callable[[], Awaitable[object]]


class CompensationStack:
    """Undo actions pushed after each committed step, unwound newest first."""

    def __init__(self, log: logging.Logger = logger):
        self._log = log
        self._actions: list[Compensation] = []

    def __len__(self) -> int:
        return len(self._actions)

    def push(self, description: str, action: Callable[[], Awaitable[object]]) -> None:
        self._actions.append(Compensation(description, action))

    def clear(self) -> None:
        self._actions.clear()

    async def unwind(self) -> list[str]:
        """Run every compensation once, newest first.

        Failures are logged and skipped, never raised or retried. Returns
        the descriptions of the compensations that failed.
        """
        failed = []
        while self._actions:
            step = self._actions.pop()
            try:
                await step.action()
                self._log.info(f"Rolled back: {step.description}")
            except Exception as e:
                self._log.error(f"Rollback step failed ({step.description}): {e}")
                failed.append(step.description)
        return failed
