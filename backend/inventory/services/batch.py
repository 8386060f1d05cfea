"""Partial-success aggregation for batches of independent writes."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from inventory.errors import InventoryError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BatchStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"


@dataclass
class BatchOutcome:
    requested: int
    successful: list[dict] = field(default_factory=list)
    failed: list[dict] = field(default_factory=list)

    @property
    def status(self) -> BatchStatus:
        if not self.successful:
            return BatchStatus.FAILURE
        if not self.failed:
            return BatchStatus.SUCCESS
        return BatchStatus.PARTIAL

    @property
    def status_code(self) -> int:
        return 207 if self.failed else 201

    def summary(self) -> dict:
        return {
            "total": self.requested,
            "success": len(self.successful),
            "failed": len(self.failed),
        }


def failure_entry(key: str, value: Any, exc: Exception) -> dict:
    """Describe one failed item by its identifying field."""
    code = exc.code if isinstance(exc, InventoryError) else "INSERT_FAILED"
    message = exc.message if isinstance(exc, InventoryError) else str(exc)
    return {key: value, "error": message, "code": code}


async def aggregate(
    items: list[T],
    attempt: Callable[[T], Awaitable[dict]],
    describe_failure: Callable[[T, Exception], dict],
    log: logging.Logger = logger,
) -> BatchOutcome:
    """Attempt every item; one failure never stops the rest.

    Nothing written by a successful attempt is undone here.
    """
    outcome = BatchOutcome(requested=len(items))
    for item in items:
        try:
            outcome.successful.append(await attempt(item))
        except Exception as e:
            log.warning(f"Batch item failed: {e}")
            outcome.failed.append(describe_failure(item, e))
    return outcome
