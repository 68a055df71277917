"""Transaction boundary shared by the write use cases.

A use case is a function of a fresh unit of work. It runs, the unit
commits, and the result is returned. When a compare-and-write on a
product row loses a race the whole unit is rolled back and the use case
runs again from fresh reads, so its precondition checks always see the
stock that the write will be applied to.
"""

from __future__ import annotations

from typing import Callable, TypeVar

import structlog

from stockflow.domain.exceptions import ConcurrencyConflictError
from stockflow.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)

T = TypeVar("T")

UnitOfWorkFactory = Callable[[], UnitOfWork]

DEFAULT_MAX_ATTEMPTS = 10


def run_atomically(
    uow_factory: UnitOfWorkFactory,
    work: Callable[[UnitOfWork], T],
    *,
    operation: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> T:
    """Run *work* in its own unit of work and commit it.

    Retries on ConcurrencyConflictError up to *max_attempts* times; any
    other exception rolls back and propagates immediately.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    for attempt in range(1, max_attempts + 1):
        try:
            with uow_factory() as uow:
                result = work(uow)
                uow.commit()
                return result
        except ConcurrencyConflictError:
            logger.warning(
                "stock.conflict_retry",
                operation=operation,
                attempt=attempt,
                max_attempts=max_attempts,
            )

    raise ConcurrencyConflictError(
        f"{operation} gave up after {max_attempts} conflicting attempts"
    )
