"""Transaction service — runs work atomically against a UnitOfWork.

Exactly one outcome per invocation: commit when work returns, rollback when
work raises. Faults are never absorbed; they propagate after rollback.
"""

import logging
from typing import Callable, TypeVar

from domain.model.errors import DomainError, PersistenceError
from port.unit_of_work import UnitOfWork
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

T = TypeVar('T')


def run_in_transaction(uow: UnitOfWork, work: Callable[[UserRepository], T]) -> T:
    """Invoke work with a transaction-scoped repository.

    Returns:
        Whatever work returns, once the commit has succeeded.

    Raises:
        PersistenceError: begin or commit failed
        Any exception raised by work, unchanged, after rollback
    """
    try:
        tx = uow.begin()
    except DomainError:
        raise
    except Exception as e:
        raise PersistenceError(f"Failed to begin transaction: {e}") from e

    try:
        result = work(tx.users)
    except BaseException as e:
        logger.debug("Rolling back transaction", extra={"error": repr(e)})
        try:
            tx.rollback()
        except Exception as rollback_error:
            logger.error(
                "Rollback failed",
                extra={"error": str(rollback_error)},
                exc_info=True,
            )
        raise

    try:
        tx.commit()
    except DomainError:
        raise
    except Exception as e:
        raise PersistenceError(f"Failed to commit transaction: {e}") from e

    return result
