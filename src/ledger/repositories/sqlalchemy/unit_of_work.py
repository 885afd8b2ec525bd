"""SQLAlchemy unit of work: one session transaction per ledger operation."""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ledger.core.exceptions import AppError, NotFoundError, StoreError
from ledger.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from ledger.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from ledger.repositories.sqlalchemy.exchange_rate_repo import SqlAlchemyExchangeRateRepository

logger = logging.getLogger(__name__)


def _is_foreign_key_failure(exc: IntegrityError) -> bool:
    return "foreign key" in str(exc.orig).lower()


class SqlAlchemyUnitOfWork:
    """
    Wraps a session and the repositories bound to it.

    `transaction()` is re-entrant: only the outermost block commits, so an
    operation may call another operation's helpers without splitting the
    atomic unit.
    """

    def __init__(self, session: Session):
        self.session = session
        self.accounts = SqlAlchemyAccountRepository(session)
        self.transactions = SqlAlchemyTransactionRepository(session)
        self.exchange_rates = SqlAlchemyExchangeRateRepository(session)
        self._depth = 0

    @contextmanager
    def transaction(self) -> Iterator["SqlAlchemyUnitOfWork"]:
        if self._depth:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            return

        self._depth = 1
        try:
            yield self
            self.session.commit()
        except AppError:
            self.session.rollback()
            logger.info("Rolled back ledger operation after application error")
            raise
        except IntegrityError as e:
            self.session.rollback()
            if _is_foreign_key_failure(e):
                logger.warning("Rolled back: reference to a missing account (%s)", e.orig)
                raise NotFoundError("Account", "referenced by transaction") from e
            logger.error("Rolled back on integrity failure: %s", e.orig)
            raise StoreError(f"Integrity violation: {e.orig}") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Rolled back on store failure: %s", e)
            raise StoreError(f"Store operation failed: {e}") from e
        except Exception:
            self.session.rollback()
            logger.exception("Rolled back on unexpected error")
            raise
        finally:
            self._depth = 0

    def close(self) -> None:
        self.session.close()
