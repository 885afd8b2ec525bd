"""Versioned schema migrations for the ledger store.

Each step is idempotent and runs at most once per database; the applied
version is kept in SQLite's ``user_version`` pragma.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from sqlalchemy import Engine, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import OperationalError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Migration:
    version: int
    description: str
    apply: Callable[[Connection], None]


def _add_column(conn: Connection, table: str, column_ddl: str) -> None:
    """ALTER TABLE ... ADD COLUMN, treating an existing column as success."""
    try:
        conn.exec_driver_sql(f"ALTER TABLE {table} ADD COLUMN {column_ddl}")
    except OperationalError as e:
        if "duplicate column" not in str(e.orig).lower():
            raise
        logger.debug("Column already present on %s: %s", table, column_ddl)


def _create_base_tables(conn: Connection) -> None:
    conn.exec_driver_sql(
        """
        CREATE TABLE IF NOT EXISTS accounts (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            balance REAL NOT NULL DEFAULT 0,
            kind TEXT DEFAULT 'cash'
        )
        """
    )
    conn.exec_driver_sql(
        """
        CREATE TABLE IF NOT EXISTS transactions (
            id INTEGER PRIMARY KEY,
            account_id INTEGER NOT NULL REFERENCES accounts(id),
            date TEXT NOT NULL,
            payee TEXT NOT NULL,
            notes TEXT,
            category TEXT,
            amount REAL NOT NULL,
            ticker TEXT,
            shares REAL,
            price_per_share REAL,
            fee REAL
        )
        """
    )
    conn.exec_driver_sql(
        """
        CREATE TABLE IF NOT EXISTS custom_exchange_rates (
            currency TEXT PRIMARY KEY,
            rate REAL NOT NULL
        )
        """
    )


def _add_linked_tx_id(conn: Connection) -> None:
    _add_column(conn, "transactions", "linked_tx_id INTEGER")


def _add_transaction_currency(conn: Connection) -> None:
    _add_column(conn, "transactions", "currency TEXT")


def _add_account_currency(conn: Connection) -> None:
    _add_column(conn, "accounts", "currency TEXT")


def _add_is_transfer(conn: Connection) -> None:
    _add_column(conn, "transactions", "is_transfer INTEGER NOT NULL DEFAULT 0")
    result = conn.execute(
        text(
            "UPDATE transactions SET is_transfer = 1 "
            "WHERE category = 'Transfer' AND is_transfer = 0"
        )
    )
    if result.rowcount:
        logger.info("Tagged %d legacy transfer rows", result.rowcount)


def _create_indexes(conn: Connection) -> None:
    conn.exec_driver_sql(
        "CREATE INDEX IF NOT EXISTS ix_transactions_account_id "
        "ON transactions (account_id)"
    )
    conn.exec_driver_sql(
        "CREATE INDEX IF NOT EXISTS ix_transactions_linked_tx_id "
        "ON transactions (linked_tx_id)"
    )
    conn.exec_driver_sql(
        "CREATE INDEX IF NOT EXISTS ix_transactions_date "
        "ON transactions (date)"
    )


MIGRATIONS: list[Migration] = [
    Migration(1, "create base tables", _create_base_tables),
    Migration(2, "add transactions.linked_tx_id", _add_linked_tx_id),
    Migration(3, "add transactions.currency", _add_transaction_currency),
    Migration(4, "add accounts.currency", _add_account_currency),
    Migration(5, "add transactions.is_transfer and backfill", _add_is_transfer),
    Migration(6, "create transaction indexes", _create_indexes),
]

LATEST_VERSION = MIGRATIONS[-1].version


def get_schema_version(conn: Connection) -> int:
    return int(conn.exec_driver_sql("PRAGMA user_version").scalar() or 0)


def run_migrations(engine: Engine) -> int:
    """Apply every pending migration in order; return the schema version."""
    with engine.begin() as conn:
        current = get_schema_version(conn)
        for migration in MIGRATIONS:
            if migration.version <= current:
                continue
            migration.apply(conn)
            conn.exec_driver_sql(f"PRAGMA user_version = {migration.version}")
            current = migration.version
            logger.info(
                "Applied migration %d: %s", migration.version, migration.description
            )
    return current
