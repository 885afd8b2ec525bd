"""Honeybear ledger core: accounts, transactions, transfers and currency conversion."""

__version__ = "0.1.0"
