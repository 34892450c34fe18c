"""
Ledger Tables Client Library

Client side of the ledger-backed relational table service: network context,
statement signing, statement binding, reads, writes and confirmations.
"""

from .chain_context import LedgerChainContext
from .client import TableClient
from .exceptions import (
    ConfirmationTimeoutError,
    GatewayError,
    StatementError,
    TableNotFoundError,
    TableServiceError,
)
from .transactions import TransactionReceipt, WriteTransaction
from .wallet import LedgerWallet


__all__ = [
    "LedgerChainContext",
    "LedgerWallet",
    "TableClient",
    "TransactionReceipt",
    "WriteTransaction",
    "TableServiceError",
    "TableNotFoundError",
    "StatementError",
    "ConfirmationTimeoutError",
    "GatewayError",
]
