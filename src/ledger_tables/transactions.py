"""
Write Transactions

Handles for submitted table service writes and their confirmation receipts.
Lifecycle: SUBMITTED → CONFIRMED/FAILED
"""

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ledger_tables.exceptions import ConfirmationTimeoutError, StatementError, TableNotFoundError

if TYPE_CHECKING:
    from ledger_tables.client import TableClient

logger = logging.getLogger(__name__)


class TransactionReceipt(BaseModel):
    """Confirmation receipt for a write transaction"""

    model_config = ConfigDict(populate_by_name=True)

    network_id: int = Field(alias="chainId")
    transaction_hash: str = Field(alias="transactionHash")
    block_number: int = Field(alias="blockNumber")
    error: str | None = None
    error_event_idx: int | None = Field(default=None, alias="errorEventIdx")
    table_ids: list[str] = Field(default_factory=list, alias="tableIds")


def is_missing_table_error(message: str) -> bool:
    """Check whether a service error message reports a missing table"""
    return "no such table" in message.lower()


class WriteTransaction:
    """
    Submitted write transaction

    The write is possibly not yet visible to reads until ``wait()`` returns.
    """

    def __init__(self, client: "TableClient", transaction_hash: str, statement: str):
        self.client = client
        self.transaction_hash = transaction_hash
        self.statement = statement
        self.receipt: TransactionReceipt | None = None

    @property
    def confirmed(self) -> bool:
        return self.receipt is not None

    @property
    def explorer_url(self) -> str:
        return self.client.chain_context.get_explorer_url(self.transaction_hash)

    async def wait(self, timeout: float | None = None) -> TransactionReceipt:
        """
        Block until the transaction is confirmed

        Args:
            timeout: Seconds to wait, falls back to the client's
                confirmation_timeout. None waits indefinitely.

        Returns:
            Confirmation receipt

        Raises:
            ConfirmationTimeoutError: Not confirmed in time
            TableNotFoundError: Statement targeted a missing table
            StatementError: Statement failed when applied
        """
        if self.receipt is not None:
            return self.receipt

        if timeout is None:
            timeout = self.client.confirmation_timeout
        deadline = None if timeout is None else time.monotonic() + timeout

        while True:
            receipt = await self.client.get_receipt(self.transaction_hash)
            if receipt is not None:
                break
            if deadline is not None and time.monotonic() >= deadline:
                raise ConfirmationTimeoutError(
                    f"Transaction {self.transaction_hash} not confirmed after {timeout}s"
                )
            await asyncio.sleep(self.client.poll_interval)

        if receipt.error:
            logger.error(f"Transaction {self.transaction_hash} failed: {receipt.error}")
            if is_missing_table_error(receipt.error):
                raise TableNotFoundError(receipt.error)
            raise StatementError(receipt.error)

        logger.info(f"Transaction {self.transaction_hash} confirmed in block {receipt.block_number}")
        self.receipt = receipt
        return receipt
