"""
Table Client

Signer-bound connection to the ledger-backed table service gateway.
Reads are plain queries; every write is a signed ledger transaction that
must be confirmed before it is visible.
"""

import logging
from typing import Any, Optional, Protocol, Sequence

import httpx

from ledger_tables.chain_context import LedgerChainContext
from ledger_tables.exceptions import GatewayError, StatementError, TableNotFoundError
from ledger_tables.statements import bind_statement, is_read_statement
from ledger_tables.transactions import TransactionReceipt, WriteTransaction, is_missing_table_error

logger = logging.getLogger(__name__)


class StatementSigner(Protocol):
    """Anything able to sign write statements (see LedgerWallet)"""

    @property
    def address(self) -> str: ...

    def sign_statement(self, network_id: int, statement: str) -> dict: ...


class TableClient:
    """Client for reading from and writing to the table service"""

    def __init__(
        self,
        chain_context: LedgerChainContext,
        signer: StatementSigner,
        http_client: Optional[httpx.AsyncClient] = None,
        request_timeout: float = 30.0,
        poll_interval: float = 2.0,
        confirmation_timeout: float | None = None,
    ):
        """
        Initialize table client

        Args:
            chain_context: Network configuration
            signer: Signs write statements
            http_client: Pre-built HTTP client (not closed by this client)
            request_timeout: Per-request timeout in seconds
            poll_interval: Seconds between receipt polls
            confirmation_timeout: Default wait() timeout, None waits forever
        """
        self.chain_context = chain_context
        self.signer = signer
        self.poll_interval = poll_interval
        self.confirmation_timeout = confirmation_timeout

        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=request_timeout)

    async def __aenter__(self) -> "TableClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this client created it"""
        if self._owns_http_client:
            await self.http_client.aclose()

    # ========================================================================
    # Reads
    # ========================================================================

    async def query(self, statement: str, params: Sequence[Any] = ()) -> list[dict]:
        """
        Run a read statement

        Args:
            statement: SELECT statement with ``?`` placeholders
            params: Values for the placeholders

        Returns:
            Result rows as dictionaries
        """
        if not is_read_statement(statement):
            raise ValueError("query() only accepts read statements, use submit() for writes")

        bound = bind_statement(statement, params)
        response = await self._request("GET", "/api/v1/query", params={"statement": bound, "format": "objects"})
        return list(response.json())

    async def first(self, statement: str, params: Sequence[Any] = ()) -> dict | None:
        """Run a read statement and return the first row or None"""
        rows = await self.query(statement, params)
        return rows[0] if rows else None

    # ========================================================================
    # Writes
    # ========================================================================

    async def submit(self, statement: str, params: Sequence[Any] = ()) -> WriteTransaction:
        """
        Sign and submit a write statement

        The returned transaction is not confirmed. Reads issued before
        ``wait()`` returns may not observe the write.

        Args:
            statement: CREATE/INSERT/UPDATE statement with ``?`` placeholders
            params: Values for the placeholders

        Returns:
            Write transaction handle
        """
        if is_read_statement(statement):
            raise ValueError("submit() only accepts write statements, use query() for reads")

        bound = bind_statement(statement, params)
        envelope = self.signer.sign_statement(self.chain_context.network_id, bound)

        response = await self._request("POST", "/api/v1/relay", json=envelope)
        tx_hash = response.json()["transactionHash"]

        logger.info(f"Submitted transaction {tx_hash}")
        return WriteTransaction(self, tx_hash, bound)

    async def execute(self, statement: str, params: Sequence[Any] = ()) -> TransactionReceipt:
        """Submit a write statement and wait for its confirmation"""
        transaction = await self.submit(statement, params)
        return await transaction.wait()

    # ========================================================================
    # Service metadata
    # ========================================================================

    async def get_receipt(self, tx_hash: str) -> TransactionReceipt | None:
        """
        Get a transaction receipt

        Returns:
            Receipt, or None while the transaction is still pending
        """
        path = f"/api/v1/receipt/{self.chain_context.network_id}/{tx_hash}"
        response = await self._request("GET", path, allow_not_found=True)
        if response is None:
            return None
        return TransactionReceipt.model_validate(response.json())

    async def get_table(self, name: str) -> dict | None:
        """
        Get table metadata by full generated name

        Returns:
            Table metadata, or None if the table does not exist
        """
        table_id = name.rsplit("_", 1)[-1]
        path = f"/api/v1/tables/{self.chain_context.network_id}/{table_id}"
        response = await self._request("GET", path, allow_not_found=True)
        if response is None:
            return None
        return response.json()

    async def _request(self, method: str, path: str, allow_not_found: bool = False, **kwargs) -> Any:
        url = f"{self.chain_context.base_url}{path}"
        try:
            response = await self.http_client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            logger.error(f"Gateway request {method} {path} failed: {e}")
            raise GatewayError(f"Gateway request failed: {e}") from e

        if response.status_code == 404 and allow_not_found:
            return None
        if response.status_code < 400:
            return response

        message = _error_message(response)
        if response.status_code == 404 and is_missing_table_error(message):
            raise TableNotFoundError(message)
        if response.status_code in (400, 404, 422):
            raise StatementError(message)

        logger.error(f"Gateway error {response.status_code} on {method} {path}: {message}")
        raise GatewayError(f"Gateway returned {response.status_code}: {message}")


def _error_message(response: httpx.Response) -> str:
    try:
        return str(response.json().get("message", response.text))
    except ValueError:
        return response.text
