"""
Sui JSON-RPC adapter for node integration.

Provides ledger access via a fullnode's JSON-RPC 2.0 HTTP endpoint.
"""

import base64
import uuid
from typing import Any, List, Optional, Type

import httpx
import structlog

from tokensmith.config import RunnerConfig, get_config
from tokensmith.errors import NetworkError, NodeConnectionError, TransactionSubmitError
from tokensmith.node.interface import Balance, LedgerClient, Receipt
from tokensmith.tx.action import Action
from tokensmith.tx.signer import SignedTransaction

logger = structlog.get_logger(__name__)

EXECUTE_OPTIONS = {
    "showEffects": True,
    "showEvents": True,
    "showObjectChanges": True,
}


class SuiJsonRpcAdapter(LedgerClient):
    """
    Sui JSON-RPC adapter.

    Implements the LedgerClient using the fullnode JSON-RPC API. Request
    timeouts are enforced here; the runner itself never times out.
    """

    def __init__(
        self,
        config: Optional[RunnerConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the JSON-RPC adapter.

        Args:
            config: Runner configuration. Uses global config if not provided.
            transport: Custom httpx transport (used by tests)
        """
        self.config = config or get_config()
        self.url = self.config.fullnode_url
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self.chain_identifier: Optional[str] = None

    async def connect(self) -> None:
        """Establish connection (create HTTP client)."""
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(
            headers={"Content-Type": "application/json"},
            timeout=self.config.request_timeout_seconds,
            transport=self._transport,
        )

        # Test connection
        try:
            self.chain_identifier = await self._request("sui_getChainIdentifier", [])
        except NetworkError:
            await self.disconnect()
            raise
        logger.info("fullnode_connected", url=self.url, chain=self.chain_identifier)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("fullnode_disconnected")

    async def _request(
        self,
        method: str,
        params: List[Any],
        error_cls: Type[NetworkError] = NodeConnectionError,
    ) -> Any:
        """Send a JSON-RPC request and return its result."""
        if not self._client:
            await self.connect()

        payload = {
            "jsonrpc": "2.0",
            "id": str(uuid.uuid4()),
            "method": method,
            "params": params,
        }

        try:
            response = await self._client.post(self.url, json=payload)
        except httpx.RequestError as e:
            logger.error("rpc_request_error", method=method, error=str(e))
            raise NodeConnectionError(f"Fullnode request failed: {e}") from e

        if response.status_code != 200:
            logger.error(
                "rpc_request_failed",
                method=method,
                status=response.status_code,
                error=response.text,
            )
            raise NodeConnectionError(f"Fullnode HTTP error {response.status_code}: {response.text}")

        try:
            data = response.json()
        except ValueError as e:
            raise NodeConnectionError(f"Fullnode returned invalid JSON: {response.text}") from e

        if not isinstance(data, dict):
            logger.error("rpc_malformed_response", method=method, body=response.text)
            raise NodeConnectionError(f"Fullnode returned a malformed response: {response.text}")

        error = data.get("error")
        if error:
            if not isinstance(error, dict):
                error = {"message": str(error)}
            message = error.get("message", "Unknown error")
            code = error.get("code")
            logger.error("rpc_error", method=method, code=code, error=message)
            if error_cls is TransactionSubmitError:
                raise TransactionSubmitError(message, error_code=code)
            raise error_cls(f"RPC error {code}: {message}")

        return data.get("result")

    async def get_balance(self, owner: str, coin_type: str) -> Balance:
        """Get the balance of a coin type."""
        data = await self._request("suix_getBalance", [owner, coin_type])
        if not isinstance(data, dict) or not data:
            raise NodeConnectionError(f"Empty balance response for {owner}")

        try:
            balance = Balance(
                coin_type=data.get("coinType", coin_type),
                total=int(data["totalBalance"]),
                coin_object_count=int(data.get("coinObjectCount", 0)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise NodeConnectionError(f"Malformed balance response for {owner}: {data}") from e

        logger.debug("balance_fetched", owner=owner, coin_type=balance.coin_type, total=balance.total)
        return balance

    async def build_transaction(
        self,
        sender: str,
        action: Action,
        gas_budget: int,
    ) -> bytes:
        """Build transaction bytes for a Move call with ``unsafe_moveCall``."""
        target = action.target
        data = await self._request(
            "unsafe_moveCall",
            [
                sender,
                target.package,
                target.module,
                target.function,
                list(action.type_arguments),
                action.json_arguments(),
                None,  # let the fullnode pick a gas coin
                str(gas_budget),
            ],
            error_cls=TransactionSubmitError,
        )

        if not isinstance(data, dict) or "txBytes" not in data:
            raise TransactionSubmitError(f"No transaction bytes returned for {target}")

        return base64.b64decode(data["txBytes"])

    async def submit_transaction(self, tx: SignedTransaction) -> Receipt:
        """Submit a signed transaction and wait for local execution."""
        result = await self._request(
            "sui_executeTransactionBlock",
            [
                tx.tx_bytes,
                list(tx.signatures),
                EXECUTE_OPTIONS,
                "WaitForLocalExecution",
            ],
            error_cls=TransactionSubmitError,
        )

        if not isinstance(result, dict) or not result:
            raise TransactionSubmitError("Empty response from transaction submission")

        digest = result.get("digest")
        status = (result.get("effects") or {}).get("status") or {}

        if status.get("status") == "failure":
            error = status.get("error") or "Transaction execution failed"
            logger.error("tx_execution_failed", digest=digest, error=error)
            raise TransactionSubmitError(error, digest=digest)

        logger.info("tx_submitted", digest=digest)
        return result
