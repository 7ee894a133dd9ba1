"""
Zilliqa Network Client
Signs and submits transactions over JSON-RPC and reads contract state
"""

import asyncio
import itertools
import json
import logging
from typing import Dict, Optional, Sequence, Tuple

import aiohttp
from eth_utils import remove_0x_prefix

from zilswap_deploy.config import NetworkConfig
from zilswap_deploy.crypto import (
    NULL_ADDRESS,
    encode_transaction_proto,
    get_address_from_public_key,
    load_private_key,
    schnorr_sign,
    to_checksum_address,
)
from zilswap_deploy.errors import BalanceQueryError, ConfirmationTimeoutError, RPCError
from zilswap_deploy.init_params import DeploymentRequest, InitParam
from zilswap_deploy.receipt import TransactionReceipt, TransactionResult

logger = logging.getLogger(__name__)

_request_ids = itertools.count(1)


class ContractHandle:
    """A deployed contract bound to the client that found it"""

    def __init__(self, client: "ZilliqaClient", address: str):
        self.client = client
        self.address = to_checksum_address(address)

    async def get_state(self) -> Dict:
        return await self.client.get_contract_state(self.address)

    async def call(self, transition: str, params: Sequence[InitParam], amount: int = 0) -> TransactionResult:
        return await self.client.call(self.address, transition, params, amount)

    def __repr__(self):
        return f"ContractHandle({self.address})"


class ZilliqaClient:
    def __init__(self, private_key: str, network: Optional[NetworkConfig] = None):
        self.network = network or NetworkConfig()
        self._key = load_private_key(private_key)
        self.public_key = self._key.public_key.to_compressed_bytes()
        self.address = get_address_from_public_key(self.public_key)

    async def send(self, method: str, *params) -> Dict:
        """POST a single JSON-RPC request and return the decoded response"""
        payload = {
            "id": next(_request_ids),
            "jsonrpc": "2.0",
            "method": method,
            "params": list(params),
        }
        async with aiohttp.ClientSession() as session:
            async with session.post(self.network.rpc_url, json=payload) as response:
                response.raise_for_status()
                return await response.json(content_type=None)

    async def _result(self, method: str, *params):
        response = await self.send(method, *params)
        if response.get("error"):
            raise RPCError.from_response(response["error"])
        return response.get("result")

    async def get_balance(self) -> Dict:
        """Balance and nonce of the signing account"""
        response = await self.send("GetBalance", remove_0x_prefix(self.address).lower())
        if response.get("error"):
            error = response["error"]
            logger.error(f"Failed to get balance for {self.address}: {error.get('message')}")
            raise BalanceQueryError(error.get("message", "Unknown RPC error"), error.get("code"))
        return response["result"]

    async def get_contract_state(self, address: str) -> Dict:
        try:
            return await self._result("GetSmartContractState", remove_0x_prefix(address).lower())
        except Exception as e:
            logger.error(f"Failed to get state of {address}: {e}")
            raise

    def at(self, address: str) -> ContractHandle:
        return ContractHandle(self, address)

    def _sign(self, nonce: int, to_addr: str, amount: int, gas_limit: int, code: str = "", data: str = "") -> Dict:
        message = encode_transaction_proto(
            version=self.network.version,
            nonce=nonce,
            to_addr=to_addr,
            public_key=self.public_key,
            amount=amount,
            gas_price=self.network.gas_price,
            gas_limit=gas_limit,
            code=code,
            data=data,
        )
        return {
            "version": self.network.version,
            "nonce": nonce,
            "toAddr": to_checksum_address(to_addr),
            "amount": str(amount),
            "pubKey": self.public_key.hex(),
            "gasPrice": str(self.network.gas_price),
            "gasLimit": str(gas_limit),
            "code": code,
            "data": data,
            "signature": schnorr_sign(message, self._key).hex(),
            "priority": self.network.to_ds,
        }

    async def _submit(self, tx: Dict) -> Tuple[Optional[Dict], TransactionResult]:
        response = await self.send("CreateTransaction", tx)
        result = response.get("result") or {}
        if response.get("error") or not result.get("TranID"):
            return result, TransactionResult(id=None, error=response.get("error"))
        return result, await self.confirm(result["TranID"])

    async def _next_nonce(self, nonce: Optional[int]) -> int:
        if nonce is not None:
            return nonce
        balance = await self.get_balance()
        return int(balance["nonce"]) + 1

    async def deploy(self, request: DeploymentRequest,
                     nonce: Optional[int] = None) -> Tuple[Optional[ContractHandle], TransactionResult]:
        """Create a contract; the handle is None if the network gave no address back"""
        nonce = await self._next_nonce(nonce)
        tx = self._sign(nonce, NULL_ADDRESS, 0, self.network.gas_limit,
                        code=request.code, data=request.init_json())
        result, tx_result = await self._submit(tx)
        address = result.get("ContractAddress") if result else None
        return (self.at(address) if address else None), tx_result

    async def call(self, address: str, transition: str, params: Sequence[InitParam],
                   amount: int = 0, nonce: Optional[int] = None) -> TransactionResult:
        nonce = await self._next_nonce(nonce)
        data = json.dumps({"_tag": transition, "params": [param.to_dict() for param in params]})
        tx = self._sign(nonce, address, amount, self.network.call_gas_limit, data=data)
        _, tx_result = await self._submit(tx)
        return tx_result

    async def confirm(self, tx_id: str) -> TransactionResult:
        """Poll GetTransaction until a receipt shows up"""
        attempts = self.network.confirm_attempts
        for attempt in range(attempts):
            response = await self.send("GetTransaction", tx_id)
            result = response.get("result")
            if result and result.get("receipt"):
                return TransactionResult(id=tx_id, receipt=TransactionReceipt.from_rpc(result["receipt"]))
            logger.debug(f"Transaction {tx_id} not confirmed yet ({attempt + 1}/{attempts})")
            if attempt + 1 < attempts:
                await asyncio.sleep(self.network.confirm_interval)
        raise ConfirmationTimeoutError(
            f"The transaction is still not confirmed after {attempts} attempts."
        )
