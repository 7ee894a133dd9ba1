"""
Pytest configuration and fixtures
"""
import json

import pytest

from zilswap_deploy.config import NetworkConfig
from zilswap_deploy.crypto import get_address_from_public_key
from zilswap_deploy.network_client import ZilliqaClient

PRIVATE_KEY = "e19d05c5452598e24caad4a0d85a49146f7be089515c905ae6a19e8a578a6930"
CONTRACT_ADDRESS = "5e8d7c1e2f6a2f1b3c4d5e6f708192a3b4c5d6e7"
SPENDER = "0x1Bf4A5e7C9d0A3B2f6e8D1c4B7a9E2f5C8d0B3a6"

TOKEN_SOURCE = """
scilla_version 0

(* Fungible token *)
library FungibleToken

(* multi-line
   comment *)
contract FungibleToken(contract_owner: ByStr20)
field total_supply : Uint128 = init_supply
"""


class FakeZilliqa:
    """In-memory JSON-RPC node that records every request"""

    def __init__(self):
        self.calls = []
        self.transactions = []
        self.balance = {"result": {"balance": "900000000000000", "nonce": 4}}
        self.create_response = None
        self.receipt = {"success": True, "cumulative_gas": "1212", "epoch_num": "42"}
        self.state_error = None
        self.states = {
            CONTRACT_ADDRESS: {
                "_balance": "0",
                "total_supply": "1000000000000000000000",
                "allowances": {},
            }
        }

    async def send(self, method, *params):
        self.calls.append((method, params))
        return getattr(self, f"_{method}")(*params)

    def count(self, method):
        return sum(1 for name, _ in self.calls if name == method)

    def transitions(self):
        tags = []
        for tx in self.transactions:
            if not tx["code"] and tx["data"]:
                tags.append(json.loads(tx["data"])["_tag"])
        return tags

    def _GetBalance(self, address):
        return self.balance

    def _CreateTransaction(self, tx):
        self.transactions.append(tx)
        if self.create_response is not None:
            return self.create_response
        result = {"TranID": f"{len(self.transactions):064x}", "Info": "Non-contract txn, sent to shard"}
        if tx["code"]:
            result["ContractAddress"] = CONTRACT_ADDRESS
            result["Info"] = "Contract Creation txn, sent to shard"
        else:
            self._apply_call(tx)
        return {"id": 1, "jsonrpc": "2.0", "result": result}

    def _apply_call(self, tx):
        call = json.loads(tx["data"])
        if call["_tag"] != "IncreaseAllowance":
            return
        args = {p["vname"]: p["value"] for p in call["params"]}
        sender = get_address_from_public_key(bytes.fromhex(tx["pubKey"])).lower()
        state = self.states[tx["toAddr"][2:].lower()]
        entry = state["allowances"].get(sender)
        if not isinstance(entry, dict):
            entry = state["allowances"][sender] = {}
        entry[args["spender"].lower()] = args["amount"]

    def _GetTransaction(self, tx_id):
        return {"id": 1, "jsonrpc": "2.0", "result": {"ID": tx_id, "receipt": self.receipt}}

    def _GetSmartContractState(self, address):
        if self.state_error:
            return {"id": 1, "jsonrpc": "2.0", "error": self.state_error}
        return {"id": 1, "jsonrpc": "2.0", "result": json.loads(json.dumps(self.states[address]))}


@pytest.fixture
def fake_node(monkeypatch):
    node = FakeZilliqa()

    async def send(self, method, *params):
        return await node.send(method, *params)

    monkeypatch.setattr(ZilliqaClient, "send", send)
    return node


@pytest.fixture
def network():
    return NetworkConfig(confirm_attempts=3, confirm_interval=0)


@pytest.fixture
def contracts_dir(tmp_path):
    (tmp_path / "FungibleToken.scilla").write_text(TOKEN_SOURCE)
    (tmp_path / "ZilSwap.scilla").write_text("scilla_version 0 (* swap *) contract ZilSwap()")
    return str(tmp_path)
