"""
Configuration
Network parameters and deploy settings, resolved from the environment once at the boundary
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Union

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

TESTNET_RPC = "https://dev-api.zilliqa.com"
TESTNET_CHAIN_ID = 333
MSG_VERSION = 1

QA_PER_LI = 10**6
DEFAULT_GAS_PRICE = 1000 * QA_PER_LI
DEFAULT_GAS_LIMIT = 80000
DEFAULT_CALL_GAS_LIMIT = 10000
CONFIRM_ATTEMPTS = 33
CONFIRM_INTERVAL = 1.0  # seconds

DEFAULT_CONTRACTS_DIR = "contracts"


def pack(chain_id: int, msg_version: int) -> int:
    """Combine chain id and message version into a transaction version"""
    if chain_id >> 16 > 0:
        raise ValueError("Chain id too large")
    if msg_version >> 16 > 0:
        raise ValueError("Message version too large")
    return (chain_id << 16) + msg_version


@dataclass(frozen=True)
class NetworkConfig:
    rpc_url: str = TESTNET_RPC
    chain_id: int = TESTNET_CHAIN_ID
    msg_version: int = MSG_VERSION
    gas_price: int = DEFAULT_GAS_PRICE
    gas_limit: int = DEFAULT_GAS_LIMIT
    call_gas_limit: int = DEFAULT_CALL_GAS_LIMIT
    confirm_attempts: int = CONFIRM_ATTEMPTS
    confirm_interval: float = CONFIRM_INTERVAL
    to_ds: bool = False

    @property
    def version(self) -> int:
        return pack(self.chain_id, self.msg_version)

    @classmethod
    def from_env(cls) -> "NetworkConfig":
        """Build the network config, letting environment variables override the testnet defaults"""
        return cls(
            rpc_url=os.getenv("ZILLIQA_RPC", TESTNET_RPC),
            chain_id=int(os.getenv("ZILLIQA_CHAIN_ID", TESTNET_CHAIN_ID)),
            gas_price=int(os.getenv("ZILLIQA_GAS_PRICE", DEFAULT_GAS_PRICE)),
            gas_limit=int(os.getenv("ZILLIQA_GAS_LIMIT", DEFAULT_GAS_LIMIT)),
            confirm_attempts=int(os.getenv("ZILLIQA_CONFIRM_ATTEMPTS", CONFIRM_ATTEMPTS)),
            confirm_interval=float(os.getenv("ZILLIQA_CONFIRM_INTERVAL", CONFIRM_INTERVAL)),
        )


@dataclass(frozen=True)
class DeployNew:
    """Deploy a fresh contract"""


@dataclass(frozen=True)
class UseExisting:
    """Operate on an already deployed contract"""
    address: str


ContractChoice = Union[DeployNew, UseExisting]


def resolve_choice(existing_address: Optional[str]) -> ContractChoice:
    if existing_address:
        return UseExisting(existing_address)
    return DeployNew()


@dataclass(frozen=True)
class DeploySettings:
    private_key: Optional[str] = None
    token: ContractChoice = field(default_factory=DeployNew)
    zilswap: ContractChoice = field(default_factory=DeployNew)
    contracts_dir: str = DEFAULT_CONTRACTS_DIR
    network: NetworkConfig = field(default_factory=NetworkConfig)

    @classmethod
    def from_env(cls) -> "DeploySettings":
        """Read the private key and existing contract references from the environment"""
        return cls(
            private_key=os.getenv("PRIVATE_KEY"),
            token=resolve_choice(os.getenv("TOKEN_HASH")),
            zilswap=resolve_choice(os.getenv("CONTRACT_HASH")),
            contracts_dir=os.getenv("CONTRACTS_DIR", DEFAULT_CONTRACTS_DIR),
            network=NetworkConfig.from_env(),
        )
