"""
Contract initialization parameters
"""

import json
import secrets
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

SCILLA_VERSION = "0"
DEFAULT_TOKEN_NAME = "ZS Test Token"
DEFAULT_DECIMALS = 12
DEFAULT_SUPPLY = 10**21


@dataclass(frozen=True)
class InitParam:
    vname: str
    type: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {"vname": self.vname, "type": self.type, "value": self.value}


@dataclass(frozen=True)
class TokenParams:
    name: str = DEFAULT_TOKEN_NAME
    symbol: Optional[str] = None
    decimals: int = DEFAULT_DECIMALS
    supply: int = DEFAULT_SUPPLY


@dataclass(frozen=True)
class DeploymentRequest:
    """One contract deployment: signer, compressed source and init array"""
    private_key: str = field(repr=False)
    code: str
    init: Tuple[InitParam, ...]

    def __post_init__(self):
        object.__setattr__(self, "init", tuple(self.init))

    def init_json(self) -> str:
        return json.dumps([param.to_dict() for param in self.init])


def generate_symbol() -> str:
    """Random test symbol, e.g. TEST-3FA0"""
    return f"TEST-{secrets.token_hex(2).upper()}"


def scilla_version(version: str = SCILLA_VERSION) -> InitParam:
    # mandatory first entry of every init array
    return InitParam("_scilla_version", "Uint32", str(version))


def fungible_token_init(owner: str, name: str = DEFAULT_TOKEN_NAME, symbol: Optional[str] = None,
                        decimals: int = DEFAULT_DECIMALS, supply: int = DEFAULT_SUPPLY) -> Tuple[InitParam, ...]:
    """Init array for FungibleToken.scilla; owner is a hex address"""
    return (
        scilla_version(),
        InitParam("contract_owner", "ByStr20", owner),
        InitParam("name", "String", name),
        InitParam("symbol", "String", symbol or generate_symbol()),
        InitParam("decimals", "Uint32", str(decimals)),
        InitParam("init_supply", "Uint128", str(supply)),
    )


def zilswap_init(version: str = SCILLA_VERSION) -> Tuple[InitParam, ...]:
    """Init array for ZilSwap.scilla"""
    return (scilla_version(version),)
