"""
Errors raised while deploying and calling contracts
"""

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional


class ZilswapDeployError(Exception):
    """Base class for deployment failures"""


class MissingPrivateKeyError(ZilswapDeployError, ValueError):
    """No usable private key was provided"""


class RPCError(ZilswapDeployError):
    """The JSON-RPC endpoint answered with an error object"""

    def __init__(self, message: str, code: Optional[int] = None, data: Any = None):
        super().__init__(message)
        self.code = code
        self.data = data

    @classmethod
    def from_response(cls, error: Dict) -> "RPCError":
        return cls(error.get("message", "Unknown RPC error"), error.get("code"), error.get("data"))


class BalanceQueryError(RPCError):
    """Reading the signer's balance failed"""


class TransactionRejectedError(ZilswapDeployError):
    """The network did not hand back a transaction id"""


class TransactionFailedError(ZilswapDeployError):
    """The transaction was accepted but its receipt reports failure"""

    def __init__(self, message: str, errors: Optional[Dict[Any, List[str]]] = None):
        super().__init__(message)
        self.errors = errors or {}


class ConfirmationTimeoutError(ZilswapDeployError):
    """The transaction was not confirmed within the polling budget"""


# Scilla execution error codes as reported in receipts
TRANSACTION_ERRORS: Mapping[int, str] = MappingProxyType({
    0: "CHECKER_FAILED",
    1: "RUNNER_FAILED",
    2: "BALANCE_TRANSFER_FAILED",
    3: "EXECUTE_CMD_FAILED",
    4: "EXECUTE_CMD_TIMEOUT",
    5: "NO_GAS_REMAINING_FOUND",
    6: "NO_ACCEPTED_FOUND",
    7: "CALL_CONTRACT_FAILED",
    8: "CREATE_CONTRACT_FAILED",
    9: "JSON_OUTPUT_CORRUPTED",
    10: "CONTRACT_NOT_EXIST",
    11: "STATE_CORRUPTED",
    12: "LOG_ENTRY_INSTALL_FAILED",
    13: "MESSAGE_CORRUPTED",
    14: "RECEIPT_IS_NULL",
    15: "MAX_DEPTH_REACHED",
    16: "CHAIN_CALL_DIFF_SHARD",
    17: "PREPARATION_FAILED",
    18: "NO_OUTPUT",
    19: "OUTPUT_ILLEGAL",
    20: "MAP_DEPTH_MISSING",
    21: "GAS_NOT_SUFFICIENT",
    22: "INTERNAL_ERROR",
    23: "LIBRARY_AS_RECIPIENT",
    24: "VERSION_INCONSISTENT",
    25: "LIBRARY_EXTRACTION_FAILED",
})


def error_name(code: int) -> str:
    return TRANSACTION_ERRORS.get(int(code), f"UNKNOWN_ERROR_{code}")
