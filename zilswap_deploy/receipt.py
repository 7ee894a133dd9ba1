"""
Receipt Inspector
Checks that a submitted transaction was accepted and executed successfully
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from zilswap_deploy.errors import TransactionFailedError, TransactionRejectedError, error_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransactionReceipt:
    success: bool
    errors: Dict[Any, List[int]] = field(default_factory=dict)
    raw: Dict = field(default_factory=dict)

    @classmethod
    def from_rpc(cls, receipt: Dict) -> "TransactionReceipt":
        return cls(
            success=bool(receipt.get("success")),
            errors=dict(receipt.get("errors") or {}),
            raw=dict(receipt),
        )


@dataclass(frozen=True)
class TransactionResult:
    id: Optional[str]
    receipt: Optional[TransactionReceipt] = None
    error: Any = None


def translate_errors(errors: Dict[Any, List[int]]) -> Dict[Any, List[str]]:
    """Map each depth's numeric error codes to their names, keeping the depth keys"""
    return {depth: [error_name(code) for code in codes] for depth, codes in errors.items()}


def inspect_transaction(result: TransactionResult) -> None:
    """Raise if the transaction was rejected or its execution failed"""
    # Check for txn acceptance
    if not result.id:
        message = json.dumps(result.error or "Failed to get tx id!", indent=2)
        logger.error(f"Transaction rejected: {message}")
        raise TransactionRejectedError(message)

    logger.info(f"Transaction id: {result.id}")

    # Check for txn execution success
    receipt = result.receipt
    if receipt is None or not receipt.success:
        if receipt is not None and receipt.errors:
            messages = translate_errors(receipt.errors)
            message = json.dumps(messages, indent=2)
            logger.error(f"Transaction {result.id} failed: {message}")
            raise TransactionFailedError(message, messages)
        logger.error(f"Transaction {result.id} failed without error details")
        raise TransactionFailedError(json.dumps("Failed to deploy contract!"))
