"""
Contract Deployment
Deploys the fungible token and ZilSwap contracts, or looks up existing ones
"""

import json
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional, Sequence, Tuple

from zilswap_deploy.config import DEFAULT_CONTRACTS_DIR, ContractChoice, NetworkConfig, UseExisting
from zilswap_deploy.crypto import get_address_from_private_key
from zilswap_deploy.errors import MissingPrivateKeyError, TransactionRejectedError
from zilswap_deploy.init_params import (
    DeploymentRequest,
    InitParam,
    TokenParams,
    fungible_token_init,
    generate_symbol,
    zilswap_init,
)
from zilswap_deploy.network_client import ContractHandle, ZilliqaClient
from zilswap_deploy.receipt import TransactionResult, inspect_transaction
from zilswap_deploy.source_loader import compress_code, load_contract

logger = logging.getLogger(__name__)


def _require_key(private_key: Optional[str]):
    if not private_key:
        raise MissingPrivateKeyError("No private key was provided!")


async def deploy_contract(private_key: str, code: str, init: Sequence[InitParam],
                          network: Optional[NetworkConfig] = None) -> Tuple[ContractHandle, Dict]:
    """Deploy a contract and return it together with its freshly fetched state"""
    _require_key(private_key)
    request = DeploymentRequest(private_key, compress_code(code), tuple(init))
    client = ZilliqaClient(request.private_key, network)

    # Check for account
    balance = await client.get_balance()
    logger.info(f"Deploying from {client.address} (balance: {balance.get('balance')})")

    # Deploy contract
    contract, deploy_tx = await client.deploy(request, nonce=int(balance["nonce"]) + 1)
    inspect_transaction(deploy_tx)
    logger.info(f"Deployment transaction receipt:\n{json.dumps(deploy_tx.receipt.raw)}")

    if contract is None:
        raise TransactionRejectedError(f"No contract address returned for transaction {deploy_tx.id}")

    # Refetch contract
    logger.info(f"The contract address is: {contract.address}")
    logger.info("Refetching contract state...")
    deployed = client.at(contract.address)
    state = await deployed.get_state()
    logger.info(f"The state of the contract is:\n{json.dumps(state, indent=2)}")

    return deployed, state


async def get_contract(private_key: str, address: str,
                       network: Optional[NetworkConfig] = None) -> Tuple[ContractHandle, Dict]:
    """Look up an already deployed contract without deploying anything"""
    _require_key(private_key)
    client = ZilliqaClient(private_key, network)
    contract = client.at(address)
    state = await contract.get_state()
    return contract, state


async def call_contract(contract: ContractHandle, transition: str, params: Sequence[InitParam],
                        amount: int = 0) -> TransactionResult:
    """Invoke a transition, signed by the contract's client, and fail unless it executes successfully"""
    logger.info(f"Calling {transition} on {contract.address}...")
    result = await contract.call(transition, params, amount)
    inspect_transaction(result)
    return result


async def deploy_fungible_token(private_key: str, params: TokenParams = TokenParams(),
                                network: Optional[NetworkConfig] = None,
                                contracts_dir: str = DEFAULT_CONTRACTS_DIR) -> Tuple[ContractHandle, Dict]:
    _require_key(private_key)

    owner = get_address_from_private_key(private_key)
    symbol = params.symbol or generate_symbol()

    code = load_contract("FungibleToken", contracts_dir)
    init = fungible_token_init(owner, params.name, symbol, params.decimals, params.supply)

    logger.info(f"Deploying fungible token {symbol}...")
    return await deploy_contract(private_key, code, init, network)


async def deploy_zilswap(private_key: str, version: str = "0", network: Optional[NetworkConfig] = None,
                         contracts_dir: str = DEFAULT_CONTRACTS_DIR) -> Tuple[ContractHandle, Dict]:
    _require_key(private_key)

    code = load_contract("ZilSwap", contracts_dir)
    init = zilswap_init(version)

    logger.info("Deploying zilswap...")
    return await deploy_contract(private_key, code, init, network)


async def _deploy_or_fetch(choice: ContractChoice, private_key: str, deploy, network: Optional[NetworkConfig]):
    if isinstance(choice, UseExisting):
        logger.info(f"Using existing contract at {choice.address}")
        return await get_contract(private_key, choice.address, network)
    return await deploy()


async def use_zilswap(private_key: str, choice: ContractChoice, version: str = "0",
                      network: Optional[NetworkConfig] = None,
                      contracts_dir: str = DEFAULT_CONTRACTS_DIR) -> Tuple[ContractHandle, Dict]:
    return await _deploy_or_fetch(
        choice, private_key,
        lambda: deploy_zilswap(private_key, version, network, contracts_dir),
        network,
    )


def _to_amount(value) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("NaN")


def current_allowance(state: Dict, owner: str, spender: str) -> Decimal:
    """Allowance granted by owner to spender; NaN if the entry is missing or not a number"""
    allowances = state.get("allowances")
    if not isinstance(allowances, dict):
        return Decimal(0)
    owner_entry = allowances.get(owner.lower())
    if isinstance(owner_entry, dict):
        return _to_amount(owner_entry.get(spender.lower()))
    if not owner_entry:
        return Decimal(0)
    return Decimal("NaN")


async def use_fungible_token(private_key: str, params: TokenParams, spender: str, choice: ContractChoice,
                             network: Optional[NetworkConfig] = None,
                             contracts_dir: str = DEFAULT_CONTRACTS_DIR) -> Tuple[ContractHandle, Dict]:
    """Deploy or fetch a token and make sure spender may move the caller's full supply"""
    contract, state = await _deploy_or_fetch(
        choice, private_key,
        lambda: deploy_fungible_token(private_key, params, network, contracts_dir),
        network,
    )

    owner = get_address_from_private_key(private_key)
    allowance = current_allowance(state, owner, spender)
    if allowance.is_nan():
        # treated like zero; may hide a malformed allowances map
        logger.warning(f"Allowance of {spender} on {contract.address} is not a number, treating it as zero")

    if allowance.is_nan() or allowance == 0:
        await call_contract(
            contract,
            "IncreaseAllowance",
            [
                InitParam("spender", "ByStr20", spender),
                InitParam("amount", "Uint128", str(state["total_supply"])),
            ],
        )
        return contract, await contract.get_state()

    return contract, state
