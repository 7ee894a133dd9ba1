"""
ZilSwap deployment helpers
Deploys Scilla contracts to the Zilliqa testnet and returns (contract, state) pairs
"""

from zilswap_deploy.config import DeployNew, DeploySettings, NetworkConfig, UseExisting, resolve_choice
from zilswap_deploy.deploy import (
    call_contract,
    deploy_contract,
    deploy_fungible_token,
    deploy_zilswap,
    get_contract,
    use_fungible_token,
    use_zilswap,
)
from zilswap_deploy.errors import (
    BalanceQueryError,
    ConfirmationTimeoutError,
    MissingPrivateKeyError,
    RPCError,
    TransactionFailedError,
    TransactionRejectedError,
    ZilswapDeployError,
)
from zilswap_deploy.init_params import InitParam, TokenParams
from zilswap_deploy.network_client import ContractHandle, ZilliqaClient

__all__ = [
    "BalanceQueryError",
    "ConfirmationTimeoutError",
    "ContractHandle",
    "DeployNew",
    "DeploySettings",
    "InitParam",
    "MissingPrivateKeyError",
    "NetworkConfig",
    "RPCError",
    "TokenParams",
    "TransactionFailedError",
    "TransactionRejectedError",
    "UseExisting",
    "ZilliqaClient",
    "ZilswapDeployError",
    "call_contract",
    "deploy_contract",
    "deploy_fungible_token",
    "deploy_zilswap",
    "get_contract",
    "resolve_choice",
    "use_fungible_token",
    "use_zilswap",
]
