#!/usr/bin/env python3
"""
ZilSwap Deployment Script
Deploys (or reuses) ZilSwap and a test token approved for it
"""

import argparse
import asyncio
import logging
import sys

from zilswap_deploy import DeploySettings, TokenParams, use_fungible_token, use_zilswap
from zilswap_deploy.init_params import DEFAULT_DECIMALS, DEFAULT_SUPPLY, DEFAULT_TOKEN_NAME

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler('deploy.log'),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Deploy ZilSwap and a test token')
    parser.add_argument('--name', default=DEFAULT_TOKEN_NAME, help='Token name')
    parser.add_argument('--symbol', default=None, help='Token symbol (random TEST-XXXX if omitted)')
    parser.add_argument('--decimals', type=int, default=DEFAULT_DECIMALS, help='Token decimals')
    parser.add_argument('--supply', type=int, default=DEFAULT_SUPPLY, help='Initial token supply')
    parser.add_argument('--skip-token', action='store_true', help='Only deploy ZilSwap')
    return parser.parse_args(argv)


async def main(argv=None):
    """Deploy contracts"""
    args = parse_args(argv)
    settings = DeploySettings.from_env()

    zilswap, _ = await use_zilswap(
        settings.private_key, settings.zilswap,
        network=settings.network, contracts_dir=settings.contracts_dir,
    )
    print(f"ZilSwap: {zilswap.address}")

    if args.skip_token:
        return

    params = TokenParams(name=args.name, symbol=args.symbol, decimals=args.decimals, supply=args.supply)
    token, state = await use_fungible_token(
        settings.private_key, params, zilswap.address, settings.token,
        network=settings.network, contracts_dir=settings.contracts_dir,
    )
    print(f"Token: {token.address} (total supply {state.get('total_supply')})")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Deployment interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)
