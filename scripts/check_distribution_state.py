#!/usr/bin/env python3
"""Standalone script that dumps the on-chain Vortex distribution state for an account."""

from __future__ import annotations

import asyncio
import sys
from argparse import ArgumentParser

from vortex_rewards.adapters.chain_adapters import RootNetworkChainAdapter
from vortex_rewards.logger import get_logger, setup_logging
from vortex_rewards.settings import Network, VortexSettings

setup_logging()
logger = get_logger(__name__)


async def check_distribution_state(
    distribution_id: int,
    account_id: str,
    network: Network = Network.ROOT,
    rpc_url: str | None = None,
) -> int:
    """Fetch and log the chain state used by the reward calculation.

    Args:
        distribution_id: Vortex distribution id to inspect
        account_id: Account address whose points are fetched
        network: Network whose public RPC is used when rpc_url is not given
        rpc_url: Custom RPC URL (optional)
    """
    config = VortexSettings(network=network, rpc_url=rpc_url)

    logger.info("=== Vortex Distribution State ===")
    logger.info(f"Distribution: {distribution_id}")
    logger.info(f"Account: {account_id}")
    logger.info(f"RPC: {config.rpc_url_resolved}")
    logger.info("=" * 60)

    adapter = RootNetworkChainAdapter(config)
    state = await adapter.fetch_distribution_state(distribution_id, account_id)

    logger.info("\n=== Results ===")
    for balance in state.fee_pot_asset_balances:
        logger.info(f"Fee pot asset {balance.asset_id}: {balance.balance}")
    for balance in state.vault_asset_balances:
        logger.info(f"Vault asset {balance.asset_id}: {balance.balance}")
    logger.info(f"VTX supply: {state.current_supply}")
    logger.info(
        f"Work points: {state.account_work_points} / {state.total_work_points}"
    )
    logger.info(
        f"Reward points: {state.account_staker_points} / {state.total_staker_points}"
    )
    logger.info(f"Chain network reward: {state.total_network_reward}")
    logger.info(f"Chain bootstrap reward: {state.total_bootstrap_reward}")
    logger.info(f"Chain total vortex: {state.total_vortex}")
    logger.info("=" * 60)

    return 0


def main() -> int:
    """Parse arguments and dump the state."""
    parser = ArgumentParser(
        description="Dump on-chain Vortex distribution state for an account"
    )
    parser.add_argument(
        "distribution_id",
        type=int,
        help="Vortex distribution id",
    )
    parser.add_argument(
        "account_id",
        help="Account address",
    )
    parser.add_argument(
        "--network",
        choices=[n.value for n in Network],
        default=Network.ROOT.value,
        help="Network to query (default: root)",
    )
    parser.add_argument(
        "--rpc-url",
        help="Custom RPC URL (optional)",
    )

    args = parser.parse_args()

    try:
        return asyncio.run(
            check_distribution_state(
                distribution_id=args.distribution_id,
                account_id=args.account_id,
                network=Network(args.network),
                rpc_url=args.rpc_url,
            )
        )
    except KeyboardInterrupt:
        logger.info("\nInterrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Failed with error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
