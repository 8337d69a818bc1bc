from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext

from ..units import VORTEX_CONTEXT

# Network reward is split between the staker and work-point pools.
# The bootstrap reward always goes to the staker pool in full.
STAKER_POOL_NETWORK_SHARE = Decimal("0.3")
WORKPOINT_POOL_NETWORK_SHARE = Decimal("0.7")


@dataclass(frozen=True)
class AccountReward:
    """Reward pools and one account's portion of them."""

    staker_pool: Decimal
    workpoint_pool: Decimal
    staker_share_portion: Decimal
    work_share_portion: Decimal
    account_reward: Decimal


def _portion(account_points: Decimal, total_points: Decimal) -> Decimal:
    if total_points.is_zero():
        return Decimal(0)
    return account_points / total_points


def calculate_account_reward(
    network_reward: Decimal,
    bootstrap_reward: Decimal,
    account_staker_points: Decimal,
    total_staker_points: Decimal,
    account_work_points: Decimal,
    total_work_points: Decimal,
) -> AccountReward:
    """Split minted VTX into pools and allocate the account's share of each.

    Args:
        network_reward: VTX minted from fee pot value
        bootstrap_reward: VTX minted from the bootstrap allowance
        account_staker_points: Account's staker (reward) points for the cycle
        total_staker_points: Staker points of all accounts for the cycle
        account_work_points: Account's work points for the cycle
        total_work_points: Work points of all accounts for the cycle

    Returns:
        Pools, share portions and the account's combined reward. A zero total
        yields a zero portion for that pool.
    """
    with localcontext(VORTEX_CONTEXT):
        staker_pool = bootstrap_reward + network_reward * STAKER_POOL_NETWORK_SHARE
        workpoint_pool = network_reward * WORKPOINT_POOL_NETWORK_SHARE

        staker_share_portion = _portion(account_staker_points, total_staker_points)
        work_share_portion = _portion(account_work_points, total_work_points)

        account_reward = (
            staker_share_portion * staker_pool + work_share_portion * workpoint_pool
        )

    return AccountReward(
        staker_pool=staker_pool,
        workpoint_pool=workpoint_pool,
        staker_share_portion=staker_share_portion,
        work_share_portion=work_share_portion,
        account_reward=account_reward,
    )
