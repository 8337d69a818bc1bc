"""Reward calculation stages."""

from __future__ import annotations

from ..domain import CalculationResult, DistributionInputs
from ..processors import (
    calculate_account_reward,
    calculate_vtx_amounts,
    calculate_vtx_price,
)
from .context import PipelineContext


def calculate_rewards(inputs: DistributionInputs) -> CalculationResult:
    """Run price, supply and account allocation in sequence.

    Pure function of ``inputs``; identical inputs give identical results.

    Raises:
        ZeroVtxPriceError: If the derived VTX price is zero
    """
    vtx_price = calculate_vtx_price(
        inputs.vault_asset_balances,
        inputs.asset_prices,
        inputs.current_supply,
    )
    amounts = calculate_vtx_amounts(
        inputs.fee_pot_asset_balances,
        inputs.asset_prices,
        inputs.bootstrap_root,
        inputs.root_price,
        vtx_price,
    )
    reward = calculate_account_reward(
        amounts.network_reward,
        amounts.bootstrap_reward,
        inputs.account_staker_points,
        inputs.total_staker_points,
        inputs.account_work_points,
        inputs.total_work_points,
    )
    return CalculationResult(
        vtx_price=vtx_price,
        network_reward=amounts.network_reward,
        bootstrap_reward=amounts.bootstrap_reward,
        total_vortex=amounts.total,
        staker_pool=reward.staker_pool,
        workpoint_pool=reward.workpoint_pool,
        staker_share_portion=reward.staker_share_portion,
        work_share_portion=reward.work_share_portion,
        account_reward=reward.account_reward,
    )


async def compute_rewards(ctx: PipelineContext) -> None:
    """Derive the calculation result from the fetched inputs.

    Args:
        ctx: Pipeline context containing calculation inputs

    Sets the results in the context.
    """
    log = ctx.state.logger
    inputs = ctx.inputs_required

    log.info("Calculating VTX price, supply and account reward...")
    results = calculate_rewards(inputs)

    log.info("VTX price: %s", results.vtx_price)
    log.info(
        "Network reward: %s, bootstrap: %s, total: %s",
        results.network_reward,
        results.bootstrap_reward,
        results.total_vortex,
    )
    log.debug(
        "Staker pool: %s, workpoint pool: %s", results.staker_pool, results.workpoint_pool
    )
    log.debug(
        "Staker portion: %s, work portion: %s",
        results.staker_share_portion,
        results.work_share_portion,
    )
    log.info("Account reward: %s", results.account_reward)

    ctx.results = results
