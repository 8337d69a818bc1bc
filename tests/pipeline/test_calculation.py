import logging
from decimal import Decimal

import pytest

from vortex_rewards.domain import AssetBalance, AssetPrice, DistributionInputs
from vortex_rewards.pipeline.calculation import calculate_rewards, compute_rewards
from vortex_rewards.pipeline.context import PipelineContext
from vortex_rewards.processors.vtx_price import UNMINTED_VTX_PRICE
from vortex_rewards.settings import VortexSettings
from vortex_rewards.state import AppState


def _inputs(**overrides):
    values = dict(
        vault_asset_balances=(AssetBalance(asset_id=1, balance=Decimal(2000)),),
        fee_pot_asset_balances=(
            AssetBalance(asset_id=1, balance=Decimal(1000)),
            AssetBalance(asset_id=2, balance=Decimal(500)),
        ),
        asset_prices=(
            AssetPrice(asset_id=1, price=Decimal(2)),
            AssetPrice(asset_id=2, price=Decimal(1)),
        ),
        current_supply=Decimal(1000),
        bootstrap_root=Decimal(100),
        root_price=Decimal(2),
        account_work_points=Decimal(50),
        total_work_points=Decimal(100),
        account_staker_points=Decimal(20),
        total_staker_points=Decimal(200),
    )
    values.update(overrides)
    return DistributionInputs(**values)


def test_calculate_rewards_end_to_end():
    results = calculate_rewards(_inputs())

    # vault worth 4000 USD over 1000 VTX
    assert results.vtx_price == Decimal(4)
    # fee pot worth 2500 USD, bootstrap 100 ROOT at 2 USD
    assert results.network_reward == Decimal("625")
    assert results.bootstrap_reward == Decimal(50)
    assert results.total_vortex == Decimal(675)
    assert results.staker_pool == Decimal("237.5")
    assert results.workpoint_pool == Decimal("437.5")
    assert results.staker_share_portion == Decimal("0.1")
    assert results.work_share_portion == Decimal("0.5")
    assert results.account_reward == Decimal("242.5")


def test_calculate_rewards_first_cycle_uses_unit_price():
    results = calculate_rewards(_inputs(current_supply=Decimal(0)))

    assert results.vtx_price == UNMINTED_VTX_PRICE
    assert results.network_reward == Decimal(2500)
    assert results.bootstrap_reward == Decimal(200)


def test_calculate_rewards_is_deterministic():
    inputs = _inputs(total_work_points=Decimal(3), account_work_points=Decimal(1))
    assert calculate_rewards(inputs) == calculate_rewards(inputs)


def test_account_reward_never_exceeds_pools():
    inputs = _inputs(
        account_work_points=Decimal(100), account_staker_points=Decimal(200)
    )
    results = calculate_rewards(inputs)
    assert results.account_reward == results.staker_pool + results.workpoint_pool
    assert results.account_reward == results.total_vortex


@pytest.mark.asyncio
async def test_compute_rewards_sets_results():
    state = AppState(settings=VortexSettings(), logger=logging.getLogger("test"))
    ctx = PipelineContext(state=state, account_id="0xA", distribution_id=1)
    ctx.inputs = _inputs()

    await compute_rewards(ctx)

    assert ctx.results_required == calculate_rewards(ctx.inputs)


@pytest.mark.asyncio
async def test_compute_rewards_requires_inputs():
    state = AppState(settings=VortexSettings(), logger=logging.getLogger("test"))
    ctx = PipelineContext(state=state, account_id="0xA", distribution_id=1)

    with pytest.raises(RuntimeError, match="Calculation inputs"):
        await compute_rewards(ctx)
