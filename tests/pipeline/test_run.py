import asyncio
import logging
from decimal import Decimal

import pytest

from vortex_rewards.domain import (
    AssetBalance,
    AssetPrice,
    CalculationResult,
    DistributionInputs,
    DistributionState,
)
from vortex_rewards.pipeline import run as pipeline_run
from vortex_rewards.pipeline.inputs import AdapterError
from vortex_rewards.pipeline.run import (
    CALCULATION_FAILED_MESSAGE,
    CalculationError,
    InvalidRequestError,
    validate_request,
)
from vortex_rewards.processors import ZeroVtxPriceError
from vortex_rewards.settings import VortexSettings
from vortex_rewards.state import AppState

ACCOUNT = "0xe04cc55ebee1cbce552f250e85c57b70b2e2625b"
CHECKSUMMED = "0xE04CC55ebEE1cBCE552f250e85c57B70B2E2625b"

CHAIN_STATE = DistributionState(
    fee_pot_asset_balances=(AssetBalance(asset_id=1, balance=Decimal(1000)),),
    vault_asset_balances=(AssetBalance(asset_id=1, balance=Decimal(2000)),),
    current_supply=Decimal(1000),
    total_work_points=Decimal(100),
    account_work_points=Decimal(50),
    total_staker_points=Decimal(200),
    account_staker_points=Decimal(20),
    total_network_reward=Decimal(500),
    total_bootstrap_reward=Decimal(0),
    total_vortex=Decimal(500),
)

INPUTS = DistributionInputs(
    vault_asset_balances=CHAIN_STATE.vault_asset_balances,
    fee_pot_asset_balances=CHAIN_STATE.fee_pot_asset_balances,
    asset_prices=(AssetPrice(asset_id=1, price=Decimal(2)),),
    current_supply=Decimal(1000),
    bootstrap_root=Decimal(0),
    root_price=Decimal(2),
    account_work_points=Decimal(50),
    total_work_points=Decimal(100),
    account_staker_points=Decimal(20),
    total_staker_points=Decimal(200),
)


def _state(**settings) -> AppState:
    return AppState(
        settings=VortexSettings(**settings), logger=logging.getLogger("test")
    )


async def _fake_fetch(ctx):
    ctx.distribution_state = CHAIN_STATE
    ctx.inputs = INPUTS


@pytest.mark.parametrize(
    "account_id, distribution_id",
    [
        (None, 6),
        ("", 6),
        (ACCOUNT, None),
        (ACCOUNT, ""),
        (ACCOUNT, "six"),
        (ACCOUNT, -1),
        (ACCOUNT, True),
        (ACCOUNT, 6.5),
        ("0x1234", 6),
        ("not-an-address", 6),
    ],
)
def test_validate_request_rejects(account_id, distribution_id):
    with pytest.raises(InvalidRequestError):
        validate_request(account_id, distribution_id)


def test_validate_request_normalizes():
    assert validate_request(f" {ACCOUNT} ", " 6 ") == (CHECKSUMMED, 6)
    assert validate_request(CHECKSUMMED, 0) == (CHECKSUMMED, 0)


@pytest.mark.asyncio
async def test_run_calculation_returns_results(monkeypatch):
    monkeypatch.setattr(pipeline_run, "fetch_inputs", _fake_fetch)

    calculation = await pipeline_run.run_calculation(_state(), ACCOUNT, "6")

    assert calculation.account_id == CHECKSUMMED
    assert calculation.distribution_id == 6
    assert calculation.inputs is INPUTS
    assert calculation.results.vtx_price == Decimal(4)
    assert calculation.results.network_reward == Decimal(500)
    assert calculation.chain_totals.total_vortex == Decimal(500)
    assert calculation.chain_totals.network_reward == Decimal(500)


@pytest.mark.asyncio
async def test_run_calculation_passes_database(monkeypatch):
    seen = {}

    async def fetch(ctx):
        seen["database"] = ctx.database
        await _fake_fetch(ctx)

    monkeypatch.setattr(pipeline_run, "fetch_inputs", fetch)

    await pipeline_run.run_calculation(_state(), ACCOUNT, 6, database="vortex-dev")

    assert seen["database"] == "vortex-dev"


@pytest.mark.asyncio
async def test_run_calculation_validates_before_fetching(monkeypatch):
    async def fail(_ctx):
        raise AssertionError("fetch_inputs should not run")

    monkeypatch.setattr(pipeline_run, "fetch_inputs", fail)

    with pytest.raises(InvalidRequestError):
        await pipeline_run.run_calculation(_state(), "0xnope", 6)


@pytest.mark.asyncio
async def test_adapter_failure_becomes_generic_error(monkeypatch):
    async def fail(_ctx):
        raise AdapterError(
            "Failed to fetch data from 1 adapter(s): root_network",
            [("root_network", ConnectionError("refused"))],
        )

    monkeypatch.setattr(pipeline_run, "fetch_inputs", fail)

    with pytest.raises(CalculationError) as exc_info:
        await pipeline_run.run_calculation(_state(), ACCOUNT, 6)

    assert str(exc_info.value) == CALCULATION_FAILED_MESSAGE
    assert isinstance(exc_info.value.__cause__, AdapterError)


@pytest.mark.asyncio
async def test_zero_vtx_price_propagates(monkeypatch):
    async def fetch(ctx):
        await _fake_fetch(ctx)

    async def zero_price(_ctx):
        raise ZeroVtxPriceError("VTX price is zero")

    monkeypatch.setattr(pipeline_run, "fetch_inputs", fetch)
    monkeypatch.setattr(pipeline_run, "compute_rewards", zero_price)

    with pytest.raises(ZeroVtxPriceError):
        await pipeline_run.run_calculation(_state(), ACCOUNT, 6)


@pytest.mark.asyncio
async def test_run_calculation_raises_timeout(monkeypatch):
    async def slow_fetch(_ctx):
        await asyncio.sleep(0.2)

    monkeypatch.setattr(pipeline_run, "fetch_inputs", slow_fetch)

    with pytest.raises(asyncio.TimeoutError, match="--global-timeout-seconds"):
        await pipeline_run.run_calculation(
            _state(global_timeout_seconds=0.05), ACCOUNT, 6
        )


@pytest.mark.asyncio
async def test_zero_timeout_disables_limit(monkeypatch):
    async def fetch(ctx):
        await asyncio.sleep(0.01)
        await _fake_fetch(ctx)

    monkeypatch.setattr(pipeline_run, "fetch_inputs", fetch)

    calculation = await pipeline_run.run_calculation(
        _state(global_timeout_seconds=0), ACCOUNT, 6
    )

    assert isinstance(calculation.results, CalculationResult)
