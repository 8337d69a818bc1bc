"""Concurrent collection of prices and chain state."""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from typing import Any, Sequence

from ..adapters import CHAIN_STATE_ADAPTER, PRICE_ADAPTER
from ..domain import AssetPrice, DistributionInputs, DistributionState
from ..processors import index_prices
from ..settings import VortexSettings
from .context import PipelineContext


class AdapterError(Exception):
    """Raised when one or more adapters failed to return data."""

    def __init__(self, message: str, failures: list[tuple[str, BaseException]]):
        super().__init__(message)
        self.failures = failures


def _process_adapter_results(
    adapter_names: Sequence[str],
    results: Sequence[Any],
    log: logging.Logger,
) -> None:
    """Log every adapter failure and raise if there was at least one.

    Args:
        adapter_names: Adapter names in the order their tasks were gathered
        results: Results from asyncio.gather (may contain exceptions)
        log: Logger for failure details

    Raises:
        AdapterError: If any result is an exception
    """
    failures: list[tuple[str, BaseException]] = []
    for name, result in zip(adapter_names, results):
        if isinstance(result, BaseException):
            log.error("Adapter '%s' failed: %r", name, result)
            failures.append((name, result))
        else:
            log.debug("Adapter '%s' returned data", name)

    if failures:
        failed = ", ".join(name for name, _ in failures)
        raise AdapterError(
            f"Failed to fetch data from {len(failures)} adapter(s): {failed}",
            failures,
        ) from failures[0][1]


def build_inputs(
    settings: VortexSettings,
    asset_prices: Sequence[AssetPrice],
    chain_state: DistributionState,
) -> DistributionInputs:
    """Assemble calculation inputs from adapter data and configuration.

    The root price is the stored price of the configured root asset, zero when
    missing. The bootstrap quantity comes from settings, not from the chain.
    """
    root_price = index_prices(asset_prices).get(settings.root_asset_id, Decimal(0))
    return DistributionInputs(
        vault_asset_balances=chain_state.vault_asset_balances,
        fee_pot_asset_balances=chain_state.fee_pot_asset_balances,
        asset_prices=tuple(asset_prices),
        current_supply=chain_state.current_supply,
        bootstrap_root=settings.bootstrap_root,
        root_price=root_price,
        account_work_points=chain_state.account_work_points,
        total_work_points=chain_state.total_work_points,
        account_staker_points=chain_state.account_staker_points,
        total_staker_points=chain_state.total_staker_points,
    )


async def fetch_inputs(ctx: PipelineContext) -> None:
    """Fetch asset prices and chain state concurrently.

    Args:
        ctx: Pipeline context with the account and distribution to fetch

    Sets the asset prices, distribution state and calculation inputs in the
    context.

    Raises:
        AdapterError: If either adapter fails
    """
    s = ctx.state.settings
    log = ctx.state.logger

    price_adapter = PRICE_ADAPTER(s, database=ctx.database)
    chain_adapter = CHAIN_STATE_ADAPTER(s)

    log.info(
        "Fetching prices and chain state for distribution %d...", ctx.distribution_id
    )
    results = await asyncio.gather(
        price_adapter.fetch_prices(ctx.distribution_id),
        chain_adapter.fetch_distribution_state(ctx.distribution_id, ctx.account_id),
        return_exceptions=True,
    )
    _process_adapter_results(
        [price_adapter.adapter_name, chain_adapter.adapter_name], results, log
    )

    asset_prices, chain_state = results
    ctx.asset_prices = tuple(asset_prices)
    ctx.distribution_state = chain_state
    ctx.inputs = build_inputs(s, ctx.asset_prices, chain_state)
    log.debug("Calculation inputs: %s", ctx.inputs)
