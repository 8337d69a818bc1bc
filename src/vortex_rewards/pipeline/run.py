"""High-level pipeline orchestration."""

from __future__ import annotations

import asyncio
from typing import Any

from web3 import Web3

from ..domain import ChainTotals, VortexCalculation
from ..state import AppState
from .calculation import compute_rewards
from .context import PipelineContext
from .inputs import AdapterError, fetch_inputs

CALCULATION_FAILED_MESSAGE = "Failed to calculate vortex data"


class InvalidRequestError(ValueError):
    """Raised when the account or distribution identifier is missing or malformed."""


class CalculationError(RuntimeError):
    """Raised when a calculation could not be completed.

    The message is deliberately generic; adapter details are logged.
    """


def validate_request(account_id: str | None, distribution_id: Any) -> tuple[str, int]:
    """Validate and normalize the request identifiers.

    Returns:
        The checksummed account address and the distribution id as ``int``.

    Raises:
        InvalidRequestError: If either identifier is missing or malformed
    """
    if not account_id or distribution_id is None or distribution_id == "":
        raise InvalidRequestError(
            "Account ID and VTX distribution ID are required"
        )

    if isinstance(distribution_id, bool):
        raise InvalidRequestError(f"Invalid VTX distribution ID: {distribution_id!r}")
    if isinstance(distribution_id, str):
        if not distribution_id.strip().isdigit():
            raise InvalidRequestError(
                f"Invalid VTX distribution ID: {distribution_id!r}"
            )
        distribution_id = int(distribution_id.strip())
    if not isinstance(distribution_id, int) or distribution_id < 0:
        raise InvalidRequestError(f"Invalid VTX distribution ID: {distribution_id!r}")

    account_id = account_id.strip()
    if not Web3.is_address(account_id):
        raise InvalidRequestError(f"Invalid account address: {account_id}")

    return Web3.to_checksum_address(account_id), distribution_id


async def run_calculation(
    state: AppState,
    account_id: str | None,
    distribution_id: Any,
    database: str | None = None,
) -> VortexCalculation:
    """Execute the complete Vortex calculation for one account.

    This is a thin orchestrator that sequences the pipeline steps:
    1. Request validation
    2. Concurrent price and chain state fetch
    3. VTX price, supply and account reward calculation

    Args:
        state: Application state containing settings and logger
        account_id: Account address to calculate the reward for
        distribution_id: Vortex distribution cycle id
        database: Database name overriding the configured default

    Returns:
        The calculation results together with the inputs used.

    Raises:
        InvalidRequestError: If the identifiers are missing or malformed
        CalculationError: If fetching prices or chain state failed
        ZeroVtxPriceError: If the VTX price invariant is violated
        asyncio.TimeoutError: If the run exceeds ``global_timeout_seconds``
    """
    account, distribution = validate_request(account_id, distribution_id)

    s = state.settings
    log = state.logger

    log.info(
        "Starting vortex calculation",
        extra={"account": account, "distribution": distribution},
    )

    timeout_s = s.global_timeout_seconds

    ctx = PipelineContext(
        state=state,
        account_id=account,
        distribution_id=distribution,
        database=database,
    )

    async def _run_pipeline() -> None:
        await fetch_inputs(ctx)
        await compute_rewards(ctx)

    try:
        if timeout_s is None or timeout_s <= 0:
            await _run_pipeline()
        else:
            async with asyncio.timeout(timeout_s):
                await _run_pipeline()
    except AdapterError as exc:
        log.error("Vortex calculation failed: %s", exc)
        raise CalculationError(CALCULATION_FAILED_MESSAGE) from exc
    except asyncio.TimeoutError as exc:
        log.error(
            "Vortex calculation timed out",
            extra={"distribution": distribution, "timeout_seconds": timeout_s},
        )
        raise asyncio.TimeoutError(
            "Calculation exceeded global timeout "
            f"{timeout_s}s (distribution={distribution})\n N.B. This can be changed via "
            "`global_timeout_seconds` or CLI flag `--global-timeout-seconds`."
        ) from exc

    chain_state = ctx.distribution_state_required
    log.info("Vortex calculation completed", extra={"distribution": distribution})

    return VortexCalculation(
        account_id=account,
        distribution_id=distribution,
        inputs=ctx.inputs_required,
        results=ctx.results_required,
        chain_totals=ChainTotals(
            network_reward=chain_state.total_network_reward,
            bootstrap_reward=chain_state.total_bootstrap_reward,
            total_vortex=chain_state.total_vortex,
        ),
    )
