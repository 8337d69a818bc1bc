"""CLI entrypoint for vortex-rewards."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from dataclasses import asdict
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Annotated, Any

import typer

from .logger import setup_logging
from .settings import Network, OutputFormat, VortexSettings
from .state import AppState

REWARD_CYCLE_FAILED_MESSAGE = "Failed to fetch reward cycle data"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    add_help_option=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    help="Vortex reward calculation over Root Network distribution data.",
)

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to a TOML config file (can include [vortex_rewards] table).",
    ),
]
DatabaseOption = Annotated[
    str | None,
    typer.Option(
        "--database",
        "-d",
        help="MongoDB database to read from; overrides mongodb_default_db.",
    ),
]
OutputOption = Annotated[
    OutputFormat | None,
    typer.Option("--format", "-f", help="Output format (table or json)."),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option(
        "--log-level",
        help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    ),
]
ShowConfigOption = Annotated[
    bool,
    typer.Option(
        "--show-config",
        help="Print effective config (with secrets redacted) and exit.",
    ),
]


def _build_logger() -> logging.Logger:
    """Build a logger instance."""
    return logging.getLogger("vortex_rewards")


def _build_state(
    config_path: Path | None,
    init_kwargs: dict[str, Any],
    show_config: bool,
) -> AppState:
    """Load settings, configure logging and handle --show-config."""
    if config_path:
        os.environ["VORTEX_CONFIG"] = str(config_path)

    settings = VortexSettings(**init_kwargs)

    setup_logging(settings.log_level)
    state = AppState(settings=settings, logger=_build_logger())

    if show_config:
        typer.echo(json.dumps(settings.as_safe_dict(), indent=2))
        raise typer.Exit(code=0)

    return state


def _parse_bootstrap_root(value: str) -> Decimal:
    try:
        parsed = Decimal(value)
    except InvalidOperation as e:
        raise typer.BadParameter(
            f"bootstrap root must be a number, got {value!r}",
            param_hint="--bootstrap-root",
        ) from e
    if not parsed.is_finite() or parsed < 0:
        raise typer.BadParameter(
            "bootstrap root must be a non-negative number",
            param_hint="--bootstrap-root",
        )
    return parsed


@app.command()
def calculate(
    account_id: Annotated[str, typer.Argument(help="Account address to calculate.")],
    distribution_id: Annotated[
        int, typer.Argument(help="Vortex distribution id.", min=0)
    ],
    config_path: ConfigOption = None,
    database: DatabaseOption = None,
    network: Annotated[
        Network | None,
        typer.Option(
            "--network",
            "-n",
            help="Network to use (root, porcini, or local).",
        ),
    ] = None,
    rpc_url: Annotated[
        str | None,
        typer.Option(
            "--rpc-url",
            help="Root Network RPC endpoint; overrides default network RPC.",
        ),
    ] = None,
    bootstrap_root: Annotated[
        str | None,
        typer.Option(
            "--bootstrap-root",
            help="Bootstrap quantity for the cycle, in ROOT native units.",
        ),
    ] = None,
    global_timeout_seconds: Annotated[
        float | None,
        typer.Option(
            "--global-timeout-seconds",
            help="Abort the calculation after this many seconds (0 disables).",
        ),
    ] = None,
    output_format: OutputOption = None,
    log_level: LogLevelOption = None,
    show_config: ShowConfigOption = False,
):
    """Calculate the VTX reward of an account for a distribution cycle.

    Loads configuration, fetches stored prices and on-chain state, runs the
    price, supply and allocation stages, and prints the result.
    """
    init_kwargs: dict[str, Any] = {}
    if network is not None:
        init_kwargs["network"] = network
    if rpc_url is not None:
        init_kwargs["rpc_url"] = rpc_url
    if bootstrap_root is not None:
        init_kwargs["bootstrap_root"] = _parse_bootstrap_root(bootstrap_root)
    if global_timeout_seconds is not None:
        init_kwargs["global_timeout_seconds"] = global_timeout_seconds
    if output_format is not None:
        init_kwargs["output_format"] = output_format
    if log_level is not None:
        init_kwargs["log_level"] = log_level.upper()

    state = _build_state(config_path, init_kwargs, show_config)

    from .pipeline.run import (
        CalculationError,
        InvalidRequestError,
        run_calculation,
    )
    from .report import generate_report, publish_report

    async def _calculate_and_publish() -> None:
        calculation = await run_calculation(
            state, account_id, distribution_id, database=database
        )
        report = await generate_report(calculation)
        await publish_report(state.settings, report)

    try:
        asyncio.run(_calculate_and_publish())
    except InvalidRequestError as e:
        raise typer.BadParameter(str(e)) from e
    except CalculationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e


@app.command("reward-cycle")
def reward_cycle(
    reward_cycle_index: Annotated[
        int, typer.Argument(help="Reward cycle index to look up.", min=0)
    ],
    config_path: ConfigOption = None,
    database: DatabaseOption = None,
    output_format: OutputOption = None,
    log_level: LogLevelOption = None,
    show_config: ShowConfigOption = False,
):
    """Show a stored reward cycle and the distribution id it maps to."""
    init_kwargs: dict[str, Any] = {}
    if output_format is not None:
        init_kwargs["output_format"] = output_format
    if log_level is not None:
        init_kwargs["log_level"] = log_level.upper()

    state = _build_state(config_path, init_kwargs, show_config)

    from pymongo.errors import PyMongoError

    from .adapters.cycle_adapters import (
        MongoRewardCycleAdapter,
        RewardCycleNotFoundError,
    )
    from .report.formatter import format_reward_cycle_table

    adapter = MongoRewardCycleAdapter(state.settings, database=database)
    try:
        cycle = asyncio.run(adapter.fetch_reward_cycle(reward_cycle_index))
    except RewardCycleNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    except (PyMongoError, ValueError) as e:
        state.logger.error("Reward cycle %d lookup failed: %r", reward_cycle_index, e)
        typer.echo(f"Error: {REWARD_CYCLE_FAILED_MESSAGE}", err=True)
        raise typer.Exit(code=1) from e

    if state.settings.output_format == OutputFormat.JSON:
        typer.echo(json.dumps(asdict(cycle), indent=2, default=str))
    else:
        format_reward_cycle_table(cycle)


def run() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    run()
