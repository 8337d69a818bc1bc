"""Rich console formatter for calculation reports."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from rich.columns import Columns
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table

from ..domain import RewardCycle
from ..units import VORTEX_CONTEXT
from .generator import VortexReport


def format_number(value: Decimal | str | int) -> str:
    """Round to a whole number and add comma separators."""
    with localcontext(VORTEX_CONTEXT):
        rounded = Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return f"{rounded:,}"


def format_portion(value: Decimal | str) -> str:
    """Format a share portion in [0, 1] as a percentage."""
    with localcontext(VORTEX_CONTEXT):
        percentage = Decimal(value) * 100
        return f"{percentage.quantize(Decimal('0.000001'), rounding=ROUND_HALF_UP)}%"


def _truncate_address(address: str) -> str:
    """Truncate address for display."""
    return f"{address[:10]}...{address[-4:]}"


def _key_value_table(value_style: str) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Key", style="dim")
    table.add_column("Value", style=value_style, justify="right")
    return table


def _asset_table(title: str, rows: Any, value_key: str) -> Table:
    table = Table(title=title, expand=True, show_lines=False)
    table.add_column("Asset", style="cyan", no_wrap=True)
    table.add_column(value_key.capitalize(), justify="right")
    for row in rows:
        table.add_row(str(row["assetId"]), str(row[value_key]))
    return table


def format_report_table(report: VortexReport, console: Console | None = None) -> None:
    """Print a rich formatted dashboard of the calculation.

    Args:
        report: The calculation report to format
        console: Console to print to; a stdout console by default
    """
    console = console or Console()
    data = report.data
    results = report.results

    # Request info
    request_table = _key_value_table("cyan")
    request_table.add_row("Account", _truncate_address(report.account_id))
    request_table.add_row("Distribution", str(report.distribution_id))
    request_table.add_row("VTX supply", format_number(str(data["vtxCurrentSupply"])))
    request_table.add_row("Bootstrap ROOT", format_number(str(data["bootstrapRoot"])))
    request_table.add_row("ROOT price", str(data["rootPrice"]))
    request_panel = Panel(request_table, title="[bold]Request[/]", border_style="blue")

    # Points
    points_table = _key_value_table("cyan")
    points_table.add_row(
        "Staker points",
        f"{format_number(str(data['accountStakerRewardPoints']))} / "
        f"{format_number(str(data['totalStakerRewardPoints']))}",
    )
    points_table.add_row(
        "Work points",
        f"{format_number(str(data['accountWorkerPoints']))} / "
        f"{format_number(str(data['totalWorkerPoints']))}",
    )
    points_panel = Panel(points_table, title="[bold]Points[/]", border_style="blue")

    top_row = Columns([request_panel, points_panel], equal=True, expand=True)

    # Asset breakdown
    assets_row = Columns(
        [
            _asset_table("Vault balances", data["vtxVaultAssetBalances"], "balance"),
            _asset_table("Fee pot balances", data["feePotAssetBalances"], "balance"),
            _asset_table("Prices (USD)", data["assetPrices"], "price"),
        ],
        equal=True,
        expand=True,
    )

    # Minted VTX, computed next to what the chain recorded
    minted_table = Table(expand=True)
    minted_table.add_column("", style="dim")
    minted_table.add_column("Calculated", justify="right", style="green")
    minted_table.add_column("On chain", justify="right", style="yellow")
    minted_table.add_row(
        "Network reward",
        format_number(results["totalVortexNetworkReward"]),
        format_number(report.chain_totals.get("totalNetworkReward", "0")),
    )
    minted_table.add_row(
        "Bootstrap",
        format_number(results["totalVortexBootstrap"]),
        format_number(report.chain_totals.get("totalBootstrapReward", "0")),
    )
    minted_table.add_row(
        "Total",
        format_number(results["totalVortex"]),
        format_number(report.chain_totals.get("totalVortex", "0")),
    )
    minted_panel = Panel(
        minted_table,
        title=f"[bold]VTX minted (price {results['vtxPrice']} USD)[/]",
        border_style="green",
    )

    # Account reward
    reward_table = _key_value_table("green")
    reward_table.add_row("Staker pool", format_number(results["stakerPool"]))
    reward_table.add_row("Workpoint pool", format_number(results["workpointPool"]))
    reward_table.add_row(
        "Staker portion", format_portion(results["accountStakerPointPortion"])
    )
    reward_table.add_row(
        "Work portion", format_portion(results["accountWorkPointsPortion"])
    )
    reward_table.add_row(
        "[bold]Account reward[/]", f"[bold]{format_number(results['accountVtxReward'])}[/]"
    )
    reward_panel = Panel(reward_table, title="[bold]Account[/]", border_style="green")

    outer_panel = Panel(
        Group(top_row, "", assets_row, "", minted_panel, "", reward_panel),
        title="[bold white]Vortex Reward Calculation[/]",
        border_style="white",
        padding=(1, 2),
    )

    console.print()
    console.print(outer_panel)
    console.print()


def format_reward_cycle_table(cycle: RewardCycle, console: Console | None = None) -> None:
    """Print a reward cycle document."""
    console = console or Console()
    table = _key_value_table("cyan")
    table.add_row("Distribution", str(cycle.vtx_distribution_id))
    table.add_row("Eras", f"{cycle.start_era_index} - {cycle.end_era_index}")
    table.add_row("Current era", str(cycle.current_era_index))
    table.add_row("Blocks", f"{cycle.start_block} - {cycle.end_block}")
    table.add_row("Finished", "yes" if cycle.finished else "no")
    table.add_row("Needs calculation", "yes" if cycle.need_to_calculate else "no")
    for label, value in (
        ("Bootstrap reward", cycle.bootstrap_reward_in_total),
        ("Workpoints reward", cycle.workpoints_reward_in_total),
        ("Stakers reward", cycle.stakers_reward),
        ("Validators reward", cycle.validators_reward),
    ):
        table.add_row(label, format_number(value) if value is not None else "-")

    console.print(
        Panel(
            table,
            title=f"[bold]Reward Cycle {cycle.reward_cycle_index}[/]",
            border_style="blue",
        )
    )
