from decimal import Decimal

import pytest
from rich.console import Console

from vortex_rewards.domain import RewardCycle
from vortex_rewards.report.formatter import (
    format_number,
    format_portion,
    format_report_table,
    format_reward_cycle_table,
)
from vortex_rewards.report.generator import VortexReport


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("1234567.5"), "1,234,568"),
        ("0.5", "1"),
        ("0.4999", "0"),
        (0, "0"),
        ("12237.0892018779342723004694835680751173708920187793427230", "12,237"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_format_portion():
    assert format_portion(Decimal("0.25")) == "25.000000%"
    assert format_portion("0.3333333333333333") == "33.333333%"
    assert format_portion("0") == "0.000000%"


def _report() -> VortexReport:
    return VortexReport(
        account_id="0xE04CC55ebEE1cBCE552f250e85c57B70B2E2625b",
        distribution_id=6,
        data={
            "vtxCurrentSupply": "1000",
            "feePotAssetBalances": [{"assetId": 2, "balance": "500"}],
            "bootstrapRoot": "100",
            "rootPrice": "2",
            "accountWorkerPoints": "50",
            "totalWorkerPoints": "100",
            "vtxVaultAssetBalances": [{"assetId": 1, "balance": "2000"}],
            "assetPrices": [{"assetId": 1, "price": "2"}],
            "accountStakerRewardPoints": "20",
            "totalStakerRewardPoints": "200",
        },
        results={
            "vtxPrice": "4",
            "totalVortexNetworkReward": "625",
            "totalVortexBootstrap": "50",
            "totalVortex": "675",
            "stakerPool": "237.5",
            "workpointPool": "437.5",
            "accountStakerPointPortion": "0.1",
            "accountWorkPointsPortion": "0.5",
            "accountVtxReward": "242.5",
        },
        chain_totals={
            "totalNetworkReward": "620",
            "totalBootstrapReward": "50",
            "totalVortex": "670",
        },
    )


def test_format_report_table_renders_sections():
    console = Console(record=True, width=200)

    format_report_table(_report(), console=console)

    output = console.export_text()
    assert "Vortex Reward Calculation" in output
    assert "0xE04CC55e...625b" in output
    assert "Account reward" in output
    assert "243" in output
    assert "Calculated" in output
    assert "On chain" in output
    assert "670" in output
    assert "10.000000%" in output


def test_format_reward_cycle_table():
    console = Console(record=True, width=120)
    cycle = RewardCycle(
        reward_cycle_index=12,
        vtx_distribution_id=6,
        current_era_index=400,
        start_era_index=390,
        end_era_index=400,
        start_block=14000000,
        end_block=14086400,
        finished=True,
        need_to_calculate=False,
        bootstrap_reward_in_total=Decimal("17057307006875"),
    )

    format_reward_cycle_table(cycle, console=console)

    output = console.export_text()
    assert "Reward Cycle 12" in output
    assert "390 - 400" in output
    assert "17,057,307,006,875" in output
    assert "Stakers reward" in output
