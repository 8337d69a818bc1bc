from __future__ import annotations

from dataclasses import dataclass, field

from ..domain import AssetBalance, AssetPrice, VortexCalculation


def _balances(balances: tuple[AssetBalance, ...]) -> list[dict[str, object]]:
    return [{"assetId": b.asset_id, "balance": str(b.balance)} for b in balances]


def _prices(prices: tuple[AssetPrice, ...]) -> list[dict[str, object]]:
    return [{"assetId": p.asset_id, "price": str(p.price)} for p in prices]


@dataclass
class VortexReport:
    """Vortex calculation report containing the inputs used and derived values.

    Decimal values are kept as strings so no precision is lost in JSON.
    """

    account_id: str
    distribution_id: int
    data: dict[str, object]
    results: dict[str, str]
    chain_totals: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        """Convert report to dictionary format."""
        return {
            "accountId": self.account_id,
            "vtxDistributionId": self.distribution_id,
            "data": self.data,
            "results": self.results,
            "chainTotals": self.chain_totals,
        }


async def generate_report(calculation: VortexCalculation) -> VortexReport:
    """Generate a report from a completed calculation.

    Args:
        calculation: Calculation results and the inputs they came from

    Returns:
        Report ready for publishing
    """
    inputs = calculation.inputs
    results = calculation.results
    totals = calculation.chain_totals

    data: dict[str, object] = {
        "vtxCurrentSupply": str(inputs.current_supply),
        "feePotAssetBalances": _balances(inputs.fee_pot_asset_balances),
        "bootstrapRoot": str(inputs.bootstrap_root),
        "rootPrice": str(inputs.root_price),
        "accountWorkerPoints": str(inputs.account_work_points),
        "totalWorkerPoints": str(inputs.total_work_points),
        "vtxVaultAssetBalances": _balances(inputs.vault_asset_balances),
        "assetPrices": _prices(inputs.asset_prices),
        "accountStakerRewardPoints": str(inputs.account_staker_points),
        "totalStakerRewardPoints": str(inputs.total_staker_points),
    }

    return VortexReport(
        account_id=calculation.account_id,
        distribution_id=calculation.distribution_id,
        data=data,
        results={
            "vtxPrice": str(results.vtx_price),
            "totalVortexNetworkReward": str(results.network_reward),
            "totalVortexBootstrap": str(results.bootstrap_reward),
            "totalVortex": str(results.total_vortex),
            "stakerPool": str(results.staker_pool),
            "workpointPool": str(results.workpoint_pool),
            "accountStakerPointPortion": str(results.staker_share_portion),
            "accountWorkPointsPortion": str(results.work_share_portion),
            "accountVtxReward": str(results.account_reward),
        },
        chain_totals={
            "totalNetworkReward": str(totals.network_reward),
            "totalBootstrapReward": str(totals.bootstrap_reward),
            "totalVortex": str(totals.total_vortex),
        },
    )
