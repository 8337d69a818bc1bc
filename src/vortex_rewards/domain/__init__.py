"""Domain models for the Vortex reward calculation."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class AssetBalance:
    """Quantity of a fungible asset held by a pool, in native units."""

    asset_id: int
    balance: Decimal


@dataclass(frozen=True)
class AssetPrice:
    """USD price of one unit of an asset for a distribution cycle."""

    asset_id: int
    price: Decimal


@dataclass(frozen=True)
class DistributionState:
    """On-chain state of a distribution cycle as seen by one account."""

    fee_pot_asset_balances: tuple[AssetBalance, ...]
    vault_asset_balances: tuple[AssetBalance, ...]
    current_supply: Decimal
    total_work_points: Decimal
    account_work_points: Decimal
    total_staker_points: Decimal
    account_staker_points: Decimal
    # Totals the chain itself recorded for the cycle, kept for audit display.
    total_network_reward: Decimal = Decimal(0)
    total_bootstrap_reward: Decimal = Decimal(0)
    total_vortex: Decimal = Decimal(0)


@dataclass(frozen=True)
class DistributionInputs:
    """Everything the calculation stages consume for one cycle and one account."""

    vault_asset_balances: tuple[AssetBalance, ...]
    fee_pot_asset_balances: tuple[AssetBalance, ...]
    asset_prices: tuple[AssetPrice, ...]
    current_supply: Decimal
    bootstrap_root: Decimal
    root_price: Decimal
    account_work_points: Decimal
    total_work_points: Decimal
    account_staker_points: Decimal
    total_staker_points: Decimal


@dataclass(frozen=True)
class CalculationResult:
    """Derived values of a Vortex reward calculation."""

    vtx_price: Decimal
    network_reward: Decimal
    bootstrap_reward: Decimal
    total_vortex: Decimal
    staker_pool: Decimal
    workpoint_pool: Decimal
    staker_share_portion: Decimal
    work_share_portion: Decimal
    account_reward: Decimal


@dataclass(frozen=True)
class ChainTotals:
    """Reward totals reported by the chain for a distribution cycle."""

    network_reward: Decimal
    bootstrap_reward: Decimal
    total_vortex: Decimal


@dataclass(frozen=True)
class VortexCalculation:
    """A calculation result together with the inputs it was derived from."""

    account_id: str
    distribution_id: int
    inputs: DistributionInputs
    results: CalculationResult
    chain_totals: ChainTotals


@dataclass(frozen=True)
class RewardCycle:
    """Stored reward cycle document."""

    reward_cycle_index: int
    vtx_distribution_id: int
    current_era_index: int
    start_era_index: int
    end_era_index: int
    start_block: int
    end_block: int
    finished: bool
    need_to_calculate: bool
    bootstrap_reward_in_total: Decimal | None = None
    workpoints_reward_in_total: Decimal | None = None
    stakers_reward: Decimal | None = None
    validators_reward: Decimal | None = None
