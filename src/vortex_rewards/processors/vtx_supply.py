from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal, localcontext

from ..domain import AssetBalance, AssetPrice
from ..logger import get_logger
from ..units import VORTEX_CONTEXT
from .asset_value import calculate_asset_value

logger = get_logger(__name__)


class ZeroVtxPriceError(ArithmeticError):
    """Raised when a zero VTX price reaches the supply calculation.

    ``calculate_vtx_price`` never returns zero for a zero supply, so this
    signals a defect upstream rather than a recoverable condition.
    """


@dataclass(frozen=True)
class VtxAmounts:
    """VTX to mint for a distribution cycle."""

    network_reward: Decimal
    bootstrap_reward: Decimal
    total: Decimal


def calculate_vtx_amounts(
    fee_pot_balances: Sequence[AssetBalance],
    prices: Sequence[AssetPrice],
    bootstrap_root: Decimal,
    root_price: Decimal,
    vtx_price: Decimal,
) -> VtxAmounts:
    """Convert fee pot value and the bootstrap allowance into VTX amounts.

    Args:
        fee_pot_balances: Balances collected in the fee pot
        prices: USD prices for the distribution cycle
        bootstrap_root: Bootstrap quantity, in ROOT native units
        root_price: USD price of ROOT for the cycle
        vtx_price: USD price of one VTX

    Returns:
        Network reward, bootstrap reward and their sum, all in VTX.

    Raises:
        ZeroVtxPriceError: If ``vtx_price`` is zero.
    """
    if vtx_price.is_zero():
        raise ZeroVtxPriceError(
            "VTX price is zero; cannot convert reward value into VTX"
        )

    fee_pot_value = calculate_asset_value(fee_pot_balances, prices)

    with localcontext(VORTEX_CONTEXT):
        bootstrap_value = bootstrap_root * root_price
        network_reward = fee_pot_value / vtx_price
        bootstrap_reward = bootstrap_value / vtx_price
        total = network_reward + bootstrap_reward

    logger.debug(
        "Fee pot value: %s, bootstrap value: %s (USD)", fee_pot_value, bootstrap_value
    )

    return VtxAmounts(
        network_reward=network_reward,
        bootstrap_reward=bootstrap_reward,
        total=total,
    )
