from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal, localcontext

from ..domain import AssetBalance, AssetPrice
from ..logger import get_logger
from ..units import VORTEX_CONTEXT
from .asset_value import calculate_asset_value

logger = get_logger(__name__)

# Price used before any VTX has been minted.
UNMINTED_VTX_PRICE = Decimal(1)


def calculate_vtx_price(
    vault_balances: Sequence[AssetBalance],
    prices: Sequence[AssetPrice],
    current_supply: Decimal,
) -> Decimal:
    """Derive the USD price of one VTX from the assets backing it.

    Args:
        vault_balances: Balances held by the VTX vault
        prices: USD prices for the distribution cycle
        current_supply: Current VTX supply

    Returns:
        Total USD value of the vault divided by the current supply, or
        exactly ``1`` when nothing has been minted yet.
    """
    vault_value = calculate_asset_value(vault_balances, prices)
    logger.debug("VTX vault value (USD): %s", vault_value)

    if current_supply.is_zero():
        logger.debug("VTX supply is zero, using fallback price %s", UNMINTED_VTX_PRICE)
        return UNMINTED_VTX_PRICE

    with localcontext(VORTEX_CONTEXT):
        return vault_value / current_supply
