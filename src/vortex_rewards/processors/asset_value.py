from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal, localcontext

from ..domain import AssetBalance, AssetPrice
from ..units import VORTEX_CONTEXT


def index_prices(prices: Iterable[AssetPrice]) -> dict[int, Decimal]:
    """Map asset ids to prices, keeping the first price seen for each id."""
    indexed: dict[int, Decimal] = {}
    for asset_price in prices:
        indexed.setdefault(asset_price.asset_id, asset_price.price)
    return indexed


def calculate_asset_value(
    balances: Sequence[AssetBalance],
    prices: Sequence[AssetPrice],
) -> Decimal:
    """Sum ``balance * price`` over every balance that has a price.

    Balances without a matching price contribute nothing. Prices without a
    matching balance are ignored.
    """
    price_by_asset = index_prices(prices)
    total = Decimal(0)
    with localcontext(VORTEX_CONTEXT):
        for asset in balances:
            price = price_by_asset.get(asset.asset_id)
            if price is None:
                continue
            total += asset.balance * price
    return total
