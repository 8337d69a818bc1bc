from __future__ import annotations

from .account_reward import (
    STAKER_POOL_NETWORK_SHARE,
    WORKPOINT_POOL_NETWORK_SHARE,
    AccountReward,
    calculate_account_reward,
)
from .asset_value import calculate_asset_value, index_prices
from .vtx_price import UNMINTED_VTX_PRICE, calculate_vtx_price
from .vtx_supply import VtxAmounts, ZeroVtxPriceError, calculate_vtx_amounts

__all__ = [
    "AccountReward",
    "calculate_account_reward",
    "STAKER_POOL_NETWORK_SHARE",
    "WORKPOINT_POOL_NETWORK_SHARE",
    "calculate_asset_value",
    "index_prices",
    "UNMINTED_VTX_PRICE",
    "calculate_vtx_price",
    "VtxAmounts",
    "ZeroVtxPriceError",
    "calculate_vtx_amounts",
]
