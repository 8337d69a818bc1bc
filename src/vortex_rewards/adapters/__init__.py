from __future__ import annotations

from .chain_adapters import RootNetworkChainAdapter
from .price_adapters import MongoPriceAdapter

PRICE_ADAPTER = MongoPriceAdapter
CHAIN_STATE_ADAPTER = RootNetworkChainAdapter

__all__ = ["CHAIN_STATE_ADAPTER", "PRICE_ADAPTER"]
