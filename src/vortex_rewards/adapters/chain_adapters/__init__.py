from __future__ import annotations

from .base import BaseChainStateAdapter
from .root_network import RootNetworkChainAdapter

__all__ = ["BaseChainStateAdapter", "RootNetworkChainAdapter"]
