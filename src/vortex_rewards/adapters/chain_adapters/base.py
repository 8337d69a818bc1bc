from __future__ import annotations

from abc import ABC, abstractmethod

from ...domain import DistributionState
from ...settings import VortexSettings


class BaseChainStateAdapter(ABC):
    """Abstract base class for chain state adapters."""

    def __init__(self, config: VortexSettings):
        """Initialize the adapter with configuration.

        Args:
            config: Application settings
        """
        self.config = config

    @property
    @abstractmethod
    def adapter_name(self) -> str:
        """Return the name of this adapter."""
        ...

    @abstractmethod
    async def fetch_distribution_state(
        self, distribution_id: int, account_id: str
    ) -> DistributionState:
        """Fetch pool balances, VTX supply and points for a cycle and account."""
        ...
