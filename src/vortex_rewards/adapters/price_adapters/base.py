from __future__ import annotations

from abc import ABC, abstractmethod

from ...domain import AssetPrice
from ...settings import VortexSettings


class BasePriceAdapter(ABC):
    """Abstract base class for price adapters."""

    def __init__(self, config: VortexSettings):
        """Initialize the adapter with configuration."""
        self.config = config

    @property
    @abstractmethod
    def adapter_name(self) -> str:
        """Return the name of this adapter."""
        ...

    @abstractmethod
    async def fetch_prices(self, distribution_id: int) -> list[AssetPrice]:
        """Fetch the USD asset prices captured for a distribution cycle.

        May return an empty list. Malformed entries raise instead of being
        dropped.
        """
        ...
