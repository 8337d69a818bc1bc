from __future__ import annotations

from typing import Any

from ...clients.mongo import MongoReader
from ...constants import ASSET_PRICES_COLLECTION
from ...domain import AssetPrice
from ...logger import get_logger
from ...settings import VortexSettings
from ...units import to_asset_id, to_decimal
from .base import BasePriceAdapter

logger = get_logger(__name__)


class MongoPriceAdapter(BasePriceAdapter):
    """Reads asset prices stored by the price feeder in the ``asset-prices`` collection.

    Documents look like ``{"vtxDistributionId": 6, "assetId": 1, "price": 0.0213}``.
    """

    def __init__(self, config: VortexSettings, database: str | None = None):
        super().__init__(config)
        self.reader = MongoReader(config, database)

    @property
    def adapter_name(self) -> str:
        return "mongo_prices"

    @staticmethod
    def _parse_document(document: dict[str, Any]) -> AssetPrice:
        try:
            return AssetPrice(
                asset_id=to_asset_id(document.get("assetId")),
                price=to_decimal(document.get("price"), field="price"),
            )
        except ValueError as e:
            raise ValueError(
                f"Malformed asset price document {document.get('_id')}: {e}"
            ) from e

    async def fetch_prices(self, distribution_id: int) -> list[AssetPrice]:
        logger.info(
            "Fetching asset prices for distribution %d from database %s",
            distribution_id,
            self.reader.database,
        )
        documents = await self.reader.find(
            ASSET_PRICES_COLLECTION, {"vtxDistributionId": distribution_id}
        )
        prices = [self._parse_document(document) for document in documents]
        if not prices:
            logger.warning("No asset prices stored for distribution %d", distribution_id)
        for price in prices:
            logger.debug("Asset %d price: %s USD", price.asset_id, price.price)
        return prices
