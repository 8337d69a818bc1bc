from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import AutoReconnect

from vortex_rewards.adapters.price_adapters.mongo import MongoPriceAdapter
from vortex_rewards.domain import AssetPrice
from vortex_rewards.settings import VortexSettings


@pytest.fixture
def config():
    return VortexSettings(mongodb_default_db="vortex-test", adapter_retries=0)


def _mock_client(documents):
    client = MagicMock()
    database = MagicMock()
    collection = MagicMock()
    client.__getitem__.return_value = database
    database.__getitem__.return_value = collection
    collection.find.return_value = iter(documents)
    return client, database, collection


@pytest.mark.asyncio
async def test_fetch_prices_maps_documents(config):
    client, _, collection = _mock_client(
        [
            {"_id": "a", "vtxDistributionId": 6, "assetId": 1, "price": 0.0213},
            {"_id": "b", "vtxDistributionId": 6, "assetId": 2, "price": "1.0001"},
        ]
    )
    with patch(
        "vortex_rewards.clients.mongo.MongoClient", return_value=client
    ) as mock_client_cls:
        prices = await MongoPriceAdapter(config).fetch_prices(6)

    assert prices == [
        AssetPrice(asset_id=1, price=Decimal("0.0213")),
        AssetPrice(asset_id=2, price=Decimal("1.0001")),
    ]
    mock_client_cls.assert_called_once()
    client.__getitem__.assert_called_once_with("vortex-test")
    collection.find.assert_called_once_with({"vtxDistributionId": 6}, limit=0)
    client.close.assert_called_once()


@pytest.mark.asyncio
async def test_database_override(config):
    client, _, _ = _mock_client([])
    with patch("vortex_rewards.clients.mongo.MongoClient", return_value=client):
        prices = await MongoPriceAdapter(config, database="vortex-prod").fetch_prices(
            1
        )

    assert prices == []
    client.__getitem__.assert_called_once_with("vortex-prod")


@pytest.mark.asyncio
async def test_malformed_document_raises(config):
    client, _, _ = _mock_client(
        [{"_id": "bad", "vtxDistributionId": 6, "assetId": 1, "price": None}]
    )
    with patch("vortex_rewards.clients.mongo.MongoClient", return_value=client):
        with pytest.raises(ValueError, match="Malformed asset price document bad"):
            await MongoPriceAdapter(config).fetch_prices(6)


@pytest.mark.asyncio
async def test_negative_price_raises(config):
    client, _, _ = _mock_client(
        [{"_id": "neg", "vtxDistributionId": 6, "assetId": 1, "price": -2}]
    )
    with patch("vortex_rewards.clients.mongo.MongoClient", return_value=client):
        with pytest.raises(ValueError, match="non-negative"):
            await MongoPriceAdapter(config).fetch_prices(6)


@pytest.mark.asyncio
async def test_connection_errors_are_retried():
    config = VortexSettings(adapter_retries=1)
    failing, _, failing_collection = _mock_client([])
    failing_collection.find.side_effect = AutoReconnect("primary stepped down")
    working, _, _ = _mock_client(
        [{"_id": "a", "vtxDistributionId": 2, "assetId": 1, "price": 3}]
    )

    with (
        patch(
            "vortex_rewards.clients.mongo.MongoClient",
            side_effect=[failing, working],
        ),
        patch("backoff._async.asyncio.sleep", new_callable=AsyncMock),
    ):
        prices = await MongoPriceAdapter(config).fetch_prices(2)

    assert prices == [AssetPrice(asset_id=1, price=Decimal(3))]
    failing.close.assert_called_once()


@pytest.mark.asyncio
async def test_connection_errors_propagate_after_retries(config):
    client, _, collection = _mock_client([])
    collection.find.side_effect = AutoReconnect("down")

    with patch("vortex_rewards.clients.mongo.MongoClient", return_value=client):
        with pytest.raises(AutoReconnect):
            await MongoPriceAdapter(config).fetch_prices(2)
