from __future__ import annotations

from decimal import Decimal
from typing import Any

from ...clients.mongo import MongoReader
from ...constants import REWARD_CYCLE_COLLECTION
from ...domain import RewardCycle
from ...logger import get_logger
from ...settings import VortexSettings
from ...units import to_decimal

logger = get_logger(__name__)


class RewardCycleNotFoundError(LookupError):
    """Raised when no reward cycle document exists for an index."""


def _optional_decimal(document: dict[str, Any], key: str) -> Decimal | None:
    value = document.get(key)
    if value is None or value == "":
        return None
    return to_decimal(value, field=key)


def _required_int(document: dict[str, Any], key: str) -> int:
    value = document.get(key)
    if isinstance(value, bool):
        raise ValueError(f"Reward cycle field {key} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    # MongoDB documents written from JavaScript store integers as doubles.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"Reward cycle field {key} must be an integer, got {value!r}")


class MongoRewardCycleAdapter:
    """Looks up reward cycle documents in the ``reward-cycle`` collection."""

    def __init__(self, config: VortexSettings, database: str | None = None):
        self.config = config
        self.reader = MongoReader(config, database)

    @property
    def adapter_name(self) -> str:
        return "mongo_reward_cycle"

    @staticmethod
    def parse_document(document: dict[str, Any]) -> RewardCycle:
        return RewardCycle(
            reward_cycle_index=_required_int(document, "rewardCycleIndex"),
            vtx_distribution_id=_required_int(document, "vtxDistributionId"),
            current_era_index=_required_int(document, "currentEraIndex"),
            start_era_index=_required_int(document, "startEraIndex"),
            end_era_index=_required_int(document, "endEraIndex"),
            start_block=_required_int(document, "startBlock"),
            end_block=_required_int(document, "endBlock"),
            finished=bool(document.get("finished", False)),
            need_to_calculate=bool(document.get("needToCalculate", False)),
            bootstrap_reward_in_total=_optional_decimal(
                document, "bootstrapRewardInTotal"
            ),
            workpoints_reward_in_total=_optional_decimal(
                document, "workpointsRewardInTotal"
            ),
            stakers_reward=_optional_decimal(document, "stakersReward"),
            validators_reward=_optional_decimal(document, "validatorsReward"),
        )

    async def fetch_reward_cycle(self, reward_cycle_index: int) -> RewardCycle:
        """Fetch a reward cycle by index.

        Raises:
            RewardCycleNotFoundError: If no document matches the index
            ValueError: If the stored document is malformed
        """
        documents = await self.reader.find(
            REWARD_CYCLE_COLLECTION,
            {"rewardCycleIndex": reward_cycle_index},
            limit=1,
        )
        if not documents:
            raise RewardCycleNotFoundError(
                f"Reward cycle {reward_cycle_index} not found in {self.reader.database}"
            )
        cycle = self.parse_document(documents[0])
        logger.info(
            "Reward cycle %d maps to distribution %d (blocks %d-%d, finished=%s)",
            cycle.reward_cycle_index,
            cycle.vtx_distribution_id,
            cycle.start_block,
            cycle.end_block,
            cycle.finished,
        )
        return cycle
