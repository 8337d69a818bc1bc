from __future__ import annotations

from .mongo import MongoRewardCycleAdapter, RewardCycleNotFoundError

__all__ = ["MongoRewardCycleAdapter", "RewardCycleNotFoundError"]
