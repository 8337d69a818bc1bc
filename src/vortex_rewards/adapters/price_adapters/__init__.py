from __future__ import annotations

from .base import BasePriceAdapter
from .mongo import MongoPriceAdapter

__all__ = ["BasePriceAdapter", "MongoPriceAdapter"]
