from __future__ import annotations

from .generator import VortexReport, generate_report
from .publisher import publish_report

__all__ = [
    "VortexReport",
    "generate_report",
    "publish_report",
]
