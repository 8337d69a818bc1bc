from __future__ import annotations

import json
import logging

from ..settings import OutputFormat, VortexSettings
from .formatter import format_report_table
from .generator import VortexReport

logger = logging.getLogger(__name__)


async def publish_to_stdout(
    report: VortexReport,
    output_format: OutputFormat = OutputFormat.TABLE,
) -> None:
    """Publish report to stdout.

    Args:
        report: The calculation report to publish
        output_format: Output format (TABLE for rich dashboard, JSON for raw JSON)
    """
    if output_format == OutputFormat.JSON:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        format_report_table(report)


async def publish_report(
    config: VortexSettings,
    report: VortexReport,
) -> None:
    """Publish the calculation report in the configured format.

    Results are only ever displayed; nothing is persisted or submitted.
    """
    logger.debug("Publishing report as %s", config.output_format.value)
    await publish_to_stdout(report, config.output_format)
