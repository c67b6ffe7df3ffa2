"""
Async loading of running logs.

Reading the upload is the only step that may suspend. Validation and metrics
run synchronously once the read has finished.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from running_dashboard.config_models import DashboardConfig
from running_dashboard.models import ParseOutcome
from running_dashboard.orchestrator import load_running_log

logger = logging.getLogger(__name__)


async def load_running_log_async(
    input_file: Union[str, Path],
    config: Optional[DashboardConfig] = None,
    raise_on_unreadable: bool = True
) -> ParseOutcome:
    """Load a running log without blocking the event loop.

    The synchronous loader runs in the default executor.

    Example:
        >>> import asyncio
        >>> outcome = asyncio.run(load_running_log_async(Path("runs.csv")))
    """
    loop = asyncio.get_running_loop()
    logger.debug(f"Scheduling load of {input_file}")
    return await loop.run_in_executor(
        None,
        load_running_log,
        input_file,
        config,
        raise_on_unreadable
    )


def run_async_load(
    input_file: Union[str, Path],
    config: Optional[DashboardConfig] = None
) -> ParseOutcome:
    """Synchronous wrapper for ``load_running_log_async``.

    Use this when calling from synchronous code.
    """
    return asyncio.run(load_running_log_async(input_file, config))
