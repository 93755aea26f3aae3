"""Runtime logging helpers."""

from __future__ import annotations

import os

from loguru import logger
from rich import get_console
from rich.logging import RichHandler

_CONFIGURED = False


def parse_log_filter(value: str | None = None) -> tuple[str, dict[str | None, str | int | bool]]:
    """Parse a COINBIND_LOG_FILTER value.

    Format: "level" or "level,module=level,..."
    Examples:
        - "info" - global INFO level
        - "debug,coinbind.codec=debug" - global DEBUG, coinbind.codec at DEBUG
        - "info,coinbind.samples=false" - global INFO, coinbind.samples disabled

    Returns:
        (global_level, module_filter_dict)
    """
    filter_env = (value if value is not None else os.getenv("COINBIND_LOG_FILTER", "info")).lower()

    filter_dict: dict[str | None, str | int | bool] = {}
    global_level = "info"
    for part in (p.strip() for p in filter_env.split(",")):
        if not part:
            continue
        if "=" not in part:
            global_level = part
            continue
        module, level = (piece.strip() for piece in part.split("=", 1))
        filter_dict[module] = False if level == "false" else level.upper()

    return global_level, filter_dict


def configure_logging() -> bool:
    """Route loguru records to the rich console once per process.

    Returns True when this call installed the sink.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return False

    global_level, module_filter = parse_log_filter()
    logger.remove()
    logger.add(
        RichHandler(console=get_console(), show_time=False, show_path=False, markup=False),
        level=global_level.upper(),
        format="{message}",
        backtrace=False,
        diagnose=False,
        filter=module_filter,
    )
    _CONFIGURED = True
    return True
