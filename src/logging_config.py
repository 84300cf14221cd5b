"""
Logging Configuration for the franchise trade engine

Sets up the root logger once at startup:
- Rotating file handlers (main INFO+, debug DEBUG+, error ERROR+)
- Optional colored console output
- Per-module level overrides for the trade AI components

Usage Example:
    from logging_config import setup_logging, get_logger, set_module_level

    setup_logging(level="INFO", log_dir="logs")
    set_module_level("TransactionAIManager", "DEBUG")

    logger = get_logger(__name__)
    logger.info("Trade engine ready")

Log Files Created:
- logs/franchise_trades.log: Main log (INFO+)
- logs/franchise_trades_debug.log: Debug log (DEBUG+)
- logs/franchise_trades_error.log: Error log (ERROR+)

Each file rotates at 10MB with 5 backups.
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Union


LOG_FILE_PREFIX = "franchise_trades"

# Log format templates
DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
)

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers owned by the trade AI (class-named and module-named)
TRADE_AI_LOGGERS = (
    "TransactionAIManager",
    "TradeProposalGenerator",
    "TradeDeadlineManager",
    "transactions",
    "offseason.draft_pick_service",
)

DATABASE_LOGGERS = (
    "database",
)


class ColoredFormatter(logging.Formatter):
    """
    Console formatter that colors the level name.

    The record itself is left untouched so file handlers sharing it keep
    plain level names.
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if not color:
            return super().format(record)

        original = record.levelname
        record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def _to_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper())


def _rotating_handler(
    log_dir: str,
    suffix: str,
    level: int,
    log_format: str,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=os.path.join(log_dir, f"{LOG_FILE_PREFIX}{suffix}.log"),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_dir: str = "logs",
    enable_console: bool = True,
    enable_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    format_style: str = "detailed"
) -> None:
    """
    Configure application-wide logging. Call once at startup.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        enable_console: Whether to log to console
        enable_file: Whether to log to rotating files
        max_bytes: Maximum size per log file before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)
        format_style: "detailed" or "simple" for the main log
    """
    root_level = _to_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)
    root_logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(root_level)
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if enable_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        main_format = DETAILED_FORMAT if format_style == "detailed" else SIMPLE_FORMAT

        root_logger.addHandler(
            _rotating_handler(log_dir, "", logging.INFO, main_format, max_bytes, backup_count)
        )
        root_logger.addHandler(
            _rotating_handler(log_dir, "_debug", logging.DEBUG, DETAILED_FORMAT, max_bytes, backup_count)
        )
        root_logger.addHandler(
            _rotating_handler(log_dir, "_error", logging.ERROR, DETAILED_FORMAT, max_bytes, backup_count)
        )

    root_logger.info(
        f"Logging initialized - Level: {level}, "
        f"Console: {enable_console}, File: {enable_file}"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance (typically get_logger(__name__))."""
    return logging.getLogger(name)


def set_module_level(module_name: str, level: Union[str, int], propagate: bool = True) -> logging.Logger:
    """
    Override the level of one logger.

    Args:
        module_name: Logger name (e.g., "TransactionAIManager" or "database")
        level: Level name or number
        propagate: Whether records still reach the root handlers

    Returns:
        The configured logger
    """
    logger = logging.getLogger(module_name)
    logger.setLevel(_to_level(level))
    logger.propagate = propagate
    return logger


def setup_trade_ai_logging(level: str = "INFO") -> None:
    """Set the level for every trade AI logger (DEBUG shows each declined attempt)."""
    for name in TRADE_AI_LOGGERS:
        set_module_level(name, level)


def setup_database_logging(level: str = "WARNING") -> None:
    """Database code is chatty; default it to WARNING."""
    for name in DATABASE_LOGGERS:
        set_module_level(name, level)

