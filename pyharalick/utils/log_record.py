""" Logging utilities for capturing errors and warnings in memory. """

import logging
from typing import List, Tuple, Optional

from ..config.settings import LOGGING_CONFIG, LOG_LEVEL_MAP


# ------------------------------------------------------------
# Logging Filters and Handlers
# ------------------------------------------------------------

class MemoryLogHandler(logging.Handler):
    """Stores log records in memory for later use."""

    def __init__(self):
        super().__init__()
        self.records: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno >= self.level:
            self.records.append(self.format(record))

    def get_logs(self) -> List[str]:
        return self.records.copy()

    def clear(self) -> None:
        self.records.clear()


# ------------------------------------------------------------
# Log Parsing
# ------------------------------------------------------------

def parse_log_level_and_message(log_line: str) -> Tuple[str, str]:
    """Extract log level and message from formatted log line."""
    parts = log_line.split(" - ", maxsplit=2)
    if len(parts) == 3:
        _, level, message = parts
        return level.strip(), message.strip()
    return "INFO", log_line.strip()


# ------------------------------------------------------------
# Utility Logging
# ------------------------------------------------------------

def get_levels_from_mode(log_mode_level: str = "all") -> Tuple[Optional[int], Optional[int]]:
    """Return console and memory logging levels based on the report mode."""
    mode_config = LOG_LEVEL_MAP.get(log_mode_level, LOG_LEVEL_MAP["all"])
    console_level = getattr(logging, mode_config['console_level']) if mode_config['console_level'] else None
    memory_level = getattr(logging, mode_config['memory_level']) if mode_config['memory_level'] else None
    return console_level, memory_level


def create_console_handler(console_level: Optional[int], log_level_mode: str = "all") -> Optional[
    logging.StreamHandler]:
    """Create a console handler if console_level is set."""
    if console_level is None:
        return None

    handler = logging.StreamHandler()
    handler.setLevel(console_level)

    if log_level_mode == "info":
        handler.addFilter(lambda record: record.levelno == logging.INFO)

    handler.setFormatter(logging.Formatter(LOGGING_CONFIG['console_format']))
    return handler


def configure_memory_handler(memory_handler: MemoryLogHandler, memory_level: Optional[int],
                             log_model_level: str = "all") -> None:
    """Configure memory handler if memory_level is set."""
    if memory_level is None:
        return
    memory_handler.setLevel(memory_level)

    if log_model_level == "info":
        memory_handler.addFilter(lambda record: record.levelno == logging.INFO)

    memory_handler.setFormatter(logging.Formatter(LOGGING_CONFIG['memory_format']))


def setup_logging(memory_handler: Optional[MemoryLogHandler] = None, log_model_level: str = "all") -> Tuple[
    logging.Logger, Optional[MemoryLogHandler]]:
    """
    Setup standard logging with console and optional memory handler.
    Logging levels are determined by the report mode.
    """
    logger = logging.getLogger(LOGGING_CONFIG['logger_name'])
    logger.setLevel(logging.DEBUG)
    logger.disabled = False
    if logger.hasHandlers():
        logger.handlers.clear()

    console_level, memory_level = get_levels_from_mode(log_model_level)

    # Silent mode
    if console_level is None and memory_level is None:
        logger.disabled = True
        return logger, memory_handler

    # Console
    console_handler = create_console_handler(console_level, log_model_level)
    if console_handler:
        logger.addHandler(console_handler)

    # Memory
    if memory_handler:
        configure_memory_handler(memory_handler, memory_level, log_model_level)
        if memory_level is not None:
            logger.addHandler(memory_handler)

    return logger, memory_handler


def initialize_logging(log_mode_level: str = "all") -> Tuple[logging.Logger, MemoryLogHandler]:
    """Initialize logger and memory handler."""
    memory_handler = MemoryLogHandler()
    _logger, memory_handler = setup_logging(memory_handler, log_mode_level)
    return _logger, memory_handler
