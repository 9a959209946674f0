"""Logging configuration for the ranking CLI"""
import logging
import sys
from pathlib import Path
from typing import Optional

# Logger that per-player valuation traces are written to
TRACE_LOGGER = 'src.core.vbd'


class ProductionFilter(logging.Filter):
    """Keep board-building chatter off the console"""

    def filter(self, record):
        if record.levelno <= logging.DEBUG:
            return False

        # Board building logs at INFO; only surface problems
        if record.name.startswith('src.core'):
            return record.levelno >= logging.WARNING

        return True


class TraceFilter(logging.Filter):
    """Drop per-player VBD traces (they go to their own file)"""

    def filter(self, record):
        return not (record.name == TRACE_LOGGER and record.levelno <= logging.DEBUG)


def setup_logging(debug: bool = False, log_file: Optional[Path] = None,
                  trace_file: Optional[Path] = None):
    """
    Configure logging for the application

    Args:
        debug: Enable debug logging
        log_file: Optional file to write logs to
        trace_file: Optional file for per-player valuation traces; when
            given, traces are kept out of the console and log_file
    """
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    console_formatter = logging.Formatter('%(message)s')

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    root_logger.handlers.clear()

    # stdout belongs to the rich tables
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    console_handler.setFormatter(console_formatter)

    if not debug:
        console_handler.addFilter(ProductionFilter())

    handlers = [console_handler]

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_formatter)
        handlers.append(file_handler)

    trace_logger = logging.getLogger(TRACE_LOGGER)
    for handler in list(trace_logger.handlers):
        trace_logger.removeHandler(handler)
        handler.close()

    if trace_file:
        for handler in handlers:
            handler.addFilter(TraceFilter())

        trace_file.parent.mkdir(parents=True, exist_ok=True)
        trace_handler = logging.FileHandler(trace_file)
        trace_handler.setLevel(logging.DEBUG)
        trace_handler.setFormatter(logging.Formatter('%(message)s'))
        trace_logger.addHandler(trace_handler)

    for handler in handlers:
        root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name"""
    return logging.getLogger(name)
