import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

from ..domain.files import redact_url


def setup_logging(log_level: str = "INFO", log_to_file: bool = True) -> None:
    """Set up logging for applications embedding the file helpers.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to files in addition to console
    """

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.set_exc_info,
            # JSON formatting for file logs
            (
                structlog.processors.JSONRenderer()
                if log_to_file
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, log_level.upper())

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    if log_to_file:
        logs_dir = Path("logs")
        logs_dir.mkdir(exist_ok=True)

        # Transfer log: every download / copy / stream with timings
        transfer_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "transfers.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        transfer_handler.setLevel(logging.DEBUG)
        transfer_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        transfer_logger = logging.getLogger("file_transfers")
        transfer_logger.addHandler(transfer_handler)
        transfer_logger.propagate = True

        # Error-only log file
        error_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "errors.log", maxBytes=5 * 1024 * 1024, backupCount=10  # 5MB
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        root_logger.addHandler(error_handler)


def get_transfer_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """Get a structured logger for file transfers."""
    return structlog.get_logger(name or "file_transfers")


class TransferLogContext:
    """Context manager logging start, success or failure of one transfer.

    Targets are logged through ``redact_url`` so bot tokens in file URLs never
    reach the logs.
    """

    def __init__(self, operation: str, target: str, **context: Any):
        self.operation = operation
        self.target = redact_url(target)
        self.context: Dict[str, Any] = context
        self.logger = get_transfer_logger()
        self.start_time: Optional[datetime] = None

    def __enter__(self) -> "TransferLogContext":
        self.start_time = datetime.now()
        self.logger.debug(
            f"{self.operation} started",
            operation=self.operation,
            target=self.target,
            **self.context,
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        elapsed = (datetime.now() - self.start_time).total_seconds()
        if exc_type is not None:
            self.logger.warning(
                f"{self.operation} failed",
                operation=self.operation,
                target=self.target,
                error_type=exc_type.__name__,
                error_message=str(exc_val),
                elapsed_seconds=elapsed,
                **self.context,
            )
        else:
            self.logger.info(
                f"{self.operation} completed",
                operation=self.operation,
                target=self.target,
                elapsed_seconds=elapsed,
                **self.context,
            )
