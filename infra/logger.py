import logging
import os
import sys

import structlog


def setup_logging(log_level: str = None) -> None:
    # Explicit level wins, then DEVCHAIN_LOG_LEVEL, then LOG_LEVEL.
    if log_level is None:
        log_level = os.getenv("DEVCHAIN_LOG_LEVEL") or os.getenv("LOG_LEVEL", "INFO")
    log_level = log_level.upper()

    numeric_level = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        stream=sys.stderr,
    )

    # stdout is left for dumped configs
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    return structlog.get_logger(name)
