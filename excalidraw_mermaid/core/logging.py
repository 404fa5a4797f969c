import logging
import sys
from typing import Optional

import structlog

from excalidraw_mermaid.core.config import settings


def setup_logging(level: Optional[str] = None):
    """
    Setup structured logging on stderr so stdout stays free for Mermaid output.
    """
    level_name = (level or settings.log_level).upper()

    if settings.log_format.lower() == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    # structlog renders the whole line, so the handler only prints the message
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(message)s'))

    package_logger = logging.getLogger("excalidraw_mermaid")
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.propagate = False
    package_logger.setLevel(getattr(logging, level_name, logging.WARNING))

    return structlog.get_logger("excalidraw_mermaid")
