"""Structured logging helpers shared by every pipeline stage."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges a fixed component field with call-site extras."""

    def process(self, msg, kwargs):
        """Merge the adapter's component into the record's extra fields.

        Fields passed at the call site win over the adapter defaults.
        """
        extra = kwargs.get("extra", {})
        kwargs["extra"] = {**self.extra, **extra}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Get a logger, optionally tagging every record with a component name.

    Args:
        name: Logger name (typically __name__)
        component: Pipeline component identifier (e.g. "extraction", "scoring")

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="scoring")
        >>> logger.info("Score computed", extra={"event": "scoring.completed"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger
