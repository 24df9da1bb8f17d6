"""Structured logging helpers for the wage map."""

import logging
from typing import Optional, Union


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that stamps a component name on every record.

    Per-call ``extra`` fields are merged over the adapter's own fields.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Return a module logger, optionally bound to a component.

    Args:
        name: Logger name (usually ``__name__``)
        component: Component label added to every record (e.g. "resolver")

    Example:
        >>> logger = get_logger(__name__, component="compiler")
        >>> logger.info("Paint rule compiled", extra={"event": "compiler.rule.compiled"})
    """
    logger = logging.getLogger(name)
    if component:
        return ComponentLoggerAdapter(logger, {"component": component})
    return logger


__all__ = ["ComponentLoggerAdapter", "get_logger"]
