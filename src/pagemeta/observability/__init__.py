"""Logging setup for pagemeta."""

from .logging import add_correlation_id, configure_logging

__all__ = ["add_correlation_id", "configure_logging"]
