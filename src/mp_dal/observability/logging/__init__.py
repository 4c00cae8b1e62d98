"""Observability – structured logging helpers."""
from mp_dal.observability.logging.factory import JsonLoggerFactory
from mp_dal.observability.logging.processors import add_component, get_logger

__all__ = ["JsonLoggerFactory", "add_component", "get_logger"]
