"""Greeter domain exports."""
from .state import RequestCounter, ServiceState, effective_name, format_greeting

__all__ = ["RequestCounter", "ServiceState", "effective_name", "format_greeting"]
