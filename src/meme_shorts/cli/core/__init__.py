"""Core CLI utilities: console, result types, shared state."""

from .console import console, print_error, print_header, print_info, print_success, print_warning
from .types import BatchResult, Failure, ProductionResult, Result, Success

__all__ = [
    "console",
    "print_error",
    "print_header",
    "print_info",
    "print_success",
    "print_warning",
    "BatchResult",
    "Failure",
    "ProductionResult",
    "Result",
    "Success",
]
