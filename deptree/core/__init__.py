from .data_structures import Arc, Span, Token
from .errors import CorruptTreeError, DependencyTreeError, InvalidSpanError, OutOfRangeError

__all__ = [
    "Arc",
    "Span",
    "Token",
    "CorruptTreeError",
    "DependencyTreeError",
    "InvalidSpanError",
    "OutOfRangeError",
]
