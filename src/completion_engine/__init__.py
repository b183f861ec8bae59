"""UI-agnostic viewport word-completion engine."""

__all__ = [
    "adapters",
    "buffer",
    "completion",
    "host",
    "runtime",
]

__version__ = "0.1.0"
