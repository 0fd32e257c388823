"""Adapters - I/O implementations of ports."""

from .text_file import TextFileStorage

__all__ = [
    "TextFileStorage",
]
