"""Sink implementations for the inventory runner."""

from .file_sink import FileSink, LoggingSink

__all__ = ["FileSink", "LoggingSink"]
