"""Record sinks."""

from .json_array import JsonArraySink

__all__ = ["JsonArraySink"]
