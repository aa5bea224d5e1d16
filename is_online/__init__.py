"""Check whether a TCP port on one or many hosts is online."""

__version__ = "0.1.0"
