"""Distributed word counting over TCP: client, coordinating server and counting nodes."""

__version__ = "0.1.0"