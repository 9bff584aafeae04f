"""Async client for the task/project dashboard API."""

__version__ = "0.1.0"
