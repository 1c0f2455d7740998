"""Utility functions for Gutenreader."""

from gutenreader.utils.http import get_client, get_friendly_error_message, request

__all__ = ["get_client", "get_friendly_error_message", "request"]
