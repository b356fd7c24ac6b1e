"""
Command Table Cache
TTL'd JSON snapshot of the last fetched command table
"""

from .cache import CommandCache

__all__ = ['CommandCache']
