"""
Utility functions shared by the credentials helper.
"""

from .sanitize import sanitize
from .retry import retry_with_backoff, compute_delay, default_sleep
from .filesystem import FileSystem, LocalFileSystem

__all__ = [
    'sanitize',
    'retry_with_backoff',
    'compute_delay',
    'default_sleep',
    'FileSystem',
    'LocalFileSystem',
]
