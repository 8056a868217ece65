"""
Models package for FastGPT request/response objects and CLI errors.
"""

from .errors import (
    CacheWriteError,
    KagiCLIError,
    MissingCredentialError,
    RemoteCallError,
    UsageError,
)
from .fastgpt import CacheEntry, FastGPTRequest, FastGPTResponse, Reference

__all__ = [
    "CacheEntry",
    "CacheWriteError",
    "FastGPTRequest",
    "FastGPTResponse",
    "KagiCLIError",
    "MissingCredentialError",
    "Reference",
    "RemoteCallError",
    "UsageError",
]
