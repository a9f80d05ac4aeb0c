"""Common utilities shared across the relay service."""

from common.utils.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
