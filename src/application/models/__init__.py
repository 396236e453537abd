"""Application-level models shared by use cases."""

from .system_info import SystemInfo

__all__ = ["SystemInfo"]
