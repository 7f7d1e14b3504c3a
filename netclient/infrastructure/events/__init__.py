"""Notification plumbing shared by transports and managers."""

from .callback_registry import CallbackRegistry

__all__ = [
    "CallbackRegistry",
]
