"""Users: the presentation side the game notifies."""

from .base import User, generate_uuid

__all__ = ["User", "generate_uuid"]
