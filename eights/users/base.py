"""Abstract User class that games interact with."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
import uuid as uuid_module

from ..messages.localization import Localization

if TYPE_CHECKING:
    from ..games.crazyeights.state import GameState


def generate_uuid() -> str:
    return str(uuid_module.uuid4())


class User(ABC):
    """
    Abstract base class for users.

    Games interact with this interface, never with rendering code directly.
    A presentation layer implements it to redraw the table from each state
    snapshot and to show the status line.
    """

    @property
    @abstractmethod
    def uuid(self) -> str:
        """The user's unique identifier (UUID string)."""
        ...

    @property
    @abstractmethod
    def username(self) -> str:
        """The user's display name."""
        ...

    @property
    def locale(self) -> str:
        """The user's locale for localization (e.g., 'en')."""
        return "en"

    @abstractmethod
    def speak(self, text: str) -> None:
        """
        Show a status-line message.

        Args:
            text: The message text.
        """
        ...

    def speak_l(self, message_id: str, **kwargs) -> None:
        """Show a localized status-line message."""
        self.speak(Localization.get(self.locale, message_id, **kwargs))

    @abstractmethod
    def on_state(self, state: "GameState") -> None:
        """
        Receive the read-only snapshot produced by the latest transition.

        Args:
            state: The new game state.
        """
        ...
