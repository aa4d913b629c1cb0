"""Users shared between rooms."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class User:
    """A user seen in room membership.

    One instance exists per user ID in :attr:`Client.users`; every room the
    user is joined to holds the same object.
    """
    user_id: str
    displayname: str | None = None
    avatar_url: str | None = None
    rooms: set[str] = field(default_factory=set)

    def get_display_name(self) -> str:
        return self.displayname or self.user_id
