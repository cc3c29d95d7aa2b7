"""Domain entity for the user resource."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """User as exposed to application logic."""

    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None

    @property
    def label(self) -> str:
        """Name to show in lists: display name when set, username otherwise."""
        return self.display_name or self.username
