"""
Record References

A reference to another record is either Unresolved (only the id is known)
or Resolved (the record was loaded alongside). Consumers match on the type
instead of guessing what a foreign-key attribute holds.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Union

from sqlalchemy import inspect

from app.models.user import User


@dataclass(frozen=True)
class Unresolved:
    id: uuid.UUID

    def as_dict(self) -> Dict[str, Any]:
        return {"id": self.id}


@dataclass(frozen=True)
class Resolved:
    record: User

    @property
    def id(self) -> uuid.UUID:
        return self.record.id

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.record.id,
            "name": self.record.name,
            "avatar_url": self.record.avatar_url,
        }


UserRef = Union[Unresolved, Resolved]


def creator_ref(post: Any) -> UserRef:
    """Reference to a post's creator, resolved only if already loaded."""
    state = inspect(post)
    if "creator" in state.unloaded:
        return Unresolved(post.creator_id)
    creator = post.creator
    if creator is None:
        # Dangling creator_id (user removed out of band)
        return Unresolved(post.creator_id)
    return Resolved(creator)
