"""
BlogApp Client Core — User Schema
==================================

What:  The signed-in user as seen by the client.
Who:   Built by the auth remote data source, held by AppUserCubit, used as
       `poster_id` when uploading blogs.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class User(BaseModel):
    id: str
    name: str = ""
    email: str = ""

    model_config = {"frozen": True}

    @classmethod
    def from_row(cls, row: Dict[str, Any], email: Optional[str] = None) -> "User":
        """Maps a `profiles` row. Missing fields become empty strings."""
        return cls(
            id=row.get("id") or "",
            name=row.get("name") or "",
            email=row.get("email") or email or "",
        )

    @classmethod
    def from_auth_user(cls, auth_user: Any) -> "User":
        """Maps the auth client's user object (sign-up and sign-in responses)."""
        metadata = getattr(auth_user, "user_metadata", None) or {}
        return cls(
            id=auth_user.id,
            name=metadata.get("name") or "",
            email=auth_user.email or "",
        )
