"""
BlogApp Client Core — Blog Schema
==================================

What:  The blog post record and its two serialised forms.
How:   - `to_row()` / `from_row()`: the `blogs` table shape used with Supabase
       - `model_dump(mode="json")` / `model_validate()`: the cache snapshot
Who:   Created by the blog repository, mapped by both blog data sources,
       carried in blog states.

Row shape (`blogs` table):
    id          uuid (text)     ← generated client-side, UUID v1
    poster_id   uuid            ← references profiles.id
    title       text
    content     text
    image_url   text
    topics      text[]
    updated_at  timestamptz     ← ISO 8601 on the wire

`poster_name` is not a column. It is filled from the `profiles(name)` join
on fetch-all and is None on freshly created records.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

ROW_FIELDS = ("id", "poster_id", "title", "content", "image_url", "topics", "updated_at")


class Blog(BaseModel):
    """
    One user-authored post.

    The model is frozen: `id` can never change after creation. Use
    `model_copy(update={...})` to derive an updated record.
    """

    id: str = Field(min_length=1, description="Time-ordered unique id (UUID v1)")
    poster_id: str = Field(description="Author's user id")
    title: str
    content: str = Field(description="Body text")
    image_url: str = Field(default="", description="Public URL, empty until uploaded")
    topics: Tuple[str, ...] = Field(default=(), description="Topic names, order insignificant")
    updated_at: datetime = Field(description="Set at creation (UTC)")
    poster_name: Optional[str] = Field(
        default=None,
        description="Author display name, only present on fetched records",
    )

    model_config = {"frozen": True}

    @field_validator("updated_at")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Naive timestamps from the backend are UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def create(
        cls,
        poster_id: str,
        title: str,
        content: str,
        topics: Iterable[str],
    ) -> "Blog":
        """New record with a fresh id, no image yet and the current time."""
        return cls(
            id=str(uuid.uuid1()),
            poster_id=poster_id,
            title=title,
            content=content,
            image_url="",
            topics=tuple(topics),
            updated_at=datetime.now(timezone.utc),
        )

    def to_row(self) -> Dict[str, Any]:
        """Column mapping for inserts. Never includes `poster_name`."""
        return {
            "id": self.id,
            "poster_id": self.poster_id,
            "title": self.title,
            "content": self.content,
            "image_url": self.image_url,
            "topics": list(self.topics),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_row(cls, row: Dict[str, Any], poster_name: Optional[str] = None) -> "Blog":
        """Builds a record from a table row, ignoring joined or unknown columns."""
        data = {key: row[key] for key in ROW_FIELDS if key in row}
        if data.get("topics") is None:
            data["topics"] = ()
        if data.get("image_url") is None:
            data["image_url"] = ""
        return cls(**data, poster_name=poster_name)
