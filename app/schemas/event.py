"""
Event-related Pydantic schemas
"""

import json
from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from app.utils.slugs import is_valid_slug, normalize_slug, slugify

class EventForm(BaseModel):
    """Fields accepted by the multipart event submission.

    ``tags`` and ``agenda`` arrive as JSON-encoded arrays of strings; every
    other field is a plain form value. The image part is handled separately.
    """
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str
    description: str
    slug: Optional[str] = None
    overview: Optional[str] = None
    venue: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    mode: Optional[str] = None
    audience: Optional[str] = None
    organizer: Optional[str] = None
    tags: List[str] = []
    agenda: List[str] = []

    @field_validator("title", "description")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("slug")
    @classmethod
    def url_safe_slug(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        value = normalize_slug(value)
        if not is_valid_slug(value):
            raise ValueError("must contain only letters, digits and single hyphens")
        return value

    @field_validator("tags", "agenda", mode="before")
    @classmethod
    def decode_json_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError as exc:
                raise ValueError(f"must be a JSON array of strings ({exc.msg})") from exc
        if not isinstance(value, list):
            raise ValueError("must be a JSON array of strings")
        return value

    @field_validator("tags")
    @classmethod
    def unique_tags(cls, value: List[str]) -> List[str]:
        tags: List[str] = []
        for tag in value:
            tag = tag.strip()
            if tag and tag not in tags:
                tags.append(tag)
        return tags

    @model_validator(mode="after")
    def slug_available(self) -> "EventForm":
        if not self.slug and not slugify(self.title):
            raise ValueError("title must contain letters or digits to build a slug")
        return self

    @classmethod
    def from_form(cls, form) -> "EventForm":
        """Validate the scalar parts of a submitted form"""
        data = {
            key: value
            for key, value in form.items()
            if key in cls.model_fields and isinstance(value, str)
        }
        return cls.model_validate(data)

class EventResponse(BaseModel):
    """Event response"""
    id: int
    title: str
    slug: str
    description: str
    overview: Optional[str] = None
    image: str
    venue: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    mode: Optional[str] = None
    audience: Optional[str] = None
    organizer: Optional[str] = None
    agenda: List[str]
    tags: List[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
