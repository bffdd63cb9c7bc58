# preview_server/schemas.py
"""Query parameter models for the `/public` routes.

Values stay strings: a malformed number is handled by the projection rules
instead of being rejected with a validation error.
"""
from pydantic import BaseModel
from typing import Optional


class ReviewQuery(BaseModel):
    limit: Optional[str] = None


class ListingTagQuery(BaseModel):
    tag: Optional[str] = None
    slug: Optional[str] = None
    tag_id: Optional[str] = None
    origin: Optional[str] = None

    @property
    def tag_ref(self) -> Optional[str]:
        # `tag` wins; an empty `tag` falls back to `slug`
        return self.tag or self.slug

    @property
    def admin_only(self) -> bool:
        return (self.origin or "").strip().lower() == "admin"
