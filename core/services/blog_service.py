"""
Blog post store.

Posts are addressed publicly by slug and internally by id. The index holds
{id, slug} pairs, which is enough to enforce slug uniqueness and resolve
slug lookups without loading every post.
"""

import logging
from datetime import date
from typing import Any

from core.exceptions import NotFoundError, ValidationError
from core.models import BlogPost, BlogPostCreate, BlogPostUpdate
from core.services.record_store import RecordStore
from utils.timezone import format_display_date, now_utc, parse_display_date

logger = logging.getLogger(__name__)

DEFAULT_READ_TIME = "5 min read"


class BlogService(RecordStore[BlogPost]):
    """Service for blog post operations."""

    PREFIX = "blog_post"
    MODEL = BlogPost

    def index_entry(self, record: BlogPost) -> dict[str, Any]:
        return {"id": record.id, "slug": record.slug}

    def sort_key(self, record: BlogPost):
        # Free-text dates that don't parse sort after every dated post
        parsed = parse_display_date(record.date)
        return (parsed is not None, parsed or date.min, record.created_at)

    def _check_slug_available(self, slug: str, exclude_id: str | None = None) -> None:
        for entry in self.read_index():
            if entry.get("slug") == slug and entry.get("id") != exclude_id:
                raise ValidationError(
                    f"Slug '{slug}' is already in use",
                    errors={"slug": "A post with this slug already exists"},
                )

    def create(self, data: BlogPostCreate) -> BlogPost:
        """
        Create a blog post.

        Date defaults to today's display date and read time to '5 min read'.

        Raises:
            ValidationError: If the slug is already taken
        """
        self._check_slug_available(data.slug)

        fields = data.model_dump()
        fields["date"] = data.date or format_display_date(now_utc().date())
        fields["read_time"] = data.read_time or DEFAULT_READ_TIME

        return self._create(fields)

    def update(self, post_id: str, data: BlogPostUpdate) -> BlogPost:
        """
        Update a blog post. Only fields that were set are changed.

        Args:
            post_id: Post id
            data: Fields to update

        Returns:
            Updated post

        Raises:
            NotFoundError: If post doesn't exist
            ValidationError: If the new slug belongs to another post
        """
        fields = data.model_dump(exclude_unset=True)

        if self.get(post_id) is None:
            raise NotFoundError(f"Blog post {post_id} not found")

        if fields.get("slug") is not None:
            self._check_slug_available(fields["slug"], exclude_id=post_id)

        # Required fields can't be cleared with an explicit null
        fields = {k: v for k, v in fields.items() if v is not None}

        return self._update(post_id, fields)

    def get_by_slug(self, slug: str) -> BlogPost | None:
        """Get post by its public slug. Returns None when no post has it."""
        for entry in self.read_index():
            if entry.get("slug") == slug:
                return self.get(entry["id"])
        return None
