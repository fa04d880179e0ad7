"""Tests for BlogService."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import NotFoundError, ValidationError
from core.models import BlogCategory, BlogContent, BlogPostCreate, BlogPostUpdate, BlogSection
from core.services.blog_service import BlogService


@pytest.fixture
def blog_service(blobs) -> BlogService:
    return BlogService(blobs)


def _post(slug="usps-lease-basics", **overrides) -> BlogPostCreate:
    fields = {
        "title": "USPS Lease Basics",
        "slug": slug,
        "excerpt": "What every owner should know.",
        "category": BlogCategory.LEASES_AND_CONTRACTS,
        "content": BlogContent(
            intro="Leases matter.",
            sections=[BlogSection(heading="Terms", content="Most run 10 years.")],
            conclusion="Read carefully.",
        ),
    }
    fields.update(overrides)
    return BlogPostCreate(**fields)


class TestCreatePost:

    def test_defaults_applied(self, blog_service):
        post = blog_service.create(_post())

        assert post.read_time == "5 min read"
        assert post.date  # today's display date
        assert post.featured is False

    def test_explicit_date_kept(self, blog_service):
        post = blog_service.create(_post(date="January 5, 2025", read_time="8 min read"))
        assert post.date == "January 5, 2025"
        assert post.read_time == "8 min read"

    def test_duplicate_slug_rejected(self, blog_service):
        blog_service.create(_post())

        with pytest.raises(ValidationError) as exc_info:
            blog_service.create(_post())

        assert "slug" in exc_info.value.errors

    def test_slug_must_be_lowercase_hyphenated(self):
        with pytest.raises(PydanticValidationError):
            _post(slug="Not A Slug")

    def test_unknown_category_rejected(self):
        with pytest.raises(PydanticValidationError):
            _post(category="Gardening")

    def test_sections_keep_order(self, blog_service):
        content = BlogContent(sections=[
            BlogSection(heading="First", content="1"),
            BlogSection(heading="Second", content="2"),
        ])
        post = blog_service.create(_post(content=content))

        stored = blog_service.get(post.id)
        assert [s.heading for s in stored.content.sections] == ["First", "Second"]


class TestUpdatePost:

    def test_only_set_fields_change(self, blog_service):
        post = blog_service.create(_post())
        updated = blog_service.update(post.id, BlogPostUpdate(title="New Title"))

        assert updated.title == "New Title"
        assert updated.slug == post.slug
        assert updated.content == post.content
        assert updated.updated_at >= post.updated_at

    def test_slug_change_updates_lookup(self, blog_service):
        post = blog_service.create(_post())
        blog_service.update(post.id, BlogPostUpdate(slug="renamed"))

        assert blog_service.get_by_slug("usps-lease-basics") is None
        assert blog_service.get_by_slug("renamed").id == post.id

    def test_slug_taken_by_other_post_rejected(self, blog_service):
        blog_service.create(_post(slug="taken"))
        post = blog_service.create(_post(slug="mine"))

        with pytest.raises(ValidationError):
            blog_service.update(post.id, BlogPostUpdate(slug="taken"))

    def test_keeping_own_slug_allowed(self, blog_service):
        post = blog_service.create(_post(slug="mine"))
        updated = blog_service.update(post.id, BlogPostUpdate(slug="mine", featured=True))
        assert updated.featured is True

    def test_explicit_null_does_not_clear_required_field(self, blog_service):
        post = blog_service.create(_post())
        updated = blog_service.update(post.id, BlogPostUpdate(title=None))
        assert updated.title == post.title

    def test_missing_post_raises(self, blog_service):
        with pytest.raises(NotFoundError):
            blog_service.update("missing", BlogPostUpdate(title="x"))


class TestLookupAndList:

    def test_get_by_slug(self, blog_service):
        post = blog_service.create(_post())
        assert blog_service.get_by_slug("usps-lease-basics").id == post.id

    def test_get_by_unknown_slug(self, blog_service):
        assert blog_service.get_by_slug("nothing-here") is None

    def test_list_by_display_date_descending(self, blog_service):
        blog_service.create(_post(slug="old", date="March 3, 2024"))
        blog_service.create(_post(slug="undated", date="Coming soon"))
        blog_service.create(_post(slug="new", date="January 5, 2025"))
        blog_service.create(_post(slug="mid", date="Oct 1, 2024"))

        assert [p.slug for p in blog_service.list_all()] == ["new", "mid", "old", "undated"]

    def test_delete_frees_slug(self, blog_service):
        post = blog_service.create(_post())
        assert blog_service.delete(post.id) is True

        blog_service.create(_post())  # does not raise
