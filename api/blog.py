"""Blog post routes: /blog-posts.

GET is public. POST, PUT and DELETE are gated by AdminAuthMiddleware.
"""

from fastapi import APIRouter, Query

from api.base import success_response
from core.exceptions import NotFoundError, ValidationError
from core.models import BlogPostCreate, BlogPostUpdate


class BlogPostReplace(BlogPostUpdate):
    """PUT body: the post id plus the fields to change."""

    id: str


def create_blog_router(services: dict) -> APIRouter:
    router = APIRouter(tags=["blog"])

    blog_svc = services["blog"]

    @router.get("/blog-posts")
    async def get_blog_posts(
        id: str | None = Query(None),
        slug: str | None = Query(None),
    ):
        """List all posts, or fetch one by ?id= or ?slug=."""
        if id is not None:
            post = blog_svc.get(id)
            if post is None:
                raise NotFoundError(f"Blog post {id} not found")
            return success_response(post.model_dump(mode="json")).model_dump(mode="json")

        if slug is not None:
            post = blog_svc.get_by_slug(slug)
            if post is None:
                raise NotFoundError(f"Blog post '{slug}' not found")
            return success_response(post.model_dump(mode="json")).model_dump(mode="json")

        posts = blog_svc.list_all()
        return success_response(
            [p.model_dump(mode="json") for p in posts]
        ).model_dump(mode="json")

    @router.post("/blog-posts")
    async def create_blog_post(body: BlogPostCreate):
        post = blog_svc.create(body)
        return success_response(post.model_dump(mode="json")).model_dump(mode="json")

    @router.put("/blog-posts")
    async def update_blog_post(body: BlogPostReplace):
        fields = BlogPostUpdate.model_validate(body.model_dump(exclude={"id"}, exclude_unset=True))
        post = blog_svc.update(body.id, fields)
        return success_response(post.model_dump(mode="json")).model_dump(mode="json")

    @router.delete("/blog-posts")
    async def delete_blog_post(id: str | None = Query(None)):
        if not id:
            raise ValidationError("Post id is required", errors={"id": "Required"})
        deleted = blog_svc.delete(id)
        return success_response({"deleted": deleted, "id": id}).model_dump(mode="json")

    return router
