"""
Postboard API: Post Service
============================

What:  Business rules for the /posts resource.
How:   Same shape as UserService over an injected EntityStore[Post], minus
       authentication and uniqueness checks. Posts carry no ownership
       check: any caller may edit or delete any post.
"""

import logging
import uuid

from postboard.exceptions import NotFoundError
from postboard.repositories.store import EntityStore
from postboard.schemas.common import Page, paginate, utc_now_iso
from postboard.schemas.post import Post, PostCreate, PostQuery, PostUpdate

logger = logging.getLogger(__name__)


class PostService:
    def __init__(self, store: EntityStore[Post]):
        self.store = store

    def _matches(self, post: Post, query: PostQuery) -> bool:
        if query.author_id is not None and post.author_id != query.author_id:
            return False
        if query.published is not None and post.published != query.published:
            return False
        if query.search:
            needle = query.search.lower()
            if needle not in post.title.lower() and needle not in post.content.lower():
                return False
        return True

    async def list_posts(self, query: PostQuery) -> Page[Post]:
        """Apply authorId / published / search filters, then paginate."""
        posts = self.store.filter(lambda p: self._matches(p, query))
        return paginate(posts, query.page, query.limit)

    async def get_post(self, post_id: str) -> Post:
        post = self.store.find_by_id(post_id)
        if post is None:
            raise NotFoundError(resource="post", resource_id=post_id)
        return post

    async def create_post(self, data: PostCreate) -> Post:
        now = utc_now_iso()
        post = Post(
            id=str(uuid.uuid4()),
            **data.model_dump(exclude_none=True),
            created_at=now,
            updated_at=now,
        )
        self.store.insert(post)
        logger.info("Post created: %s (author=%s)", post.id, post.author_id)
        return post

    async def update_post(self, post_id: str, data: PostUpdate) -> Post:
        post = await self.get_post(post_id)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        merged = post.model_copy(update={**updates, "updated_at": utc_now_iso()})
        self.store.replace_at(post_id, merged)
        logger.info("Post updated: %s (fields=%s)", post_id, sorted(updates))
        return merged

    async def delete_post(self, post_id: str) -> None:
        if not self.store.remove_by_id(post_id):
            raise NotFoundError(resource="post", resource_id=post_id)
        logger.info("Post deleted: %s", post_id)
