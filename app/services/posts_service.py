import logging
from typing import Callable, Optional

from app.errors import BadRequestError, ForbiddenError
from app.schemas.post import Post, PostCreate, PostQuery, PostsPage, PostUpdate, Requester
from app.utils import one_month_ago, slugify, to_timestamp, utc_now

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "content")


class PostsService:
    def __init__(
        self,
        repo,
        users_repo,
        default_category: Optional[str] = None,
        clock: Callable = utc_now,
    ):
        self.repo = repo
        self.users_repo = users_repo
        self.default_category = default_category
        self.clock = clock

    def create_post(self, requester: Requester, payload: PostCreate) -> Post:
        if not requester.isAdmin:
            raise ForbiddenError("You are not allowed to create a post")
        if not payload.title or not payload.content:
            raise BadRequestError("Please provide all required fields")

        now = to_timestamp(self.clock())
        doc = {
            "title": payload.title,
            "content": payload.content,
            "category": payload.category or self.default_category,
            "image": payload.image,
            "slug": slugify(payload.title),
            "userId": requester.id,
            "createdAt": now,
            "updatedAt": now,
        }
        saved = self.repo.insert(doc)

        # Not atomic with the insert above: if this fails the post remains.
        if self.users_repo.append_post(requester.id, saved["_id"]) is None:
            logger.warning(
                f"User {requester.id} not found; post {saved['_id']} not linked"
            )
        return Post.from_doc(saved)

    def list_posts(
        self,
        query: PostQuery,
        start_index: int = 0,
        limit: int = 9,
        ascending: bool = False,
    ) -> PostsPage:
        docs = self.repo.find(query, ascending=ascending, skip=start_index, limit=limit)
        total = self.repo.count(query)
        since = to_timestamp(one_month_ago(self.clock()))
        last_month = self.repo.count_created_since(since)
        return PostsPage(
            posts=[Post.from_doc(doc) for doc in docs],
            totalPosts=total,
            lastMonthPosts=last_month,
        )

    def delete_post(self, requester: Requester, post_id: str, user_id: str) -> None:
        if not _may_modify(requester, user_id):
            raise ForbiddenError("You are not allowed to delete this post")
        if not self.repo.delete(post_id):
            logger.info(f"Delete of missing post {post_id} ignored")

    def update_post(
        self, requester: Requester, post_id: str, user_id: str, payload: PostUpdate
    ) -> Optional[Post]:
        if not _may_modify(requester, user_id):
            raise ForbiddenError("You are not allowed to update this post")
        changes = payload.changes()
        if any(field in changes and not changes[field] for field in REQUIRED_FIELDS):
            raise BadRequestError("Title and content cannot be empty")
        changes["updatedAt"] = to_timestamp(self.clock())
        updated = self.repo.update(post_id, changes)
        return Post.from_doc(updated) if updated else None


def _may_modify(requester: Requester, user_id: str) -> bool:
    # Admins may only act under their own user id.
    return requester.isAdmin and requester.id == user_id
