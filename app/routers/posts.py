import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette.status import HTTP_201_CREATED

from app import dependencies as deps
from app.errors import store_failure
from app.schemas.post import Post, PostCreate, PostQuery, PostsPage, PostUpdate, Requester
from app.security import get_current_user
from app.services.posts_service import PostsService
from app.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter()
_LEADING_INT = re.compile(r"\s*[+-]?\d+")


@router.post("/posts/create", response_model=Post, status_code=HTTP_201_CREATED)
def create_post(
    payload: PostCreate,
    requester: Requester = Depends(get_current_user),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Create a post as the requesting admin."""
    try:
        return service.create_post(requester, payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error saving post: {e}")
        raise store_failure(e, "Failed to create post")


@router.get("/posts", response_model=PostsPage)
def list_posts(
    start_index: Optional[str] = Query(None, alias="startIndex"),
    limit: Optional[str] = Query(None),
    order: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
    category: Optional[str] = Query(None),
    slug: Optional[str] = Query(None),
    post_id: Optional[str] = Query(None, alias="postId"),
    search_term: Optional[str] = Query(None, alias="searchTerm"),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a page of posts plus overall and last-month counts."""
    query = PostQuery(
        userId=user_id,
        category=category,
        slug=slug,
        postId=post_id,
        searchTerm=search_term,
    )
    try:
        return service.list_posts(
            query,
            start_index=_parse_int(start_index, 0),
            limit=_parse_int(limit, settings.POSTS_PAGE_LIMIT),
            ascending=order == "asc",
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching posts: {e}")
        raise store_failure(e, "Failed to retrieve posts")


@router.delete("/posts/{post_id}/{user_id}")
def delete_post(
    post_id: str,
    user_id: str,
    requester: Requester = Depends(get_current_user),
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        service.delete_post(requester, post_id, user_id)
        return "The post has been deleted"
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting post {post_id}: {e}")
        raise store_failure(e, "Failed to delete post")


@router.put("/posts/{post_id}/{user_id}", response_model=Optional[Post])
def update_post(
    post_id: str,
    user_id: str,
    payload: PostUpdate,
    requester: Requester = Depends(get_current_user),
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return service.update_post(requester, post_id, user_id, payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating post {post_id}: {e}")
        raise store_failure(e, "Failed to update post")


def _parse_int(value: Optional[str], default: int) -> int:
    # Reads leading digits ("5abc" and "2.5" give 5 and 2). Missing, non-numeric,
    # zero and negative values fall back to the default.
    match = _LEADING_INT.match(value or "")
    parsed = int(match.group()) if match else 0
    return parsed if parsed > 0 else default
