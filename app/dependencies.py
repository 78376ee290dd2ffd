from fastapi import Depends

from app.db.couchdb import get_couch
from app.repos.posts_repo import CouchPostsRepo
from app.repos.users_repo import CouchUsersRepo
from app.services.posts_service import PostsService
from app.settings import settings


def get_posts_repo(couch=Depends(get_couch)):
    return CouchPostsRepo(couch.posts_db)


def get_users_repo(couch=Depends(get_couch)):
    return CouchUsersRepo(couch.users_db)


def get_posts_service(
    repo=Depends(get_posts_repo),
    users_repo=Depends(get_users_repo),
):
    return PostsService(
        repo=repo,
        users_repo=users_repo,
        default_category=settings.DEFAULT_CATEGORY,
    )
