from typing import Optional

import pycouchdb


class CouchUsersRepo:
    """Reads users and maintains their list of authored post ids."""

    def __init__(self, couch_db):
        self.db = couch_db

    def get_user(self, user_id: str) -> Optional[dict]:
        try:
            return self.db.get(user_id)
        except pycouchdb.exceptions.NotFound:
            return None

    def append_post(self, user_id: str, post_id: str) -> Optional[dict]:
        # A concurrent writer surfaces as pycouchdb.exceptions.Conflict.
        user = self.get_user(user_id)
        if user is None:
            return None
        user["posts"] = [*user.get("posts", []), post_id]
        return self.db.save(user)
