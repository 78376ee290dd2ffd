from typing import List, Optional

import pycouchdb

from app.schemas.post import PostQuery


class CouchPostsRepo:
    def __init__(self, couch_db):
        self.db = couch_db

    def list_post_docs(self) -> List[dict]:
        all_docs = [row.get("doc", row) for row in self.db.all(include_docs=True)]
        return [doc for doc in all_docs if self._is_post(doc)]

    def insert(self, doc: dict) -> dict:
        return self.db.save(doc)

    def find(
        self, query: PostQuery, ascending: bool = False, skip: int = 0, limit: int = 9
    ) -> List[dict]:
        matches = [doc for doc in self.list_post_docs() if query.matches(doc)]
        matches.sort(key=lambda doc: doc.get("updatedAt") or "", reverse=not ascending)
        return matches[skip : skip + limit]

    def count(self, query: PostQuery) -> int:
        return sum(1 for doc in self.list_post_docs() if query.matches(doc))

    def count_created_since(self, timestamp: str) -> int:
        return sum(
            1
            for doc in self.list_post_docs()
            if (doc.get("createdAt") or "") >= timestamp
        )

    def update(self, post_id: str, fields: dict) -> Optional[dict]:
        try:
            doc = self.db.get(post_id)
        except pycouchdb.exceptions.NotFound:
            return None
        doc.update(fields)
        return self.db.save(doc)

    def delete(self, post_id: str) -> bool:
        try:
            self.db.delete(post_id)
        except pycouchdb.exceptions.NotFound:
            return False
        return True

    @staticmethod
    def _is_post(doc: dict | None) -> bool:
        if not doc:
            return False
        return not doc.get("_id", "").startswith("_design/")
