import copy
import uuid

import pycouchdb


class FakeCouchDB:
    """
    Minimal in-memory CouchDB stand-in.
    Set track_calls=True to record the order of calls.
    """

    def __init__(self, docs: dict | None = None, track_calls: bool = False):
        self.docs = docs if docs is not None else {}
        self.track_calls = track_calls
        self.calls = []

    def _track(self, call: str):
        if self.track_calls:
            self.calls.append(call)

    def get(self, doc_id: str) -> dict:
        self._track(f"get({doc_id})")
        if doc_id not in self.docs:
            raise pycouchdb.exceptions.NotFound(doc_id)
        return copy.deepcopy(self.docs[doc_id])

    def all(self, include_docs: bool = True):
        self._track(f"all(include_docs={include_docs})")
        if include_docs:
            return [{"doc": copy.deepcopy(doc)} for doc in self.docs.values()]
        return [{"id": doc_id} for doc_id in self.docs]

    def save(self, doc: dict) -> dict:
        saved = copy.deepcopy(doc)
        saved.setdefault("_id", uuid.uuid4().hex)
        self._track(f"save({saved['_id']})")
        current = self.docs.get(saved["_id"])
        if current and current.get("_rev") != saved.get("_rev"):
            raise pycouchdb.exceptions.Conflict(saved["_id"])
        revision = int((current or {}).get("_rev", "0-x").split("-")[0]) + 1
        saved["_rev"] = f"{revision}-{uuid.uuid4().hex[:8]}"
        self.docs[saved["_id"]] = saved
        return copy.deepcopy(saved)

    def delete(self, doc_id: str):
        self._track(f"delete({doc_id})")
        if doc_id not in self.docs:
            raise pycouchdb.exceptions.NotFound(doc_id)
        del self.docs[doc_id]


class FakeUsersRepo:
    """
    Minimal users repo stand-in used in service and security tests.
    """

    def __init__(self, users: dict | None = None, fail_with: Exception | None = None):
        self.users = users or {}
        self.fail_with = fail_with
        self.appended = []

    def get_user(self, user_id: str):
        return self.users.get(user_id)

    def append_post(self, user_id: str, post_id: str):
        if self.fail_with:
            raise self.fail_with
        user = self.users.get(user_id)
        if user is None:
            return None
        user.setdefault("posts", []).append(post_id)
        self.appended.append((user_id, post_id))
        return user


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    Records every call and returns the configured values.
    """

    def __init__(
        self,
        create_return=None,
        list_return=None,
        update_return=None,
        error: Exception | None = None,
    ):
        self._create_return = create_return
        self._list_return = list_return
        self._update_return = update_return
        self.error = error
        self.calls = []

    def _record(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))
        if self.error:
            raise self.error

    def create_post(self, requester, payload):
        self._record("create_post", requester, payload)
        return self._create_return

    def list_posts(self, query, start_index=0, limit=9, ascending=False):
        self._record(
            "list_posts", query, start_index=start_index, limit=limit, ascending=ascending
        )
        return self._list_return

    def delete_post(self, requester, post_id, user_id):
        self._record("delete_post", requester, post_id, user_id)

    def update_post(self, requester, post_id, user_id, payload):
        self._record("update_post", requester, post_id, user_id, payload)
        return self._update_return


def make_post_doc(post_id: str, **overrides) -> dict:
    doc = {
        "_id": post_id,
        "_rev": "1-abc",
        "title": f"Post {post_id}",
        "content": "Some content",
        "slug": f"post-{post_id}",
        "category": "uncategorized",
        "image": None,
        "userId": "admin-1",
        "createdAt": "2026-10-01T10:00:00.000+00:00",
        "updatedAt": "2026-10-01T10:00:00.000+00:00",
    }
    doc.update(overrides)
    return doc
