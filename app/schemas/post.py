from typing import List, Optional

from pydantic import BaseModel
from pydantic.config import ConfigDict


class Post(BaseModel):
    id: str
    title: str
    content: str
    slug: str
    category: Optional[str] = None
    image: Optional[str] = None
    userId: str
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

    @classmethod
    def from_doc(cls, doc: dict) -> "Post":
        return cls(**{**doc, "id": doc["_id"]})


class PostCreate(BaseModel):
    # Unknown body keys are dropped so they never reach the stored document.
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None


class PostUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None

    def changes(self) -> dict:
        """Only the fields the caller actually sent, explicit nulls included."""
        return self.model_dump(exclude_unset=True)


class PostQuery(BaseModel):
    """Equality filters plus a free-text search, combined with AND."""

    userId: Optional[str] = None
    category: Optional[str] = None
    slug: Optional[str] = None
    postId: Optional[str] = None
    searchTerm: Optional[str] = None

    def matches(self, doc: dict) -> bool:
        if self.userId and doc.get("userId") != self.userId:
            return False
        if self.category and doc.get("category") != self.category:
            return False
        if self.slug and doc.get("slug") != self.slug:
            return False
        if self.postId and doc.get("_id") != self.postId:
            return False
        if self.searchTerm:
            term = self.searchTerm.lower()
            title = (doc.get("title") or "").lower()
            content = (doc.get("content") or "").lower()
            if term not in title and term not in content:
                return False
        return True


class PostsPage(BaseModel):
    posts: List[Post]
    totalPosts: int
    lastMonthPosts: int


class Requester(BaseModel):
    id: str
    isAdmin: bool = False
