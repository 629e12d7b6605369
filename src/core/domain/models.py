"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  Core to I/O libraries.
- Wire names (`userId`, `postId`) are declared as aliases, so mapping the
  API payload to the domain is a validation step, not a hand-written copy.

Note:
- These models describe *what* the data is, not *how* it is obtained.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class _Entity(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: int = Field(..., ge=1, description="Identifier assigned by the API.")


class User(_Entity):
    """Author of posts and comments."""

    name: str = Field(..., description="Full name.")
    username: str = Field(..., min_length=1, description="Public handle.")
    email: str = Field(..., description="Contact email.")
    phone: str | None = Field(default=None, description="Phone number, if public.")
    website: str | None = Field(default=None, description="Personal website, if any.")


class Comment(_Entity):
    """Comment attached to a post."""

    post_id: int = Field(..., alias="postId", ge=1, description="Parent post.")
    name: str = Field(..., description="Comment title.")
    email: str = Field(..., description="Email of the commenter.")
    body: str = Field(default="", description="Comment text.")


class Post(_Entity):
    """Blog post; the only paginated collection."""

    user_id: int = Field(..., alias="userId", ge=1, description="Author (User.id).")
    title: str = Field(..., description="Post title.")
    body: str = Field(default="", description="Post text.")


class PostDetail(BaseModel):
    """Aggregate shown by the detail screen.

    Built from three collections: the post itself, its author and the
    comments whose `post_id` points at it.
    """

    model_config = ConfigDict(frozen=True)

    post: Post
    author: User | None = Field(
        default=None,
        description="Author, when present in the users collection.",
    )
    comments: list[Comment] = Field(default_factory=list)
