"""Pydantic request/response schemas for the ReviewHub API.

These are separate from Protean commands (anti-corruption pattern).
Content rules such as minimum lengths are enforced by the domain, so the
request schemas only pin down shapes and types.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, StrictBool


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class SyncUserRequest(BaseModel):
    email: str | None = Field(default=None, max_length=254)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    profile_image_url: str | None = Field(default=None, max_length=500)


class CreateReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Best ramen in town",
                    "content": "Rich broth, springy noodles and a chashu that melts. Worth the queue every time.",
                    "rating": 5,
                    "category_id": "3f0c6a1e-0d55-4a53-9a57-2b1f1c0b7a11",
                    "images": ["/uploads/5b1e0c8a.jpg"],
                    "is_draft": False,
                }
            ]
        }
    }

    title: str
    content: str
    rating: int
    category_id: str | None = None
    images: list[str] | None = None
    is_draft: bool = False


class UpdateReviewRequest(BaseModel):
    title: str | None = None
    content: str | None = None
    rating: int | None = None
    category_id: str | None = None
    images: list[str] | None = None
    is_draft: bool | None = None


class CastVoteRequest(BaseModel):
    is_helpful: StrictBool


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    icon: str
    color: str
    review_count: int
    created_at: datetime | None = None


class UserResponse(BaseModel):
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ReviewResponse(BaseModel):
    id: str
    title: str
    content: str
    rating: int
    category_id: str | None = None
    author_id: str
    images: list[str] = []
    helpful_votes: int
    views: int
    is_draft: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    author: UserResponse
    category: CategoryResponse | None = None


class VoteResponse(BaseModel):
    id: str
    review_id: str
    user_id: str
    is_helpful: bool
    created_at: datetime | None = None


class VoteStatsResponse(BaseModel):
    helpful_votes: int
    total_votes: int


class CastVoteResponse(BaseModel):
    vote: VoteResponse
    stats: VoteStatsResponse


class UserStatsResponse(BaseModel):
    total_reviews: int
    avg_rating: float
    total_helpful_votes: int


class SeedCategoriesResponse(BaseModel):
    message: str
    created: list[str]


class UploadResponse(BaseModel):
    url: str
