"""FastAPI routes for ReviewHub.

Each route translates between Pydantic schemas (external contract) and
Protean commands or query functions (internal domain concepts).
"""

import json

from fastapi import APIRouter, Depends, File, Query, UploadFile
from protean.utils.globals import current_domain

from reviewhub.account.sync import UpsertUser
from reviewhub.account.user import User
from reviewhub.api.auth import current_user, current_user_id, optional_user_id
from reviewhub.api.schemas import (
    CastVoteRequest,
    CastVoteResponse,
    CategoryResponse,
    CreateReviewRequest,
    ReviewResponse,
    SeedCategoriesResponse,
    StatusResponse,
    SyncUserRequest,
    UpdateReviewRequest,
    UploadResponse,
    UserResponse,
    UserStatsResponse,
    VoteResponse,
)
from reviewhub.category.management import SeedCategories
from reviewhub.queries.categories import get_category_by_slug, list_categories
from reviewhub.queries.detail import get_review
from reviewhub.queries.listing import ReviewFilter, ReviewWithRelations, attach_relations, list_reviews
from reviewhub.queries.stats import get_user_stats
from reviewhub.queries.votes import get_user_vote
from reviewhub.review.editing import UpdateReview
from reviewhub.review.removal import DeleteReview
from reviewhub.review.review import Review
from reviewhub.review.submission import CreateReview
from reviewhub.review.voting import CastVote
from reviewhub.uploads.images import store_image

category_router = APIRouter(prefix="/api/categories", tags=["categories"])
auth_router = APIRouter(prefix="/api/auth", tags=["auth"])
review_router = APIRouter(prefix="/api/reviews", tags=["reviews"])
user_router = APIRouter(prefix="/api/users", tags=["users"])
admin_router = APIRouter(prefix="/api", tags=["admin"])


# ---------------------------------------------------------------------------
# Domain → schema translation
# ---------------------------------------------------------------------------
def _category_out(category) -> CategoryResponse:
    return CategoryResponse(
        id=str(category.id),
        name=category.name,
        slug=category.slug,
        icon=category.icon,
        color=category.color,
        review_count=category.review_count or 0,
        created_at=category.created_at,
    )


def _user_out(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.user_id),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        profile_image_url=user.profile_image_url,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def _review_out(joined: ReviewWithRelations) -> ReviewResponse:
    review = joined.review
    return ReviewResponse(
        id=str(review.id),
        title=review.title,
        content=review.content,
        rating=review.rating,
        category_id=str(review.category_id) if review.category_id else None,
        author_id=str(review.author_id),
        images=review.image_urls,
        helpful_votes=review.helpful_votes or 0,
        views=review.views or 0,
        is_draft=review.is_draft,
        created_at=review.created_at,
        updated_at=review.updated_at,
        author=_user_out(joined.author),
        category=_category_out(joined.category) if joined.category else None,
    )


def _vote_out(review_id, vote) -> VoteResponse:
    return VoteResponse(
        id=str(vote.id),
        review_id=str(review_id),
        user_id=str(vote.user_id),
        is_helpful=vote.is_helpful,
        created_at=vote.created_at,
    )


def _load_review_out(review_id: str) -> ReviewResponse:
    """Current state of a review, without counting a view."""
    review = current_domain.repository_for(Review).get(review_id)
    return _review_out(attach_relations([review])[0])


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
@category_router.get("", response_model=list[CategoryResponse])
async def get_categories() -> list[CategoryResponse]:
    return [_category_out(category) for category in list_categories()]


@category_router.get("/{slug}", response_model=CategoryResponse)
async def get_category(slug: str) -> CategoryResponse:
    return _category_out(get_category_by_slug(slug))


@admin_router.post("/init", response_model=SeedCategoriesResponse)
async def initialize_categories() -> SeedCategoriesResponse:
    """Seed the default categories. Safe to call repeatedly."""
    created = current_domain.process(SeedCategories(requested_by="api"), asynchronous=False)
    return SeedCategoriesResponse(message="Categories initialized", created=created or [])


# ---------------------------------------------------------------------------
# Current user
# ---------------------------------------------------------------------------
@auth_router.get("/user", response_model=UserResponse)
async def get_current_user(user: User = Depends(current_user)) -> UserResponse:
    return _user_out(user)


@auth_router.put("/user", response_model=UserResponse)
async def sync_current_user(body: SyncUserRequest, user_id: str = Depends(current_user_id)) -> UserResponse:
    """Create or refresh the caller's profile from identity-provider claims."""
    command = UpsertUser(
        user_id=user_id,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        profile_image_url=body.profile_image_url,
    )
    current_domain.process(command, asynchronous=False)
    return _user_out(current_domain.repository_for(User).get(user_id))


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
@review_router.get("", response_model=list[ReviewResponse])
async def get_reviews(
    category_id: str | None = Query(default=None, alias="categoryId"),
    author_id: str | None = Query(default=None, alias="authorId"),
    is_draft: bool = Query(default=False, alias="isDraft"),
    min_rating: int | None = Query(default=None, alias="minRating"),
    search: str | None = Query(default=None),
    sort_by: str = Query(default="recent", alias="sortBy"),
    limit: int = Query(default=20),
    offset: int = Query(default=0),
) -> list[ReviewResponse]:
    review_filter = ReviewFilter(
        category_id=category_id,
        author_id=author_id,
        is_draft=is_draft,
        min_rating=min_rating,
        search=search,
        sort_by=sort_by,
        limit=limit,
        offset=offset,
    )
    return [_review_out(joined) for joined in list_reviews(review_filter)]


@review_router.get("/{review_id}", response_model=ReviewResponse)
async def get_single_review(review_id: str, viewer_id: str | None = Depends(optional_user_id)) -> ReviewResponse:
    return _review_out(get_review(review_id, viewer_id=viewer_id))


@review_router.post("", status_code=201, response_model=ReviewResponse)
async def create_review(body: CreateReviewRequest, user: User = Depends(current_user)) -> ReviewResponse:
    command = CreateReview(
        author_id=str(user.user_id),
        title=body.title,
        content=body.content,
        rating=body.rating,
        category_id=body.category_id,
        images=json.dumps(body.images) if body.images is not None else None,
        is_draft=body.is_draft,
    )
    review_id = current_domain.process(command, asynchronous=False)
    return _load_review_out(review_id)


@review_router.put("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: str, body: UpdateReviewRequest, user: User = Depends(current_user)
) -> ReviewResponse:
    command = UpdateReview(
        review_id=review_id,
        caller_id=str(user.user_id),
        title=body.title,
        content=body.content,
        rating=body.rating,
        category_id=body.category_id,
        images=json.dumps(body.images) if body.images is not None else None,
        is_draft=body.is_draft,
    )
    current_domain.process(command, asynchronous=False)
    return _load_review_out(review_id)


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, user: User = Depends(current_user)) -> StatusResponse:
    command = DeleteReview(review_id=review_id, caller_id=str(user.user_id))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.post("/{review_id}/vote", response_model=CastVoteResponse)
async def vote_on_review(
    review_id: str, body: CastVoteRequest, user: User = Depends(current_user)
) -> CastVoteResponse:
    command = CastVote(review_id=review_id, user_id=str(user.user_id), is_helpful=body.is_helpful)
    result = current_domain.process(command, asynchronous=False)
    return CastVoteResponse(**result)


@review_router.get("/{review_id}/vote", response_model=VoteResponse | None)
async def get_own_vote(review_id: str, user: User = Depends(current_user)) -> VoteResponse | None:
    vote = get_user_vote(review_id, user.user_id)
    return _vote_out(review_id, vote) if vote else None


# ---------------------------------------------------------------------------
# User statistics
# ---------------------------------------------------------------------------
@user_router.get("/{user_id}/stats", response_model=UserStatsResponse)
async def get_stats(user_id: str) -> UserStatsResponse:
    return UserStatsResponse(**get_user_stats(user_id))


# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------
@admin_router.post("/upload", response_model=UploadResponse)
async def upload_image(file: UploadFile = File(...), user: User = Depends(current_user)) -> UploadResponse:
    data = await file.read()
    blob = store_image(data, file.content_type, filename=file.filename, uploaded_by=str(user.user_id))
    return UploadResponse(url=blob.url)
