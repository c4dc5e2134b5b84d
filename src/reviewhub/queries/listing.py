"""Review listings: filter, order, paginate, then join authors and categories.

The three stages are plain functions so each can be exercised on its own:

1. ``build_criteria`` turns a ``ReviewFilter`` into one store criterion that
   the repository evaluates (exact matches, ``rating >= n`` and a
   case-insensitive ``title OR content`` substring match).
2. ``order_reviews`` sorts the matched rows. Every sort order falls back to
   ``created_at`` descending so ties come out newest first.
3. ``paginate`` slices the ordered rows.

``list_reviews`` composes them and attaches each row's author and category.
"""

from dataclasses import dataclass
from enum import Enum

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from protean.utils.query import Q

from reviewhub.account.user import User
from reviewhub.category.category import Category
from reviewhub.review.review import MAX_RATING, MIN_RATING, Review
from reviewhub.utils.db import fetch_all
from reviewhub.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_LIMIT = 20


class SortOrder(Enum):
    RECENT = "recent"
    RATING = "rating"
    HELPFUL = "helpful"
    OLDEST = "oldest"


@dataclass(frozen=True)
class ReviewFilter:
    category_id: str | None = None
    author_id: str | None = None
    is_draft: bool | None = None
    min_rating: int | None = None
    search: str | None = None
    sort_by: SortOrder | str = SortOrder.RECENT
    limit: int = DEFAULT_LIMIT
    offset: int = 0

    def __post_init__(self):
        errors = {}

        if self.min_rating is not None:
            in_range = (
                isinstance(self.min_rating, int)
                and not isinstance(self.min_rating, bool)
                and MIN_RATING <= self.min_rating <= MAX_RATING
            )
            if not in_range:
                errors["min_rating"] = [f"Minimum rating must be between {MIN_RATING} and {MAX_RATING}"]

        try:
            # Frozen dataclass; normalise the sort key through object.__setattr__
            object.__setattr__(self, "sort_by", SortOrder(self.sort_by))
        except ValueError:
            allowed = ", ".join(order.value for order in SortOrder)
            errors["sort_by"] = [f"Unknown sort order '{self.sort_by}'. Use one of: {allowed}"]

        if not isinstance(self.limit, int) or isinstance(self.limit, bool) or self.limit < 1:
            errors["limit"] = ["Limit must be a positive integer"]
        if not isinstance(self.offset, int) or isinstance(self.offset, bool) or self.offset < 0:
            errors["offset"] = ["Offset must be zero or a positive integer"]

        if errors:
            raise ValidationError(errors)


@dataclass(frozen=True)
class ReviewWithRelations:
    """A review joined with its author and (possibly absent) category."""

    review: Review
    author: User
    category: Category | None = None


# ---------------------------------------------------------------------------
# Stage 1: predicates
# ---------------------------------------------------------------------------
def build_criteria(review_filter: ReviewFilter) -> Q | None:
    """Combine every set filter field into one conjunctive criterion."""
    exact = {}
    if review_filter.category_id is not None:
        exact["category_id"] = review_filter.category_id
    if review_filter.author_id is not None:
        exact["author_id"] = review_filter.author_id
    if review_filter.is_draft is not None:
        exact["is_draft"] = review_filter.is_draft
    if review_filter.min_rating is not None:
        exact["rating__gte"] = review_filter.min_rating

    criteria = Q(**exact) if exact else None

    if review_filter.search:
        term = review_filter.search
        matches = Q(title__icontains=term) | Q(content__icontains=term)
        criteria = matches if criteria is None else criteria & matches

    return criteria


# ---------------------------------------------------------------------------
# Stage 2: ordering
# ---------------------------------------------------------------------------
def _timestamp(review):
    return review.created_at.timestamp() if review.created_at else 0.0


_SORT_KEYS = {
    SortOrder.RECENT: lambda r: -_timestamp(r),
    SortOrder.RATING: lambda r: (-(r.rating or 0), -_timestamp(r)),
    SortOrder.HELPFUL: lambda r: (-(r.helpful_votes or 0), -_timestamp(r)),
    SortOrder.OLDEST: _timestamp,
}


def order_reviews(reviews, sort_by=SortOrder.RECENT) -> list:
    return sorted(reviews, key=_SORT_KEYS[SortOrder(sort_by)])


# ---------------------------------------------------------------------------
# Stage 3: pagination
# ---------------------------------------------------------------------------
def paginate(reviews, limit=DEFAULT_LIMIT, offset=0) -> list:
    return list(reviews)[offset : offset + limit]


# ---------------------------------------------------------------------------
# Relations
# ---------------------------------------------------------------------------
def _index_by_id(records, key="id"):
    return {str(getattr(record, key)): record for record in records}


def attach_relations(reviews) -> list[ReviewWithRelations]:
    """Join each review with its author and category.

    A review whose author cannot be found is skipped and logged: every
    review is expected to have one.
    """
    reviews = list(reviews)
    if not reviews:
        return []

    author_ids = list({str(r.author_id) for r in reviews})
    category_ids = list({str(r.category_id) for r in reviews if r.category_id})

    user_dao = current_domain.repository_for(User)._dao
    authors = _index_by_id(fetch_all(user_dao.query.filter(user_id__in=author_ids)), key="user_id")

    categories = {}
    if category_ids:
        category_dao = current_domain.repository_for(Category)._dao
        categories = _index_by_id(fetch_all(category_dao.query.filter(id__in=category_ids)))

    joined = []
    for review in reviews:
        author = authors.get(str(review.author_id))
        if author is None:
            logger.error(
                "Review author not found",
                review_id=str(review.id),
                author_id=str(review.author_id),
            )
            continue
        category = categories.get(str(review.category_id)) if review.category_id else None
        joined.append(ReviewWithRelations(review=review, author=author, category=category))

    return joined


def list_reviews(review_filter: ReviewFilter | None = None) -> list[ReviewWithRelations]:
    """Reviews matching ``review_filter``, ordered and paginated, with relations."""
    review_filter = review_filter or ReviewFilter()

    queryset = current_domain.repository_for(Review)._dao.query
    criteria = build_criteria(review_filter)
    if criteria is not None:
        queryset = queryset.filter(criteria)

    ordered = order_reviews(fetch_all(queryset), review_filter.sort_by)
    page = paginate(ordered, review_filter.limit, review_filter.offset)
    return attach_relations(page)
