"""Per-user and per-review aggregates, computed on demand."""

from decimal import ROUND_HALF_UP, Decimal

from protean.utils.globals import current_domain

from reviewhub.review.review import Review
from reviewhub.review.voting import vote_stats
from reviewhub.utils.db import fetch_all


def round_rating(value) -> float:
    """Round half-up to one decimal (4.25 -> 4.3, unlike ``round``)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def get_user_stats(user_id) -> dict:
    """Totals over the user's published reviews. Drafts are left out."""
    queryset = current_domain.repository_for(Review)._dao.query.filter(author_id=user_id, is_draft=False)
    reviews = fetch_all(queryset)

    if not reviews:
        return {"total_reviews": 0, "avg_rating": 0.0, "total_helpful_votes": 0}

    ratings = [r.rating for r in reviews]
    return {
        "total_reviews": len(reviews),
        "avg_rating": round_rating(Decimal(sum(ratings)) / Decimal(len(ratings))),
        "total_helpful_votes": sum(r.helpful_votes or 0 for r in reviews),
    }


def get_vote_stats(review) -> dict:
    return vote_stats(review)
