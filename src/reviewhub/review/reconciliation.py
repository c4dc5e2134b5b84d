"""Counter reconciliation: rebuild denormalized counters from the raw rows.

``helpful_votes`` on reviews and ``review_count`` on categories are caches.
Normal operation keeps them in step inside each unit of work; this command
is the recovery path for when they have drifted anyway (manual data fixes,
partial restores).
"""

from collections import Counter

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from reviewhub.category.category import Category
from reviewhub.domain import reviewhub
from reviewhub.review.review import Review
from reviewhub.utils.db import fetch_all
from reviewhub.utils.logging import get_logger

logger = get_logger(__name__)


@reviewhub.command(part_of="Review")
class ReconcileCounters:
    requested_by: String(max_length=255)


@reviewhub.command_handler(part_of=Review)
class ReconcileCountersHandler:
    @handle(ReconcileCounters)
    def reconcile_counters(self, command):
        review_repo = current_domain.repository_for(Review)
        category_repo = current_domain.repository_for(Category)

        reviews = fetch_all(review_repo._dao.query)

        reviews_fixed = 0
        for review in reviews:
            if review.recount_helpful_votes():
                review_repo.add(review)
                reviews_fixed += 1

        per_category = Counter(str(r.category_id) for r in reviews if r.category_id)

        categories_fixed = 0
        for category in fetch_all(category_repo._dao.query):
            if category.reconcile_review_count(per_category.get(str(category.id), 0)):
                category_repo.add(category)
                categories_fixed += 1

        summary = {
            "reviews_checked": len(reviews),
            "reviews_fixed": reviews_fixed,
            "categories_fixed": categories_fixed,
        }
        if reviews_fixed or categories_fixed:
            logger.warning("Counter drift corrected", requested_by=command.requested_by, **summary)
        else:
            logger.info("Counters consistent", requested_by=command.requested_by, **summary)
        return summary
