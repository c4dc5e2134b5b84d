"""Category aggregate: the fixed set of topics reviews are filed under."""

from datetime import UTC, datetime

from protean.fields import DateTime, Integer, String

from reviewhub.domain import reviewhub


@reviewhub.aggregate
class Category:
    """A browsable topic such as Restaurants or Travel.

    ``review_count`` is a denormalized cache of the reviews filed under the
    category. It moves by one as reviews are created, moved or deleted, and
    is rebuilt from the review rows by ``ReconcileCounters``.
    """

    name: String(required=True, max_length=100, unique=True)
    slug: String(required=True, max_length=100, unique=True)
    icon: String(required=True, max_length=50)
    color: String(required=True, max_length=20)
    review_count: Integer(default=0, min_value=0)
    created_at: DateTime()

    @classmethod
    def create(cls, name, slug, icon, color):
        return cls(
            name=name,
            slug=slug,
            icon=icon,
            color=color,
            review_count=0,
            created_at=datetime.now(UTC),
        )

    def review_added(self):
        self.review_count = (self.review_count or 0) + 1

    def review_removed(self):
        self.review_count = max(0, (self.review_count or 0) - 1)

    def reconcile_review_count(self, actual_count):
        """Overwrite the cached count; returns the drift that was corrected."""
        drift = actual_count - (self.review_count or 0)
        if drift:
            self.review_count = actual_count
        return drift
