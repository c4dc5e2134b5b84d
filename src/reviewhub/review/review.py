"""Review aggregate: the core of the ReviewHub domain.

A Review is written by one author, optionally filed under a category, and
collects helpful/not-helpful votes from readers. Votes live inside the
aggregate so that a vote row and the recomputed ``helpful_votes`` counter
are always persisted together.

Content rules (title/content length, rating range) are checked when a
review is created or its content changes. They are not post-invariants,
so vote and view updates on existing rows never re-check them.
"""

import json
from datetime import UTC, datetime

from protean import atomic_change
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, Integer, String, Text

from reviewhub.domain import reviewhub
from reviewhub.review.events import ReviewCreated, ReviewUpdated, ReviewVoteCast

MIN_TITLE_LENGTH = 5
MIN_CONTENT_LENGTH = 50
MIN_RATING = 1
MAX_RATING = 5

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


def content_errors(title=_UNSET, content=_UNSET, rating=_UNSET):
    """Field-level messages for whichever of title/content/rating were given."""
    errors = {}

    if title is not _UNSET and (not isinstance(title, str) or len(title) < MIN_TITLE_LENGTH):
        errors["title"] = [f"Title must be at least {MIN_TITLE_LENGTH} characters"]

    if content is not _UNSET and (not isinstance(content, str) or len(content) < MIN_CONTENT_LENGTH):
        errors["content"] = [f"Review must be at least {MIN_CONTENT_LENGTH} characters"]

    if rating is not _UNSET:
        valid = isinstance(rating, int) and not isinstance(rating, bool) and MIN_RATING <= rating <= MAX_RATING
        if not valid:
            errors["rating"] = [f"Rating must be a whole number between {MIN_RATING} and {MAX_RATING}"]

    return errors


def _dump_images(images):
    return json.dumps(list(images or []))


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@reviewhub.entity(part_of="Review")
class ReviewVote:
    """One reader's verdict on a review. At most one per reader per review."""

    user_id = Identifier(required=True)
    is_helpful = Boolean(required=True)
    created_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@reviewhub.aggregate
class Review:
    """A rated, optionally illustrated write-up published (or drafted) by its author."""

    title = String(required=True, max_length=255)
    content = Text(required=True)
    rating = Integer(required=True, min_value=MIN_RATING, max_value=MAX_RATING)
    category_id = Identifier()
    author_id = Identifier(required=True)
    images = Text()  # JSON array of URLs, in display order
    is_draft = Boolean(default=False)

    # Denormalized counters
    helpful_votes = Integer(default=0)
    views = Integer(default=0)

    votes = HasMany(ReviewVote)

    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, author_id, title, content, rating, category_id=None, images=None, is_draft=False):
        """Write a new review, validating its content first."""
        errors = content_errors(title=title, content=content, rating=rating)
        if errors:
            raise ValidationError(errors)

        now = datetime.now(UTC)
        review = cls(
            author_id=author_id,
            title=title,
            content=content,
            rating=rating,
            category_id=category_id,
            images=_dump_images(images),
            is_draft=bool(is_draft),
            helpful_votes=0,
            views=0,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewCreated(
                review_id=str(review.id),
                author_id=str(author_id),
                category_id=str(category_id) if category_id else None,
                rating=rating,
                title=title,
                is_draft=bool(is_draft),
                created_at=now,
            )
        )
        return review

    # -------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------
    def update(
        self,
        title=_UNSET,
        content=_UNSET,
        rating=_UNSET,
        category_id=_UNSET,
        images=_UNSET,
        is_draft=_UNSET,
    ):
        """Apply a partial update. Fields left as ``_UNSET`` are untouched."""
        errors = content_errors(title=title, content=content, rating=rating)
        if errors:
            raise ValidationError(errors)

        now = datetime.now(UTC)
        changed = []

        with atomic_change(self):
            if title is not _UNSET:
                self.title = title
                changed.append("title")
            if content is not _UNSET:
                self.content = content
                changed.append("content")
            if rating is not _UNSET:
                self.rating = rating
                changed.append("rating")
            if category_id is not _UNSET:
                self.category_id = category_id
                changed.append("category_id")
            if images is not _UNSET:
                self.images = _dump_images(images)
                changed.append("images")
            if is_draft is not _UNSET:
                self.is_draft = bool(is_draft)
                changed.append("is_draft")

            self.updated_at = now

        self.raise_(
            ReviewUpdated(
                review_id=str(self.id),
                changed_fields=json.dumps(changed),
                is_draft=self.is_draft,
                updated_at=now,
            )
        )

    @property
    def image_urls(self):
        return json.loads(self.images) if self.images else []

    # -------------------------------------------------------------------
    # Voting
    # -------------------------------------------------------------------
    def cast_vote(self, user_id, is_helpful):
        """Record ``user_id``'s verdict, overwriting any earlier one.

        ``helpful_votes`` is recomputed from the vote rows rather than
        nudged by one, so it cannot drift from the votes it summarizes.
        """
        if not isinstance(is_helpful, bool):
            raise ValidationError({"is_helpful": ["Vote must be true or false"]})

        now = datetime.now(UTC)
        votes = list(self.votes)

        vote = next((v for v in votes if str(v.user_id) == str(user_id)), None)
        if vote:
            vote.is_helpful = is_helpful
        else:
            vote = ReviewVote(
                user_id=user_id,
                is_helpful=is_helpful,
                created_at=now,
            )
            self.add_votes(vote)
            votes.append(vote)

        self.helpful_votes = sum(1 for v in votes if v.is_helpful)

        self.raise_(
            ReviewVoteCast(
                review_id=str(self.id),
                voter_id=str(user_id),
                is_helpful=is_helpful,
                helpful_votes=self.helpful_votes,
                total_votes=len(votes),
                voted_at=now,
            )
        )
        return vote

    def vote_of(self, user_id):
        return next((v for v in self.votes if str(v.user_id) == str(user_id)), None)

    def recount_helpful_votes(self):
        """Rebuild ``helpful_votes`` from the vote rows; returns the drift corrected."""
        actual = sum(1 for v in self.votes if v.is_helpful)
        drift = actual - (self.helpful_votes or 0)
        if drift:
            self.helpful_votes = actual
        return drift

    # -------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------
    def is_authored_by(self, user_id):
        return user_id is not None and str(self.author_id) == str(user_id)

    def record_view(self, viewer_id=None):
        """Count one view unless the author is looking at their own review."""
        if self.is_authored_by(viewer_id):
            return False
        self.views = (self.views or 0) + 1
        return True

    def discard_votes(self):
        """Drop every vote row, ahead of deleting the review itself."""
        votes = list(self.votes)
        for vote in votes:
            self.remove_votes(vote)
        self.helpful_votes = 0
        return len(votes)
