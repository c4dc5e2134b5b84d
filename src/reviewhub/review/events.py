"""Domain events for the Review aggregate.

Events are versioned, immutable facts about review state changes.
"""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from reviewhub.domain import reviewhub


@reviewhub.event(part_of="Review")
class ReviewCreated:
    """An author wrote a new review (published or draft)."""

    __version__ = 1

    review_id = Identifier(required=True)
    author_id = Identifier(required=True)
    category_id = Identifier()
    rating = Integer(required=True)
    title = String(required=True)
    is_draft = Boolean(default=False)
    created_at = DateTime(required=True)


@reviewhub.event(part_of="Review")
class ReviewUpdated:
    """The author changed some of the review's fields."""

    __version__ = 1

    review_id = Identifier(required=True)
    changed_fields = Text()  # JSON array of field names
    is_draft = Boolean(default=False)
    updated_at = DateTime(required=True)


@reviewhub.event(part_of="Review")
class ReviewVoteCast:
    """A reader voted on a review, or flipped an earlier vote."""

    __version__ = 1

    review_id = Identifier(required=True)
    voter_id = Identifier(required=True)
    is_helpful = Boolean(required=True)
    helpful_votes = Integer(required=True)
    total_votes = Integer(required=True)
    voted_at = DateTime(required=True)
