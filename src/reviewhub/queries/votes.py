"""Lookups on the votes of a single review."""

from protean.utils.globals import current_domain

from reviewhub.review.review import Review


def get_user_vote(review_id, user_id):
    """The caller's vote on ``review_id``, or ``None`` if they have not voted.

    Raises ``ObjectNotFoundError`` for an unknown review.
    """
    review = current_domain.repository_for(Review).get(review_id)
    return review.vote_of(user_id)
