"""Single-review lookup, counting the view."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from reviewhub.queries.listing import ReviewWithRelations, attach_relations
from reviewhub.review.review import Review
from reviewhub.review.viewing import RecordReviewView


def get_review(review_id, viewer_id=None) -> ReviewWithRelations:
    """Fetch one review with its relations and count the view.

    The returned review carries the values read before the view was
    recorded. Authors reading their own review are not counted.
    """
    review = current_domain.repository_for(Review).get(review_id)

    joined = attach_relations([review])
    if not joined:
        # attach_relations already logged the missing author
        raise ObjectNotFoundError(f"Review {review_id} has no resolvable author")

    current_domain.process(
        RecordReviewView(review_id=str(review.id), viewer_id=viewer_id),
        asynchronous=False,
    )
    return joined[0]
