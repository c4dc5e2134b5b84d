"""Review voting: cast or overwrite a helpful/not-helpful vote."""

from protean import handle
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain

from reviewhub.domain import reviewhub
from reviewhub.review.review import Review


def vote_stats(review) -> dict:
    """Fresh counts from the review's vote rows, not from the cached counter."""
    votes = list(review.votes)
    return {
        "helpful_votes": sum(1 for v in votes if v.is_helpful),
        "total_votes": len(votes),
    }


@reviewhub.command(part_of="Review")
class CastVote:
    review_id: Identifier(required=True)
    user_id: Identifier(required=True)
    is_helpful: Boolean(required=True)


@reviewhub.command_handler(part_of=Review)
class CastVoteHandler:
    @handle(CastVote)
    def cast_vote(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        vote = review.cast_vote(user_id=command.user_id, is_helpful=command.is_helpful)
        repo.add(review)

        return {
            "vote": {
                "id": str(vote.id),
                "review_id": str(review.id),
                "user_id": str(vote.user_id),
                "is_helpful": vote.is_helpful,
                "created_at": vote.created_at,
            },
            "stats": vote_stats(review),
        }
