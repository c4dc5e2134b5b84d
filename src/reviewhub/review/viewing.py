"""View counting for reviews."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from reviewhub.domain import reviewhub
from reviewhub.review.review import Review


@reviewhub.command(part_of="Review")
class RecordReviewView:
    review_id: Identifier(required=True)
    viewer_id: Identifier()


@reviewhub.command_handler(part_of=Review)
class RecordReviewViewHandler:
    @handle(RecordReviewView)
    def record_view(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        if review.record_view(command.viewer_id):
            repo.add(review)
            return True
        return False
