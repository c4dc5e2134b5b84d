"""Review removal: command and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from reviewhub.category.category import Category
from reviewhub.domain import reviewhub
from reviewhub.review.editing import load_owned_review
from reviewhub.review.review import Review
from reviewhub.utils.logging import get_logger

logger = get_logger(__name__)


@reviewhub.command(part_of="Review")
class DeleteReview:
    review_id: Identifier(required=True)
    caller_id: Identifier(required=True)


@reviewhub.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        review = load_owned_review(command.review_id, command.caller_id)
        repo = current_domain.repository_for(Review)

        discarded = review.discard_votes()
        repo.add(review)
        repo._dao.delete(review)

        if review.category_id:
            category_repo = current_domain.repository_for(Category)
            try:
                category = category_repo.get(review.category_id)
            except ObjectNotFoundError:
                logger.warning(
                    "Category of deleted review no longer exists",
                    review_id=str(command.review_id),
                    category_id=str(review.category_id),
                )
            else:
                category.review_removed()
                category_repo.add(category)

        logger.info(
            "Review deleted",
            review_id=str(command.review_id),
            votes_discarded=discarded,
        )
