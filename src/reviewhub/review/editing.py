"""Review editing: partial update by the author."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from reviewhub.category.category import Category
from reviewhub.domain import reviewhub
from reviewhub.errors import ForbiddenError
from reviewhub.review.review import Review
from reviewhub.review.submission import decode_images, load_category
from reviewhub.utils.logging import get_logger

logger = get_logger(__name__)


def load_owned_review(review_id, caller_id):
    """Fetch a review the caller is about to change, enforcing authorship."""
    review = current_domain.repository_for(Review).get(review_id)
    if not review.is_authored_by(caller_id):
        raise ForbiddenError({"review_id": ["Only the author can change this review"]})
    return review


@reviewhub.command(part_of="Review")
class UpdateReview:
    """Fields left empty keep their current value."""

    review_id: Identifier(required=True)
    caller_id: Identifier(required=True)
    title: String(max_length=255)
    content: Text()
    rating: Integer()
    category_id: Identifier()
    images: Text()  # JSON array of URLs
    is_draft: Boolean()


@reviewhub.command_handler(part_of=Review)
class UpdateReviewHandler:
    @handle(UpdateReview)
    def update_review(self, command):
        review = load_owned_review(command.review_id, command.caller_id)

        changes = {
            field: getattr(command, field)
            for field in ("title", "content", "rating", "category_id", "is_draft")
            if getattr(command, field) is not None
        }
        if command.images is not None:
            changes["images"] = decode_images(command.images)

        old_category_id = review.category_id
        new_category_id = changes.get("category_id")
        moving = new_category_id is not None and str(new_category_id) != str(old_category_id or "")

        # Validate the target category before touching anything
        new_category = load_category(new_category_id) if moving else None

        review.update(**changes)
        current_domain.repository_for(Review).add(review)

        if moving:
            category_repo = current_domain.repository_for(Category)
            if old_category_id:
                try:
                    old_category = category_repo.get(old_category_id)
                except ObjectNotFoundError:
                    logger.warning(
                        "Previous category missing while moving review",
                        review_id=str(review.id),
                        category_id=str(old_category_id),
                    )
                else:
                    old_category.review_removed()
                    category_repo.add(old_category)

            new_category.review_added()
            category_repo.add(new_category)

            logger.info(
                "Review moved between categories",
                review_id=str(review.id),
                from_category_id=str(old_category_id) if old_category_id else None,
                to_category_id=str(new_category_id),
            )

        return str(review.id)
