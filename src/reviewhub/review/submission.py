"""Review submission: command and handler."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from reviewhub.category.category import Category
from reviewhub.domain import reviewhub
from reviewhub.review.review import Review
from reviewhub.utils.logging import get_logger

logger = get_logger(__name__)


def decode_images(raw):
    """Image URLs travel as a JSON array in commands."""
    if raw is None:
        return None
    try:
        images = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError as exc:
        raise ValidationError({"images": ["Images must be a list of URLs"]}) from exc
    if not isinstance(images, list) or not all(isinstance(url, str) for url in images):
        raise ValidationError({"images": ["Images must be a list of URLs"]})
    return images


def load_category(category_id):
    """Fetch the category a review is being filed under, as a validation step."""
    try:
        return current_domain.repository_for(Category).get(category_id)
    except ObjectNotFoundError as exc:
        raise ValidationError({"category_id": [f"Category {category_id} does not exist"]}) from exc


@reviewhub.command(part_of="Review")
class CreateReview:
    author_id: Identifier(required=True)
    title: String(required=True, max_length=255)
    content: Text(required=True)
    rating: Integer(required=True)
    category_id: Identifier()
    images: Text()  # JSON array of URLs
    is_draft: Boolean(default=False)


@reviewhub.command_handler(part_of=Review)
class CreateReviewHandler:
    @handle(CreateReview)
    def create_review(self, command):
        images = decode_images(command.images)
        category = load_category(command.category_id) if command.category_id else None

        review = Review.create(
            author_id=command.author_id,
            title=command.title,
            content=command.content,
            rating=command.rating,
            category_id=command.category_id,
            images=images,
            is_draft=command.is_draft,
        )
        current_domain.repository_for(Review).add(review)

        if category:
            category.review_added()
            current_domain.repository_for(Category).add(category)

        logger.info(
            "Review created",
            review_id=str(review.id),
            author_id=str(command.author_id),
            category_id=str(command.category_id) if command.category_id else None,
            is_draft=review.is_draft,
        )
        return str(review.id)
