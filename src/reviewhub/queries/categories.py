"""Category lookups."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from reviewhub.category.category import Category
from reviewhub.utils.db import fetch_all


def list_categories() -> list[Category]:
    categories = fetch_all(current_domain.repository_for(Category)._dao.query)
    return sorted(categories, key=lambda c: c.name)


def get_category_by_slug(slug: str) -> Category:
    matches = current_domain.repository_for(Category)._dao.query.filter(slug=slug).all().items
    if not matches:
        raise ObjectNotFoundError(f"Category with slug '{slug}' does not exist")
    return matches[0]
