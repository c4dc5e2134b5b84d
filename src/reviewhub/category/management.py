"""Category management: creation and idempotent bootstrap seeding."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from reviewhub.category.category import Category
from reviewhub.domain import reviewhub
from reviewhub.utils.db import fetch_all
from reviewhub.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CATEGORIES = [
    {"name": "Restaurants", "slug": "restaurants", "icon": "utensils", "color": "blue"},
    {"name": "Technology", "slug": "technology", "icon": "laptop", "color": "green"},
    {"name": "Travel", "slug": "travel", "icon": "plane", "color": "purple"},
    {"name": "Beauty", "slug": "beauty", "icon": "spa", "color": "pink"},
    {"name": "Shopping", "slug": "shopping", "icon": "shopping-bag", "color": "orange"},
    {"name": "Health", "slug": "health", "icon": "heart", "color": "red"},
]


@reviewhub.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=100)
    icon: String(required=True, max_length=50)
    color: String(required=True, max_length=20)


@reviewhub.command(part_of="Category")
class SeedCategories:
    """Create the default categories that do not exist yet."""

    requested_by: String(max_length=255)


@reviewhub.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        existing = fetch_all(repo._dao.query)

        errors = {}
        if any(c.name == command.name for c in existing):
            errors["name"] = [f"Category '{command.name}' already exists"]
        if any(c.slug == command.slug for c in existing):
            errors["slug"] = [f"Slug '{command.slug}' is already taken"]
        if errors:
            raise ValidationError(errors)

        category = Category.create(
            name=command.name,
            slug=command.slug,
            icon=command.icon,
            color=command.color,
        )
        repo.add(category)
        return str(category.id)

    @handle(SeedCategories)
    def seed_categories(self, command):
        repo = current_domain.repository_for(Category)
        known_slugs = {c.slug for c in fetch_all(repo._dao.query)}

        created = []
        for fields in DEFAULT_CATEGORIES:
            if fields["slug"] in known_slugs:
                continue
            repo.add(Category.create(**fields))
            created.append(fields["slug"])

        if created:
            logger.info("Default categories seeded", created=created, requested_by=command.requested_by)
        return created
