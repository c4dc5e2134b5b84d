"""Shared BDD fixtures and step definitions for ReviewHub."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from reviewhub.account.sync import UpsertUser
from reviewhub.category.management import SeedCategories
from reviewhub.errors import ForbiddenError
from reviewhub.queries.categories import get_category_by_slug
from reviewhub.review.events import ReviewCreated, ReviewUpdated, ReviewVoteCast
from reviewhub.review.review import Review
from reviewhub.review.submission import CreateReview

_REVIEW_EVENT_CLASSES = {
    "ReviewCreated": ReviewCreated,
    "ReviewUpdated": ReviewUpdated,
    "ReviewVoteCast": ReviewVoteCast,
}

CONTENT = "A careful review with plenty of detail so it clears the minimum length rule."


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def context():
    """Scratch space shared between the steps of one scenario."""
    return {}


def _write_review(author_id, category_slug=None, **overrides):
    fields = {"author_id": author_id, "title": "Scenario review", "content": CONTENT, "rating": 4}
    if category_slug:
        fields["category_id"] = str(get_category_by_slug(category_slug).id)
    fields.update(overrides)
    return current_domain.process(CreateReview(**fields), asynchronous=False)


@pytest.fixture()
def write_review():
    """Write a review through the command, optionally filed under a category slug."""
    return _write_review


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a published review by "{author_id}"'), target_fixture="review")
def published_review(author_id):
    review = Review.create(author_id=author_id, title="Scenario review", content=CONTENT, rating=4)
    review._events.clear()
    return review


@given("the default categories exist")
def default_categories():
    current_domain.process(SeedCategories(requested_by="bdd"), asynchronous=False)


@given(parsers.cfparse('"{user_id}" is a signed-in user'))
def signed_in_user(user_id):
    current_domain.process(UpsertUser(user_id=user_id), asynchronous=False)


@given(parsers.cfparse('"{author_id}" has written a review in "{slug}"'))
def existing_review(context, write_review, author_id, slug):
    context["review_id"] = write_review(author_id, slug)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the review helpful count is {count:d}"))
def review_helpful_count(review, count):
    assert review.helpful_votes == count


@then(parsers.cfparse("the review has {count:d} vote"))
@then(parsers.cfparse("the review has {count:d} votes"))
def review_vote_count(review, count):
    assert len(review.votes) == count


@then(parsers.cfparse("a {event_type} event is raised"))
def review_event_raised(review, event_type):
    event_cls = _REVIEW_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in review._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in review._events]}"


@then(parsers.cfparse('"{slug}" has {count:d} review'))
@then(parsers.cfparse('"{slug}" has {count:d} reviews'))
def category_review_count(slug, count):
    assert get_category_by_slug(slug).review_count == count


@then("the action is forbidden")
def action_forbidden(error):
    assert isinstance(error["exc"], ForbiddenError), f"Expected ForbiddenError, got {error['exc']!r}"


@then("the review is rejected")
def review_rejected(error):
    assert isinstance(error["exc"], ValidationError), f"Expected ValidationError, got {error['exc']!r}"


@then("the review is accepted")
def review_accepted(error, context):
    assert error["exc"] is None
    assert current_domain.repository_for(Review).get(context["review_id"]) is not None
