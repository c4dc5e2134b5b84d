"""BDD tests for review content rules."""

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, when


scenarios("features/review_writing.feature")


@when(parsers.cfparse("a review is written with {length:d} characters of content"))
def written_with_length(context, error, write_review, length):
    try:
        context["review_id"] = write_review("alice", content="x" * length)
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse("a review is written with a rating of {rating:d}"))
def written_with_rating(context, error, write_review, rating):
    try:
        context["review_id"] = write_review("alice", rating=rating)
    except ValidationError as exc:
        error["exc"] = exc
