"""Domain events for the User aggregate."""

from protean.fields import DateTime, String

from reviewhub.domain import reviewhub


@reviewhub.event(part_of="User")
class UserRegistered:
    """A user signed in through the identity provider for the first time."""

    __version__ = 1

    user_id = String(required=True, max_length=255)
    email = String(max_length=254)
    registered_at = DateTime(required=True)


@reviewhub.event(part_of="User")
class UserProfileSynced:
    """The identity provider pushed fresh profile claims for a known user."""

    __version__ = 1

    user_id = String(required=True, max_length=255)
    email = String(max_length=254)
    synced_at = DateTime(required=True)
