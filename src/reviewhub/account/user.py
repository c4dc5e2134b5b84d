"""User aggregate: a reader/author as known to the identity provider."""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from reviewhub.domain import reviewhub


@reviewhub.aggregate
class User:
    """A person who browses, writes and votes on reviews.

    Identity is owned by the external identity provider: ``user_id`` is the
    provider's subject id and never changes. Profile fields are overwritten
    wholesale on every sync.
    """

    user_id: String(identifier=True, required=True, max_length=255)
    email: String(max_length=254)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    profile_image_url: String(max_length=500)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def register(cls, user_id, email=None, first_name=None, last_name=None, profile_image_url=None):
        from reviewhub.account.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            user_id=user_id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            profile_image_url=profile_image_url,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user_id,
                email=email,
                registered_at=now,
            )
        )
        return user

    def sync_profile(self, email=None, first_name=None, last_name=None, profile_image_url=None):
        from reviewhub.account.events import UserProfileSynced

        now = datetime.now(UTC)
        self.email = email
        self.first_name = first_name
        self.last_name = last_name
        self.profile_image_url = profile_image_url
        self.updated_at = now

        self.raise_(
            UserProfileSynced(
                user_id=self.user_id,
                email=email,
                synced_at=now,
            )
        )

    @property
    def display_name(self):
        parts = [p for p in (self.first_name, self.last_name) if p]
        if parts:
            return " ".join(parts)
        return self.email or self.user_id
