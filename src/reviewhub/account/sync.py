"""UpsertUser: create or refresh a user from identity-provider claims."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from reviewhub.account.user import User
from reviewhub.domain import reviewhub
from reviewhub.utils.logging import get_logger

logger = get_logger(__name__)


@reviewhub.command(part_of="User")
class UpsertUser:
    """Insert the user, or overwrite the profile of an existing one."""

    user_id: String(required=True, max_length=255)
    email: String(max_length=254)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    profile_image_url: String(max_length=500)


@reviewhub.command_handler(part_of=User)
class UpsertUserHandler:
    @handle(UpsertUser)
    def upsert_user(self, command):
        repo = current_domain.repository_for(User)

        if command.email:
            holders = repo._dao.query.filter(email=command.email).all().items
            if any(str(holder.user_id) != str(command.user_id) for holder in holders):
                raise ValidationError({"email": ["Email is already used by another account"]})

        profile = {
            "email": command.email,
            "first_name": command.first_name,
            "last_name": command.last_name,
            "profile_image_url": command.profile_image_url,
        }

        try:
            user = repo.get(command.user_id)
        except ObjectNotFoundError:
            user = User.register(user_id=command.user_id, **profile)
            logger.info("User registered", user_id=command.user_id)
        else:
            user.sync_profile(**profile)

        repo.add(user)
        return str(user.user_id)
