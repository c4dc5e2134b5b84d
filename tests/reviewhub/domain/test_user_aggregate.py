from reviewhub.account.events import UserProfileSynced, UserRegistered
from reviewhub.account.user import User


class TestUserRegistration:
    def test_register(self):
        user = User.register(user_id="idp|42", email="ada@example.com", first_name="Ada", last_name="Lovelace")
        assert user.user_id == "idp|42"
        assert user.created_at is not None
        assert isinstance(user._events[0], UserRegistered)

    def test_sync_profile_overwrites_fields(self):
        user = User.register(user_id="idp|42", email="ada@example.com", first_name="Ada")
        user._events.clear()
        user.sync_profile(email="ada@new.example.com", first_name="Augusta")
        assert user.email == "ada@new.example.com"
        assert user.first_name == "Augusta"
        assert user.last_name is None
        assert isinstance(user._events[0], UserProfileSynced)
