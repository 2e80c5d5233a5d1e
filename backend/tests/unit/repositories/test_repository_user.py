"""Unit tests for UserRepository."""

import pytest

from tests.factories.user import UserFactory
from tubehub.repositories.user import UserRepository


class TestUserRepository:
    """Ensure ``UserRepository`` performs core persistence operations."""

    @pytest.fixture()
    def repo(self, session):
        return UserRepository(session=session)

    def test_lookup_by_username_is_case_insensitive(self, repo, session):
        u = UserFactory(email="alice@example.com", username="alice")
        session.commit()

        assert repo.get_by_username(" Alice ").id == u.id
        assert repo.get_by_username("nobody") is None

    def test_get_by_login_matches_either_identifier(self, repo, session):
        u = UserFactory(email="carol@example.com", username="carol")
        session.commit()

        assert repo.get_by_login(email="carol@example.com").id == u.id
        assert repo.get_by_login(username="CAROL").id == u.id
        assert repo.get_by_login(email="wrong@example.com", username="carol").id == u.id
        assert repo.get_by_login(email="  ", username=None) is None

    def test_exists_by_username_or_email(self, repo, session):
        UserFactory(email="dave@example.com", username="dave")
        session.commit()

        assert repo.exists_by_username_or_email("dave", "other@example.com")
        assert repo.exists_by_username_or_email("other", "DAVE@example.com")
        assert not repo.exists_by_username_or_email("other", "other@example.com")

    def test_exists_by_email_can_exclude_owner(self, repo, session):
        u = UserFactory(email="bob@example.com")
        session.commit()

        assert repo.exists_by_email("bob@example.com")
        assert not repo.exists_by_email("bob@example.com", exclude_id=u.id)
        assert not repo.exists_by_email("nonexistent@example.com")

    def test_update_password(self, repo, session):
        """Only the hash changes and the new password verifies."""
        u = UserFactory(email="c@example.com")
        session.commit()

        old_hash = u.password_hash
        repo.update_password(u.id, "newpass123")
        session.commit()

        refreshed = repo.get(u.id)
        assert refreshed.password_hash != old_hash
        assert refreshed.verify_password("newpass123")

    def test_update_password_unknown_user(self, repo):
        with pytest.raises(ValueError):
            repo.update_password(999_999, "whatever")

    def test_update_whitelists_profile_fields(self, repo, session):
        u = UserFactory()
        session.commit()

        repo.update(u, full_name="New Name", email="NEW@example.com")
        assert u.full_name == "new name"
        assert u.email == "new@example.com"

        with pytest.raises(ValueError):
            repo.update(u, password_hash="x")
        with pytest.raises(ValueError):
            repo.update(u, refresh_token="x")

    def test_set_media_references(self, repo, session):
        u = UserFactory()
        session.commit()

        repo.set_avatar(u, "https://media.test/avatars/new.png", "new")
        repo.set_cover_image(u, "https://media.test/cover-images/c.png", "c")
        session.commit()

        assert (u.avatar_url, u.avatar_public_id) == ("https://media.test/avatars/new.png", "new")
        assert (u.cover_image_url, u.cover_image_public_id) == (
            "https://media.test/cover-images/c.png",
            "c",
        )


class TestRefreshTokenColumn:
    @pytest.fixture()
    def repo(self, session):
        return UserRepository(session=session)

    def test_set_and_get(self, repo, session):
        u = UserFactory()
        session.commit()

        assert repo.set_refresh_token(u.id, "rt-1") is True
        assert repo.get_refresh_token(u.id) == "rt-1"
        assert repo.set_refresh_token(999_999, "rt-x") is False

    def test_swap_only_when_expected_matches(self, repo, session):
        u = UserFactory()
        session.commit()
        repo.set_refresh_token(u.id, "rt-1")

        assert repo.swap_refresh_token(u.id, "rt-1", "rt-2") is True
        assert repo.swap_refresh_token(u.id, "rt-1", "rt-3") is False
        assert repo.get_refresh_token(u.id) == "rt-2"

    def test_swap_never_matches_cleared_token(self, repo, session):
        u = UserFactory()
        session.commit()
        repo.set_refresh_token(u.id, None)

        assert repo.swap_refresh_token(u.id, "", "rt-2") is False
        assert repo.get_refresh_token(u.id) is None

    def test_loaded_instance_sees_new_value(self, repo, session):
        u = UserFactory()
        session.commit()
        assert u.refresh_token is None

        repo.set_refresh_token(u.id, "rt-9")
        assert u.refresh_token == "rt-9"
