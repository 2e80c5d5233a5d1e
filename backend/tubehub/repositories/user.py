"""User repository: lookups, profile updates and refresh-token persistence."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select, update
from sqlalchemy.orm.util import identity_key

from tubehub.models.user import User
from tubehub.repositories.base import BaseRepository


def _norm(value: str) -> str:
    return value.strip().lower()


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Refresh-token writes use Core ``UPDATE`` statements so they bypass the
    model validators and never touch unrelated columns.
    """

    model = User

    # ---------------------------- Whitelists ----------------------------

    def _updatable_fields(self):
        """Profile fields a user may change (not password, media or tokens)."""
        return {"email", "full_name"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username(self, username: str) -> User | None:
        """Fetch a user by login-name (trimmed, case-insensitive)."""
        stmt = select(User).where(User.username == _norm(username))
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def get_by_login(self, *, email: str | None = None, username: str | None = None) -> User | None:
        """Fetch the user matching the email OR the login-name.

        Blank identifiers are ignored; returns ``None`` when both are blank.
        """
        clauses = []
        if email and email.strip():
            clauses.append(User.email == _norm(email))
        if username and username.strip():
            clauses.append(User.username == _norm(username))
        if not clauses:
            return None
        stmt = select(User).where(or_(*clauses)).order_by(User.id)
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def exists_by_username_or_email(self, username: str, email: str) -> bool:
        """Return ``True`` when the login-name or the email is already taken."""
        stmt = select(User.id).where(
            or_(User.username == _norm(username), User.email == _norm(email))
        )
        return self.session.execute(stmt.limit(1)).first() is not None

    def exists_by_email(self, email: str, *, exclude_id: int | None = None) -> bool:
        """Return ``True`` when another user already uses ``email``."""
        stmt = select(User.id).where(User.email == _norm(email))
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    # ---------------------------- Password ops ----------------------------

    def update_password(self, user_id: int, new_password: str) -> None:
        """Replace a user's password hash and flush the session.

        Only ``password_hash`` changes; no other field validator runs.

        :raises ValueError: If the user does not exist or the password is blank.
        """
        user = self.get(user_id)
        if not user:
            raise ValueError(f"User {user_id} not found.")
        user.password = new_password  # invokes setter → hash
        self.flush()

    # ---------------------------- Media references ----------------------------

    def set_avatar(self, user: User, url: str, public_id: str | None) -> User:
        user.avatar_url = url
        user.avatar_public_id = public_id
        self.flush()
        return user

    def set_cover_image(self, user: User, url: str, public_id: str | None) -> User:
        user.cover_image_url = url or ""
        user.cover_image_public_id = public_id
        self.flush()
        return user

    # ---------------------------- Refresh token ----------------------------

    def _updated_one(self, user_id: int, stmt) -> bool:
        changed = self.session.execute(stmt).rowcount == 1
        if changed:
            # Keep an already-loaded instance from serving the stale value
            cached = self.session.identity_map.get(identity_key(User, user_id))
            if cached is not None:
                self.session.expire(cached, ["refresh_token"])
        return changed

    def get_refresh_token(self, user_id: int) -> str | None:
        stmt = select(User.refresh_token).where(User.id == user_id)
        return cast(str | None, self.session.execute(stmt).scalar_one_or_none())

    def user_exists(self, user_id: int) -> bool:
        stmt = select(User.id).where(User.id == user_id)
        return self.session.execute(stmt).first() is not None

    def set_refresh_token(self, user_id: int, token: str | None) -> bool:
        """Overwrite the stored refresh token unconditionally.

        :returns: ``True`` when a row was updated.
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=token)
            .execution_options(synchronize_session=False)
        )
        return self._updated_one(user_id, stmt)

    def swap_refresh_token(self, user_id: int, expected: str, new: str) -> bool:
        """Replace ``expected`` by ``new`` in a single conditional ``UPDATE``.

        :returns: ``True`` only when the stored value equalled ``expected``.
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.refresh_token == expected)
            .values(refresh_token=new)
            .execution_options(synchronize_session=False)
        )
        return self._updated_one(user_id, stmt)
