"""
AccountService
==============

Application service for the account lifecycle:
- Registration (with avatar / cover upload)
- Credential login and logout (delegating tokens to :class:`TokenService`)
- Password change and profile update
- Avatar / cover image replacement with configurable cleanup
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from tubehub.models.user import User
from tubehub.repositories.user import UserRepository
from tubehub.services._shared.base import BaseService
from tubehub.services._shared.errors import (
    ConflictError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
    violates,
)
from tubehub.services._shared.ports import (
    MediaAsset,
    MediaStore,
    MediaStoreError,
    UploadedFile,
    public_id_from_url,
)
from tubehub.services.accounts.dto import (
    AccountOut,
    LoginIn,
    LoginOut,
    PasswordChangeIn,
    ProfileUpdateIn,
    RegisterIn,
)
from tubehub.services.tokens.service import TokenService

log = logging.getLogger(__name__)

ACCOUNT_EXISTS = "User with email or username already exists"
INVALID_ACCESS = "Invalid access token"


@dataclass(frozen=True, slots=True)
class _MediaSlot:
    folder: str
    url_attr: str
    id_attr: str
    missing_message: str
    failed_message: str


AVATAR = _MediaSlot(
    folder="avatars",
    url_attr="avatar_url",
    id_attr="avatar_public_id",
    missing_message="Avatar file is missing",
    failed_message="Error while uploading avatar",
)
COVER_IMAGE = _MediaSlot(
    folder="cover-images",
    url_attr="cover_image_url",
    id_attr="cover_image_public_id",
    missing_message="Cover image file is missing",
    failed_message="Error while uploading cover image",
)


def to_account_out(user: User) -> AccountOut:
    """Project a :class:`User` onto :class:`AccountOut` (no secrets)."""
    return AccountOut(
        id=user.id,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        avatar_url=user.avatar_url,
        cover_image_url=user.cover_image_url or "",
        created_at=user.created_at,
        updated_at=user.updated_at,
        watch_history=tuple(entry.video_id for entry in user.watch_history),
    )


class AccountService(BaseService):
    """
    Account use-cases over the ``User`` aggregate.

    Parameters
    ----------
    token_service:
        Issues and invalidates session tokens.
    media_store:
        Remote host for avatar and cover image assets.
    cleanup_on_replace:
        When ``True`` the previous remote asset of either slot is deleted
        after a successful replacement; when ``False`` neither slot is.
    """

    def __init__(
        self,
        *,
        token_service: TokenService,
        media_store: MediaStore,
        cleanup_on_replace: bool = True,
    ) -> None:
        super().__init__()
        self.token_service = token_service
        self.media = media_store
        self.cleanup_on_replace = cleanup_on_replace

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def register(
        self,
        dto: RegisterIn,
        avatar: UploadedFile | None,
        cover_image: UploadedFile | None = None,
    ) -> AccountOut:
        """
        Create an account once the avatar is safely stored.

        :raises ServiceError: Blank fields, missing avatar or failed avatar upload.
        :raises ConflictError: Login-name or email already taken.
        """
        self.require_fields(dto.email, dto.full_name, dto.username, dto.password)

        with self.ro_uow() as uow:
            taken = uow.users.exists_by_username_or_email(dto.username, dto.email)
        if taken:
            raise ConflictError("User", ACCOUNT_EXISTS)

        if avatar is None:
            raise ServiceError("Avatar file is required")
        try:
            avatar_asset = self.media.upload(avatar, folder=AVATAR.folder)
        except MediaStoreError as exc:
            raise ServiceError("Avatar file is required") from exc

        cover_asset: MediaAsset | None = None
        if cover_image is not None:
            try:
                cover_asset = self.media.upload(cover_image, folder=COVER_IMAGE.folder)
            except MediaStoreError:
                # Optional slot: the account is created without a cover image
                log.warning("Cover image upload failed", extra={"event": "media.upload_failed"})

        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                try:
                    user = repo.model(
                        email=dto.email,
                        password=dto.password,  # model hashes via setter
                        username=dto.username,
                        full_name=dto.full_name,
                        avatar_url=avatar_asset.url,
                        avatar_public_id=avatar_asset.public_id,
                        cover_image_url=cover_asset.url if cover_asset else "",
                        cover_image_public_id=cover_asset.public_id if cover_asset else None,
                    )
                    repo.add(user)
                except ValueError as exc:
                    raise ServiceError(str(exc)) from exc
                except IntegrityError as exc:
                    if violates(exc, "uq_users_email") or violates(exc, "uq_users_username"):
                        raise ConflictError("User", ACCOUNT_EXISTS) from exc
                    raise
                out = to_account_out(user)
        except Exception:
            # No account row: the uploaded assets are orphans
            self._discard(avatar_asset.public_id)
            if cover_asset is not None:
                self._discard(cover_asset.public_id)
            raise

        log.info("Registered account", extra={"event": "account.registered", "account_id": out.id})
        return out

    # --------------------------------------------------------------------- #
    # Session
    # --------------------------------------------------------------------- #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Verify credentials and issue a token pair.

        :raises ServiceError: Neither email nor login-name given.
        :raises NotFoundError: No matching account.
        :raises UnauthorizedError: Wrong password (nothing is issued).
        """
        if not (dto.email or "").strip() and not (dto.username or "").strip():
            raise ServiceError("Username or email is required")

        with self.ro_uow() as uow:
            user = uow.users.get_by_login(email=dto.email, username=dto.username)
            if user is None:
                raise NotFoundError("User", dto.email or dto.username)
            if not user.verify_password(dto.password):
                log.warning(
                    "Login rejected: bad credentials",
                    extra={"event": "account.login_failed", "account_id": user.id},
                )
                raise UnauthorizedError("Invalid user credentials")
            account_id = user.id

        tokens = self.token_service.issue(account_id)
        return LoginOut(account=self.get_account(account_id), tokens=tokens)

    def logout(self, account_id: int) -> None:
        self.token_service.invalidate(account_id)

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def get_account(self, account_id: int) -> AccountOut:
        """
        Return the authenticated account.

        :raises UnauthorizedError: When the token names a vanished account.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(account_id)
            if user is None:
                raise UnauthorizedError(INVALID_ACCESS)
            return to_account_out(user)

    # --------------------------------------------------------------------- #
    # Password & profile
    # --------------------------------------------------------------------- #

    def change_password(self, dto: PasswordChangeIn) -> None:
        """
        Replace the password after verifying the old one.

        :raises ServiceError: Wrong old password or blank new password.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(dto.account_id)
            if user is None:
                raise UnauthorizedError(INVALID_ACCESS)
            if not user.verify_password(dto.old_password):
                raise ServiceError("Invalid old password")
            if not dto.new_password or not dto.new_password.strip():
                raise ServiceError("New password is required")
            repo.update_password(user.id, dto.new_password)

        log.info(
            "Password changed",
            extra={"event": "account.password_changed", "account_id": dto.account_id},
        )

    def update_profile(self, account_id: int, dto: ProfileUpdateIn) -> AccountOut:
        """
        Replace display name and email.

        :raises ServiceError: Either field blank or invalid.
        :raises ConflictError: Email used by another account.
        """
        self.require_fields(dto.full_name, dto.email)

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(account_id)
            if user is None:
                raise UnauthorizedError(INVALID_ACCESS)
            if repo.exists_by_email(dto.email, exclude_id=user.id):
                raise ConflictError("User", "Email is already in use")
            try:
                repo.update(user, full_name=dto.full_name, email=dto.email)
            except ValueError as exc:
                raise ServiceError(str(exc)) from exc
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise ConflictError("User", "Email is already in use") from exc
                raise
            return to_account_out(user)

    # --------------------------------------------------------------------- #
    # Media
    # --------------------------------------------------------------------- #

    def replace_avatar(self, account_id: int, file: UploadedFile | None) -> AccountOut:
        return self._replace_media(account_id, file, AVATAR)

    def replace_cover_image(self, account_id: int, file: UploadedFile | None) -> AccountOut:
        return self._replace_media(account_id, file, COVER_IMAGE)

    def _replace_media(
        self, account_id: int, file: UploadedFile | None, slot: _MediaSlot
    ) -> AccountOut:
        """
        Upload first, then swap the stored reference, then clean up.

        The stored reference only changes after a successful upload. The
        previous asset is identified by its stored public id or, for older
        rows, by the last URL segment without extension.
        """
        if file is None:
            raise ServiceError(slot.missing_message)
        try:
            asset = self.media.upload(file, folder=slot.folder)
        except MediaStoreError as exc:
            raise ServiceError(slot.failed_message) from exc

        try:
            with self.rw_uow() as uow:
                user = uow.users.get(account_id)
                if user is None:
                    raise UnauthorizedError(INVALID_ACCESS)
                previous = getattr(user, slot.id_attr) or public_id_from_url(
                    getattr(user, slot.url_attr)
                )
                if slot is AVATAR:
                    uow.users.set_avatar(user, asset.url, asset.public_id)
                else:
                    uow.users.set_cover_image(user, asset.url, asset.public_id)
                out = to_account_out(user)
        except Exception:
            self._discard(asset.public_id)
            raise

        if self.cleanup_on_replace and previous and previous != asset.public_id:
            self._discard(previous)
        return out

    def _discard(self, public_id: str) -> None:
        """Delete a remote asset; failures are logged, never raised."""
        try:
            self.media.delete(public_id)
        except MediaStoreError:
            log.warning(
                "Media cleanup failed for %s",
                public_id,
                extra={"event": "media.cleanup_failed"},
                exc_info=True,
            )
