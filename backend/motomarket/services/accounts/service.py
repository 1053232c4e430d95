"""
AccountService
==============

Sign-up, sign-in and profile operations for marketplace users.

Every mutation runs inside a serializable :class:`SQLAlchemyUnitOfWork`;
reads use the read-only unit. Passwords are hashed and verified outside the
transactions so the slow hash never holds database locks.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import timedelta

from motomarket.models.user import User
from motomarket.repositories.user import UserRepository
from motomarket.services._shared.base import PAGE_SIZE, BaseService
from motomarket.services._shared.errors import (
    ConflictError,
    InvalidCredentialsError,
    MismatchError,
    NotFoundError,
)
from motomarket.services._shared.ports import PasswordHasher, TokenCodec
from motomarket.services.accounts.dto import (
    CredentialsIn,
    UserCreationIn,
    UserOut,
    UserUpdateIn,
)

log = logging.getLogger(__name__)

SIGN_UP_BUDGET = timedelta(seconds=2)
GET_BY_ID_BUDGET = timedelta(seconds=2)
UPDATE_BUDGET = timedelta(seconds=3)

EMAIL_IN_USE = "email already in use"


class AccountService(BaseService):
    """
    Identity lifecycle service (sign-up / sign-in / profile).

    :param hasher: Password hashing adapter.
    :param codec: Bearer token adapter.
    """

    def __init__(self, *, hasher: PasswordHasher, codec: TokenCodec) -> None:
        super().__init__()
        self.hasher = hasher
        self.codec = codec

    # ------------------------------------------------------------------ #
    # Sign-up / sign-in
    # ------------------------------------------------------------------ #

    def sign_up(self, dto: UserCreationIn) -> int:
        """
        Register a user and return the generated id.

        :param dto: Sign-up input.
        :type dto: :class:`UserCreationIn`
        :returns: New user id.
        :rtype: int
        :raises ConflictError: If the email is already registered.
        :raises HashingError: If the password cannot be hashed.
        """
        email = self.clean(dto.email)
        password_hash = self.hasher.hash(dto.password)

        try:
            with self.rw_uow(name="users.sign_up", budget=SIGN_UP_BUDGET) as uow:
                repo: UserRepository = uow.users
                if repo.get_credentials_by_email(email) is not None:
                    raise ConflictError("User", EMAIL_IN_USE)
                user = repo.add(
                    User(
                        first_name=self.clean(dto.first_name),
                        middle_name=self.clean_optional(dto.middle_name),
                        last_name=self.clean_optional(dto.last_name),
                        surname=self.clean_optional(dto.surname),
                        email=email,
                        phone_number=self.clean(dto.phone_number),
                        password=password_hash,
                    )
                )
                user_id = user.id
        except ConflictError as exc:
            log.info("sign-up rejected: email already registered", extra={"code": "conflict"})
            raise ConflictError("User", EMAIL_IN_USE) from exc

        log.info("user registered", extra={"subject_id": user_id})
        return user_id

    def sign_in(self, dto: CredentialsIn) -> str:
        """
        Verify credentials and issue a bearer token.

        An unknown email and a wrong password fail identically, with a dummy
        hash verification keeping the latency comparable.

        :raises InvalidCredentialsError: On unknown email or wrong password.
        :raises VerificationError: If the stored hash cannot be checked.
        """
        email = self.clean(dto.email)
        with self.ro_uow(name="users.sign_in") as uow:
            credentials = uow.users.get_credentials_by_email(email)

        if credentials is None:
            self.hasher.dummy_verify(dto.password)
            log.info("sign-in failed", extra={"code": "invalid_credentials"})
            raise InvalidCredentialsError()

        user_id, password_hash = credentials
        try:
            self.hasher.verify(password_hash, dto.password)
        except MismatchError as exc:
            log.info(
                "sign-in failed",
                extra={"code": "invalid_credentials", "subject_id": user_id},
            )
            raise InvalidCredentialsError() from exc

        return self.codec.issue(user_id, self.now_utc())

    # ------------------------------------------------------------------ #
    # Profile
    # ------------------------------------------------------------------ #

    def get_by_id(self, user_id: int) -> UserOut:
        """
        Return the public profile of ``user_id``.

        :raises NotFoundError: If the user does not exist.
        """
        with self.ro_uow(name="users.get_by_id", budget=GET_BY_ID_BUDGET) as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return self._to_user_out(user)

    def update(self, user_id: int, dto: UserUpdateIn) -> None:
        """
        Apply a coalesce-on-empty profile update.

        Empty (or blank) fields keep their stored value; a non-empty password
        is hashed before it is written.

        :raises NotFoundError: If the user does not exist.
        :raises ConflictError: If the new email is already registered.
        """
        fields = {name: self.clean(value) for name, value in asdict(dto).items()}
        if fields["password"]:
            fields["password"] = self.hasher.hash(dto.password)

        try:
            with self.rw_uow(name="users.update", budget=UPDATE_BUDGET) as uow:
                affected = uow.users.update_profile(user_id, fields)
                if affected != 1:
                    raise NotFoundError("User", user_id)
        except ConflictError as exc:
            log.info(
                "profile update rejected: email already registered",
                extra={"code": "conflict", "subject_id": user_id},
            )
            raise ConflictError("User", EMAIL_IN_USE) from exc

        log.info("profile updated", extra={"subject_id": user_id})

    def list_users(self, page: int | None = 1) -> list[UserOut]:
        """List users in registration order, ``PAGE_SIZE`` per page."""
        with self.ro_uow(name="users.list") as uow:
            users = uow.users.list_page(page=self.ensure_page(page), limit=PAGE_SIZE)
            return [self._to_user_out(u) for u in users]

    # ------------------------------------------------------------------ #
    # Mapping
    # ------------------------------------------------------------------ #

    @staticmethod
    def _to_user_out(user: User) -> UserOut:
        return UserOut(
            id=user.id,
            first_name=user.first_name,
            middle_name=user.middle_name,
            last_name=user.last_name,
            surname=user.surname,
            email=user.email,
            phone_number=user.phone_number,
            picture_url=user.picture_url,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
