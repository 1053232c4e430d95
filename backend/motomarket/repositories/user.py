"""User repository: lookups, credential fetch and the coalescing profile update."""

from __future__ import annotations

from collections.abc import Mapping

from sqlalchemy import func, select, update

from motomarket.models.user import User
from motomarket.repositories.base import BaseRepository, paginate_select


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never hashes or verifies passwords; the account service does that and
    hands over ready-to-store values.
    """

    model = User

    #: Columns that ``update_profile`` may touch.
    _updatable_fields = frozenset(
        {
            "first_name",
            "middle_name",
            "last_name",
            "surname",
            "email",
            "phone_number",
            "picture_url",
            "password",
        }
    )

    def get_credentials_by_email(self, email: str) -> tuple[int, str] | None:
        """Return ``(id, password_hash)`` for ``email`` without loading the row."""
        stmt = select(User.id, User.password).where(User.email == email)
        row = self.session.execute(stmt).first()
        if row is None:
            return None
        return int(row.id), str(row.password)

    def update_profile(self, user_id: int, fields: Mapping[str, str | None]) -> int:
        """Overwrite only the non-empty values in ``fields`` with a single UPDATE.

        Every column is written as ``coalesce(nullif(:value, ''), column)``,
        so empty strings and ``None`` keep the stored value.

        :param user_id: Identifier of the user to update.
        :type user_id: int
        :param fields: Column name to new value mapping.
        :type fields: Mapping[str, str | None]
        :returns: Number of rows matched (0 when the user does not exist).
        :rtype: int
        :raises ValueError: If a key is not an updatable column.
        """
        unknown = sorted(set(fields) - self._updatable_fields)
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")

        values = {
            name: func.coalesce(func.nullif(value, ""), getattr(User, name))
            for name, value in fields.items()
        }
        values["updated_at"] = func.now()
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return int(self.session.execute(stmt).rowcount or 0)

    def list_page(self, *, page: int, limit: int) -> list[User]:
        """List users in registration order (oldest first)."""
        stmt = select(User).order_by(User.created_at.asc(), User.id.asc())
        return paginate_select(self.session, stmt, page=page, limit=limit)
