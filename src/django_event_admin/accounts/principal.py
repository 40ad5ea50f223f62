"""The authenticated identity passed explicitly into services and views."""

from dataclasses import dataclass

from django.contrib.auth.base_user import AbstractBaseUser
from django.contrib.auth.models import AnonymousUser


@dataclass(frozen=True, slots=True)
class Principal:
    """Snapshot of the signed-in account for the duration of one request."""

    id: int
    username: str
    name: str
    admin: bool

    @classmethod
    def from_user(cls, user: AbstractBaseUser | AnonymousUser | None) -> "Principal | None":
        """Build a principal from ``request.user``.

        Returns:
            ``None`` for anonymous or missing users.
        """
        if user is None or not user.is_authenticated:
            return None
        return cls(
            id=user.pk,
            username=user.get_username(),
            name=getattr(user, "name", ""),
            admin=bool(getattr(user, "is_admin", False)),
        )


def is_admin(principal: Principal | None) -> bool:
    """Return ``True`` only for a signed-in principal with the admin flag."""
    return principal is not None and principal.admin
