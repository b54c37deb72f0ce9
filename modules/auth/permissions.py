"""
Authorization predicates.

Pure functions over an explicit identity and the owner/visibility of a
resource. No store access, no request context.
"""

from typing import Iterable, Optional

from shared.models import AuthenticatedUser, Role

from .exceptions import InsufficientPermissionsError


def has_role(identity: AuthenticatedUser, roles: Iterable[Role]) -> bool:
    """Allow iff the identity's role is one of ``roles``."""
    return identity.role in set(roles)


def is_owner_or_admin(identity: Optional[AuthenticatedUser], owner_id: str) -> bool:
    """Allow iff the identity owns the resource or is an admin."""
    if identity is None:
        return False
    return identity.id == owner_id or identity.role == Role.ADMIN


def can_view(
    identity: Optional[AuthenticatedUser],
    owner_id: str,
    is_public: bool,
) -> bool:
    """
    Read-path check.

    Public resources are visible to everyone, including anonymous callers
    (identity is None). Private ones only to their owner or an admin.
    """
    return is_public or is_owner_or_admin(identity, owner_id)


def require_role(identity: AuthenticatedUser, *roles: Role) -> None:
    """Raise InsufficientPermissionsError unless has_role() passes."""
    if not has_role(identity, roles):
        raise InsufficientPermissionsError(
            required_roles=[r.value for r in roles],
            user_role=identity.role.value,
        )
