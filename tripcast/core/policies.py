"""Admin access policies. The active one lives on app.state.admin_policy and is swappable."""

from collections.abc import Callable

from tripcast.models.user import Role
from tripcast.schemas.auth import CurrentUser

AdminPolicy = Callable[[CurrentUser], bool]


def allow_all(_user: CurrentUser) -> bool:
    """Every signed-in user may use the admin routes."""
    return True


def role_is_admin(user: CurrentUser) -> bool:
    return user.role == Role.ADMIN


ADMIN_POLICIES: dict[str, AdminPolicy] = {
    "allow_all": allow_all,
    "role": role_is_admin,
}


def get_admin_policy(name: str) -> AdminPolicy:
    """Resolve an ADMIN_POLICY setting value to its policy function."""
    try:
        return ADMIN_POLICIES[name]
    except KeyError:
        raise ValueError(f"Unknown admin policy: {name!r}") from None
