"""Request identity — supplied by the upstream identity provider.

The gateway authenticates the caller and forwards the user id and role in
``X-User-Id`` / ``X-User-Role`` headers.
"""

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException

from storefront.customer.customer import Role


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    role: str = Role.USER.value

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def current_user(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> CurrentUser:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Please log in to access this resource")
    return CurrentUser(user_id=x_user_id, role=(x_user_role or Role.USER.value).lower())


def require_admin(user: CurrentUser = Depends(current_user)) -> CurrentUser:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail=f"Role: {user.role} is not allowed to access this resource")
    return user
