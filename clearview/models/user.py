from typing import Optional

from pydantic import BaseModel

from clearview.core.enums import ROLE_VIEWS, Role, View


class UserProfile(BaseModel):
    """Profile document in the ``users`` collection, keyed by auth user id."""

    id: str
    role: Optional[str] = None


class AccessContext(BaseModel):
    """Resolved role for one request, passed explicitly to handlers."""

    role: Role
    user_id: Optional[str] = None

    @property
    def views(self) -> list[View]:
        allowed = ROLE_VIEWS[self.role]
        return [v for v in View if v in allowed]

    def can_view(self, view: View) -> bool:
        return view in ROLE_VIEWS[self.role]
