# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Signed-in user models.

Each role has its own record type, discriminated on ``role``. Use
``parse_user`` to turn the login payload (or a stored session value) into
the matching variant.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter

from src.models.common import APIModel


class UserRole(str, Enum):
    """Roles known to the platform."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"
    PARENT = "parent"
    ACCOUNTANT = "accountant"


ROLE_PERMISSIONS: dict[UserRole, frozenset[str]] = {
    UserRole.SUPER_ADMIN: frozenset({"platform_management", "all_schools", "billing", "analytics"}),
    UserRole.ADMIN: frozenset({"all"}),
    UserRole.TEACHER: frozenset({"students", "classes", "grades", "attendance"}),
    UserRole.STUDENT: frozenset({"grades", "schedule", "fees"}),
    UserRole.PARENT: frozenset({"student_info", "fees", "messages"}),
    UserRole.ACCOUNTANT: frozenset({"fees", "reports", "students"}),
}


class BaseUser(APIModel):
    """Fields shared by every role."""

    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    school_id: str | None = None

    @property
    def display_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.email

    def has_permission(self, permission: str) -> bool:
        """Check a dashboard permission for this user's role.

        Args:
            permission: Permission name, e.g. ``"fees"``.

        Returns:
            True if the role grants it (``all`` grants everything).
        """
        granted = ROLE_PERMISSIONS[UserRole(self.role)]  # type: ignore[attr-defined]
        return "all" in granted or permission in granted


class SuperAdminUser(BaseUser):
    role: Literal["super_admin"] = "super_admin"


class AdminUser(BaseUser):
    role: Literal["admin"] = "admin"


class TeacherUser(BaseUser):
    role: Literal["teacher"] = "teacher"
    employee_id: str | None = None
    subjects: list[str] = Field(default_factory=list)


class StudentUser(BaseUser):
    role: Literal["student"] = "student"
    admission_number: str | None = None
    class_id: str | None = None


class ParentUser(BaseUser):
    role: Literal["parent"] = "parent"
    children_ids: list[str] = Field(default_factory=list)


class AccountantUser(BaseUser):
    role: Literal["accountant"] = "accountant"


User = Annotated[
    Union[
        SuperAdminUser,
        AdminUser,
        TeacherUser,
        StudentUser,
        ParentUser,
        AccountantUser,
    ],
    Field(discriminator="role"),
]

_user_adapter: TypeAdapter[User] = TypeAdapter(User)


def parse_user(data: dict[str, Any]) -> User:
    """Validate a user payload into its role variant.

    Args:
        data: User dictionary from the login response or session storage.

    Returns:
        The role-specific user record.

    Raises:
        pydantic.ValidationError: If the role is unknown or fields are invalid.
    """
    return _user_adapter.validate_python(data)
