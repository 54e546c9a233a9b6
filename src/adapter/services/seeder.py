"""
RBAC Seeder

Loads a permission catalog, roles and initial users into an empty or
partially seeded database. Idempotent: existing rows are matched by natural
key (permission key, role name, email) and left untouched.

Input shape (YAML or JSON):

    permissions:
      - {key: documents.view, display_name: View Documents, module: documents}
    roles:
      - {name: viewer, display_name: Viewer, permissions: [documents.view]}
    users:
      - {email: a@example.com, password: ..., role: viewer}
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from src.app.services.passwords import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Permission, Role, User, UserStatus
from src.domain.permissions import PermissionGrant

logger = logging.getLogger(__name__)


@dataclass
class SeedSummary:
    permissions: int = 0
    roles: int = 0
    assignments: int = 0
    users: int = 0


async def seed(
    uow: UnitOfWork, data: Dict[str, Any], bcrypt_rounds: Optional[int] = None
) -> SeedSummary:
    summary = SeedSummary()

    async with uow:
        permissions: Dict[str, Permission] = {}
        for item in data.get("permissions", []):
            # Reject malformed keys before anything is written
            key = PermissionGrant.parse(item["key"]).key
            permission = await uow.permissions.get_by_name(key)
            if permission is None:
                permission = await uow.permissions.create(
                    Permission(
                        name=key,
                        display_name=item.get("display_name", key),
                        description=item.get("description"),
                        module=item.get("module") or key.split(".")[0],
                        is_active=item.get("is_active", True),
                    )
                )
                summary.permissions += 1
            permissions[key] = permission

        roles: Dict[str, Role] = {}
        for item in data.get("roles", []):
            role = await uow.roles.get_by_name(item["name"])
            if role is None:
                role = await uow.roles.create(
                    Role(
                        name=item["name"],
                        display_name=item.get("display_name", item["name"]),
                        description=item.get("description"),
                        is_active=item.get("is_active", True),
                    )
                )
                summary.roles += 1
            roles[role.name] = role

            for key in item.get("permissions", []):
                permission = permissions.get(key) or await uow.permissions.get_by_name(key)
                if permission is None:
                    raise ValueError(f"Role {role.name!r} references unknown permission {key!r}")
                if not await uow.roles.has_permission(role.id, permission.id):
                    await uow.roles.add_permission(role.id, permission.id)
                    summary.assignments += 1

        for item in data.get("users", []):
            email = item["email"].lower()
            if await uow.users.get_by_email(email, include_deleted=True) is not None:
                continue

            role = None
            if item.get("role"):
                role = roles.get(item["role"]) or await uow.roles.get_by_name(item["role"])
                if role is None:
                    raise ValueError(f"User {email!r} references unknown role {item['role']!r}")

            await uow.users.create(
                User(
                    email=email,
                    password_hash=hash_password(item["password"], bcrypt_rounds),
                    first_name=item.get("first_name", ""),
                    last_name=item.get("last_name", ""),
                    status=UserStatus(item.get("status", UserStatus.active.value)),
                    role_id=role.id if role else None,
                )
            )
            summary.users += 1

        await uow.commit()

    logger.info(
        "Seeded %d permissions, %d roles, %d assignments, %d users",
        summary.permissions,
        summary.roles,
        summary.assignments,
        summary.users,
    )
    return summary
