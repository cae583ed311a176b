"""Seed a development company: owner, a leader role with one sub-role, and an invitee.

Usage:
    python -m scripts.seed_dev_data <owner_email> [password]
If password is omitted, a random one is printed. Requires DATABASE_URL and
`alembic upgrade head`.
"""

import asyncio
import secrets
import sys

from roster.api.v1.dependencies.auth import AuthSecurity
from roster.application.dtos.user import SignupData
from roster.application.services import RoleService, UserService
from roster.core.config import get_settings
from roster.infrastructure.persistence import database
from roster.infrastructure.persistence.repositories import (
    CompanyRepository,
    RoleRepository,
    SubRoleRepository,
    UserRepository,
)
from roster.infrastructure.services import LogOnlyNotificationService


async def main() -> None:
    """Create the seed data in one transaction."""
    if len(sys.argv) < 2:
        print(
            "Usage: python -m scripts.seed_dev_data <owner_email> [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    email = sys.argv[1]
    password = sys.argv[2] if len(sys.argv) > 2 else secrets.token_urlsafe(12)

    settings = get_settings()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("DATABASE_URL not configured", file=sys.stderr)
        sys.exit(1)

    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            user_repo = UserRepository(session)
            users = UserService(
                user_repo=user_repo,
                auth_security=AuthSecurity(),
                company_repo=CompanyRepository(session),
                notification_service=LogOnlyNotificationService(),
                invite_ttl_hours=settings.invite_token_ttl_hours,
            )
            roles = RoleService(RoleRepository(session), SubRoleRepository(session), user_repo)

            owner = (
                await users.signup(
                    SignupData(email=email, password=password, company_name="Dev Company")
                )
            ).user
            manager = await roles.create_role(owner, "Manager", True)
            reviewer = await roles.create_sub_role(owner, manager.id, "Reviewer")
            await roles.assign_role(owner, owner.id, manager.id)
            await roles.assign_sub_role(owner, owner.id, reviewer.id)
            outcomes = await users.invite_users(
                owner, [f"invitee+{owner.id}@example.com"], notify=False
            )
    outcomes = await users.deliver_invites(owner, outcomes)

    print(f"Owner: {owner.id} ({email}) company {owner.own_company_id}")
    print(f"Password: {password}")
    print(f"Roles: {manager.id} (Manager) > {reviewer.id} (Reviewer)")
    for outcome in outcomes:
        print(f"Invite for {outcome.email}: token {outcome.invite_token}")
    await database.engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
