"""User directory: lookups, signup, authentication, settings and invitations."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import timedelta
from typing import TYPE_CHECKING

from roster.application.dtos.user import (
    AuthResult,
    InviteOutcome,
    SettingsData,
    SignupData,
)
from roster.application.services.authorization_service import AuthorizationService
from roster.domain.enums import Permission
from roster.domain.exceptions import (
    IncorrectCredentialException,
    InviteNotFoundException,
    UserAlreadyExistsException,
    UserNotFoundException,
)
from roster.shared.telemetry.logging import get_logger
from roster.shared.utils.datetime import utc_now
from roster.shared.utils.generators import generate_invite_token, hash_token

if TYPE_CHECKING:
    from roster.application.interfaces.repositories import (
        ICompanyRepository,
        IUserRepository,
    )
    from roster.application.interfaces.services import IAuthSecurity, INotificationService
    from roster.infrastructure.persistence.models.user import User

logger = get_logger(__name__)

# Tokens shorter than this are never looked up.
MIN_INVITE_TOKEN_LENGTH = 2


class UserService:
    """User lookups and account lifecycle (signup, invite, accept, authenticate)."""

    def __init__(
        self,
        user_repo: IUserRepository,
        auth_security: IAuthSecurity,
        company_repo: ICompanyRepository | None = None,
        notification_service: INotificationService | None = None,
        authorization: AuthorizationService | None = None,
        *,
        invite_ttl_hours: int = 72,
        invite_subject: str = "You have been invited",
    ) -> None:
        self._user_repo = user_repo
        self._auth_security = auth_security
        self._company_repo = company_repo
        self._notifier = notification_service
        self._authz = authorization or AuthorizationService()
        self._invite_ttl = timedelta(hours=invite_ttl_hours)
        self._invite_subject = invite_subject

    def _issue_token(self, user: User) -> str:
        return self._auth_security.create_access_token(
            {"sub": user.id, "company_id": user.company_id}
        )

    async def find_user_by_id(
        self, user_id: str, active_only: bool = True
    ) -> User | None:
        return await self._user_repo.get_by_id_active(user_id, active_only=active_only)

    async def find_user_by_company_and_id(
        self, company_id: str, user_id: str
    ) -> User | None:
        return await self._user_repo.get_by_company_and_id(company_id, user_id)

    async def find_user_by_email(self, email: str) -> User | None:
        return await self._user_repo.get_by_email(email)

    async def find_user_by_invite(
        self, token: str, *, for_update: bool = False
    ) -> User | None:
        """Return the pending invitee for token, or None (also for expired tokens)."""
        if not token or len(token) < MIN_INVITE_TOKEN_LENGTH:
            return None
        return await self._user_repo.get_by_invite_token_hash(
            hash_token(token), for_update=for_update
        )

    async def signup(self, data: SignupData) -> AuthResult:
        """Create a company and its creator, then issue a token.

        Raises:
            UserAlreadyExistsException: If the email is already registered.
        """
        if self._company_repo is None:
            raise RuntimeError("signup requires a company repository")
        if await self._user_repo.get_by_email(data.email) is not None:
            raise UserAlreadyExistsException(data.email)
        company = self._company_repo.build_company(
            data.company_name, is_multi_company=data.is_multi_company
        )
        user = await self._user_repo.create_creator(
            company,
            data.email,
            data.password,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
        )
        logger.info("Signup: user_id=%s company_id=%s", user.id, company.id)
        return AuthResult(user=user, token=self._issue_token(user))

    async def authenticate(self, email: str, password: str) -> AuthResult:
        """Verify credentials and issue a token.

        Raises:
            UserNotFoundException: No active user with this email.
            IncorrectCredentialException: Password does not match.
        """
        user = await self._user_repo.get_by_email(email)
        if user is None or not user.is_active:
            await self._user_repo.verify_credential(None, password)
            raise UserNotFoundException()
        if not await self._user_repo.verify_credential(user, password):
            logger.info("Authentication failed: user_id=%s", user.id)
            raise IncorrectCredentialException()
        return AuthResult(user=user, token=self._issue_token(user))

    async def update_settings(self, user: User, data: SettingsData) -> User:
        for field, value in data.provided().items():
            setattr(user, field, value)
        await self._user_repo.persist(user)
        return user

    async def invite_users(
        self, actor: User, emails: list[str], *, notify: bool = True
    ) -> list[InviteOutcome]:
        """Create one inactive user per distinct email and notify each of them.

        A recipient whose user cannot be created (email taken) or whose
        notification fails is reported in its outcome; the other invitations
        are unaffected. With notify=False nothing is sent and every outcome is
        undelivered; pass the outcomes to deliver_invites once the users are
        committed.
        """
        company_id = self._authz.require(actor, Permission.INVITE_USERS)
        expires_at = utc_now() + self._invite_ttl
        outcomes: list[InviteOutcome] = []
        for email in dict.fromkeys(e.strip().lower() for e in emails if e.strip()):
            token = generate_invite_token()
            try:
                user = await self._user_repo.create_invited_user(
                    company_id, email, hash_token(token), expires_at
                )
            except UserAlreadyExistsException as exc:
                logger.info(
                    "Invite skipped: company_id=%s reason=%s", company_id, exc.error_code
                )
                outcomes.append(
                    InviteOutcome(
                        email=email,
                        user_id=None,
                        invite_token=None,
                        delivered=False,
                        error=exc.error_code,
                    )
                )
                continue
            outcomes.append(
                InviteOutcome(
                    email=email, user_id=user.id, invite_token=token, delivered=False
                )
            )
        logger.info(
            "Invited users: company_id=%s created=%d requested=%d",
            company_id,
            sum(1 for o in outcomes if o.user_id),
            len(outcomes),
        )
        if notify:
            return await self.deliver_invites(actor, outcomes)
        return outcomes

    async def deliver_invites(
        self, actor: User, outcomes: list[InviteOutcome]
    ) -> list[InviteOutcome]:
        """Send the invite notification for every created user, concurrently.

        Returns the outcomes with delivered set from the send result. Outcomes
        without a user are returned unchanged, and so is everything when no
        notifier is configured.
        """
        notifier = self._notifier
        pending = [o for o in outcomes if o.user_id and o.invite_token]
        if notifier is None or not pending:
            return outcomes
        results = await asyncio.gather(
            *(
                notifier.send(
                    o.email, self._invite_subject, self._invite_data(actor, o.invite_token)
                )
                for o in pending
            ),
            return_exceptions=True,
        )
        sent: dict[str, InviteOutcome] = {}
        for outcome, result in zip(pending, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning(
                    "Invite notification failed: company_id=%s user_id=%s error=%s",
                    actor.own_company_id,
                    outcome.user_id,
                    result,
                )
                sent[outcome.email] = replace(outcome, delivered=False, error=str(result))
            else:
                sent[outcome.email] = replace(outcome, delivered=True)
        return [sent.get(o.email, o) for o in outcomes]

    @staticmethod
    def _invite_data(actor: User, token: str) -> dict[str, str | None]:
        return {
            "invite_token": token,
            "inviter_id": actor.id,
            "company_id": actor.own_company_id,
        }

    async def accept_invite(
        self,
        token: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> AuthResult:
        """Activate the invited user, set its credential and consume the token.

        The invitee row stays locked until the request transaction ends, so a
        concurrent accept of the same token waits and then finds it consumed.

        Raises:
            InviteNotFoundException: Token unknown, expired or already used.
        """
        user = await self.find_user_by_invite(token, for_update=True)
        if user is None:
            raise InviteNotFoundException()
        await self._user_repo.set_password(user, password)
        if first_name is not None:
            user.first_name = first_name
        if last_name is not None:
            user.last_name = last_name
        user.is_active = True
        user.invite_token_hash = None
        user.invite_expires_at = None
        await self._user_repo.persist(user)
        logger.info("Invite accepted: user_id=%s company_id=%s", user.id, user.company_id)
        return AuthResult(user=user, token=self._issue_token(user))
