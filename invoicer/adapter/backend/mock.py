"""In-memory backend for tests and offline development."""

import asyncio
import secrets
from datetime import datetime, timedelta, timezone

from invoicer.adapter.backend.client import BackendClient
from invoicer.adapter.backend.schemas import (
    AcceptInviteResponse,
    AuthUrlResponse,
    CreateInviteResponse,
    EmailAccountConnectedResponse,
    InviteListResponse,
    LoginExchangeResponse,
    MessageResponse,
    ValidateInviteResponse,
)
from invoicer.adapter.error import BackendError
from invoicer.domain.error import SessionExpiredError
from invoicer.domain.model import EmailAccountSummary, InviteRecord, User
from invoicer.domain.service import AuthSession
from invoicer.domain.value import (
    EmailAccountId,
    InviteId,
    InviteStatus,
    InviteToken,
    InviteType,
    UserId,
)


class MockBackendClient(BackendClient):
    """Backend that keeps invites in memory and records every call.

    Follows the backend's rules: acceptance is at-most-once, an invite past
    its expiry is reported with ``reason="expired"``, and an authorization
    code can be exchanged only once. Authenticated operations without a
    session behave like a 401.

    Attributes:
        calls: Operation names in call order
        latency: Seconds each call waits before answering
        failures: Operation name -> error raised instead of answering
    """

    def __init__(self, auth_session: AuthSession) -> None:
        """Initialize mock backend."""
        self.auth_session = auth_session
        self.invites: dict[str, InviteRecord] = {}
        self.email_accounts: dict[str, EmailAccountSummary] = {}
        self.calls: list[str] = []
        self.latency = 0.0
        self.failures: dict[str, Exception] = {}
        self.auth_url = "https://accounts.google.com/o/oauth2/v2/auth?client_id=mock"
        self.user = User(
            id=UserId("user-1"), email="owner@example.com", name="Mock Owner"
        )
        self.access_token = "mock-access-token"
        self.connected_email = "invited@example.com"
        self._used_codes: set[str] = set()

    def seed_invite(
        self,
        token: str,
        invite_type: InviteType = InviteType.ADD_EMAIL_ACCOUNT,
        invited_email: str | None = "invited@example.com",
        email_account_id: str | None = None,
        status: InviteStatus = InviteStatus.ACTIVE,
        expires_in: timedelta = timedelta(hours=24),
    ) -> InviteRecord:
        """Put an invite into the store."""
        now = datetime.now(timezone.utc)
        invite = InviteRecord(
            id=InviteId(f"invite-{len(self.invites) + 1}"),
            inviter_user_id=self.user.id,
            invite_type=invite_type,
            email_account_id=EmailAccountId(email_account_id) if email_account_id else None,
            invited_email=invited_email if invite_type == InviteType.ADD_EMAIL_ACCOUNT else None,
            invite_token=InviteToken(root=token),
            status=status,
            expires_at=now + expires_in,
            created_at=now,
            updated_at=now,
        )
        self.invites[token] = invite
        if email_account_id and email_account_id not in self.email_accounts:
            self.email_accounts[email_account_id] = EmailAccountSummary(
                id=EmailAccountId(email_account_id), email=self.user.email
            )
        return invite

    def fail(
        self,
        operation: str,
        status_code: int = 400,
        detail: str | None = None,
        body: dict | None = None,
    ) -> None:
        """Make an operation answer with an HTTP error until cleared."""
        if body is None:
            body = {"detail": detail} if detail else {}
        self.failures[operation] = BackendError(
            f"{operation} failed: {status_code}",
            status_code=status_code,
            detail=detail,
            body=body,
        )

    def count(self, operation: str) -> int:
        return self.calls.count(operation)

    # Invites

    async def validate_invite(self, token: InviteToken) -> ValidateInviteResponse:
        await self._call("validate_invite")
        invite = self.invites.get(token.root)
        if invite is None:
            return ValidateInviteResponse(valid=False, message="Invalid invite link")
        if invite.status == InviteStatus.USED:
            return ValidateInviteResponse(
                valid=False, message="Invite link has already been used"
            )
        if invite.is_expired():
            self._update(invite, status=InviteStatus.EXPIRED)
            return ValidateInviteResponse(
                valid=False, reason="expired", message="Invite link has expired"
            )

        email_account = None
        if invite.email_account_id:
            email_account = self.email_accounts.get(invite.email_account_id)
        return ValidateInviteResponse(
            valid=True,
            invite_type=invite.invite_type,
            invited_email=invite.invited_email,
            expires_at=invite.expires_at,
            email_account=email_account,
            inviter_user_id=invite.inviter_user_id,
            message="Valid invite link",
        )

    async def accept_invite(self, token: InviteToken) -> AcceptInviteResponse:
        await self._call("accept_invite", authenticated=True)
        return self._redeem(token, self.auth_session.user)

    async def accept_invite_public(self, token: InviteToken) -> AcceptInviteResponse:
        await self._call("accept_invite_public")
        return self._redeem(token, None)

    async def create_invite(
        self, email_account_id: EmailAccountId, expires_in_hours: int | None = None
    ) -> CreateInviteResponse:
        await self._call("create_invite", authenticated=True)
        token = secrets.token_urlsafe(24)
        invite = self.seed_invite(
            token,
            invite_type=InviteType.SHARE_ACCESS,
            email_account_id=email_account_id,
            expires_in=timedelta(hours=expires_in_hours or 24),
        )
        return CreateInviteResponse(
            success=True,
            invite_link=invite,
            invite_url=f"http://localhost:3000/invite/{token}",
        )

    async def create_email_account_invite(
        self, invited_email: str, expires_in_hours: int | None = None
    ) -> CreateInviteResponse:
        await self._call("create_email_account_invite", authenticated=True)
        token = secrets.token_urlsafe(24)
        invite = self.seed_invite(
            token,
            invite_type=InviteType.ADD_EMAIL_ACCOUNT,
            invited_email=invited_email,
            expires_in=timedelta(hours=expires_in_hours or 24),
        )
        return CreateInviteResponse(
            success=True,
            invite_link=invite,
            invite_url=f"http://localhost:3000/invite/add-email/{token}",
        )

    async def list_invites(self) -> InviteListResponse:
        await self._call("list_invites", authenticated=True)
        invites = list(self.invites.values())
        return InviteListResponse(invites=invites, total=len(invites))

    async def get_invite(self, invite_id: InviteId) -> InviteRecord:
        await self._call("get_invite", authenticated=True)
        return self._find(invite_id)

    async def delete_invite(self, invite_id: InviteId) -> MessageResponse:
        await self._call("delete_invite", authenticated=True)
        invite = self._find(invite_id)
        del self.invites[invite.invite_token.root]
        return MessageResponse(message="Invite deleted successfully")

    # Login

    async def get_login_url(self) -> AuthUrlResponse:
        await self._call("get_login_url")
        return AuthUrlResponse(auth_url=self.auth_url)

    async def exchange_login_code(self, code: str) -> LoginExchangeResponse:
        await self._call("exchange_login_code")
        self._consume_code(code)
        return LoginExchangeResponse(user=self.user, access_token=self.access_token)

    # Mailbox OAuth

    async def get_oauth_url(self, provider: str) -> AuthUrlResponse:
        await self._call("get_oauth_url", authenticated=True)
        return AuthUrlResponse(
            auth_url=f"{self.auth_url}&state=email_account_oauth",
            state="email_account_oauth",
        )

    async def get_oauth_url_public(self, provider: str) -> AuthUrlResponse:
        await self._call("get_oauth_url_public")
        return AuthUrlResponse(
            auth_url=f"{self.auth_url}&state=email_account_oauth_public",
            state="email_account_oauth_public",
        )

    async def exchange_oauth_code(
        self, provider: str, code: str
    ) -> EmailAccountConnectedResponse:
        await self._call("exchange_oauth_code", authenticated=True)
        self._consume_code(code)
        return EmailAccountConnectedResponse(
            email=self.connected_email,
            message="Email account connected successfully!",
        )

    async def exchange_oauth_code_public(
        self, provider: str, code: str
    ) -> EmailAccountConnectedResponse:
        await self._call("exchange_oauth_code_public")
        self._consume_code(code)
        return EmailAccountConnectedResponse(
            email=self.connected_email,
            inviter_user_id=self.user.id,
            message="Email account connected successfully!",
        )

    # Helpers

    async def _call(self, operation: str, authenticated: bool = False) -> None:
        self.calls.append(operation)
        await asyncio.sleep(self.latency)
        if authenticated and not self.auth_session.is_authenticated:
            self.auth_session.expire()
            raise SessionExpiredError()
        failure = self.failures.get(operation)
        if failure is not None:
            raise failure

    def _redeem(self, token: InviteToken, user: User | None) -> AcceptInviteResponse:
        invite = self.invites.get(token.root)
        if invite is None or invite.is_terminal():
            raise BackendError(
                "accept failed: 400",
                status_code=400,
                detail="Invite link is invalid, expired or already used",
                body={"detail": "Invite link is invalid, expired or already used"},
            )
        self._update(
            invite,
            status=InviteStatus.USED,
            used_at=datetime.now(timezone.utc),
            used_by_user_id=user.id if user else None,
        )
        return AcceptInviteResponse(
            success=True,
            message="Invite accepted successfully",
            email_account_id=invite.email_account_id,
        )

    def _consume_code(self, code: str) -> None:
        if code in self._used_codes:
            detail = "Authorization code has expired or already been used. Please try again."
            raise BackendError(
                "exchange failed: 400",
                status_code=400,
                detail=detail,
                body={"detail": detail},
            )
        self._used_codes.add(code)

    def _find(self, invite_id: InviteId) -> InviteRecord:
        for invite in self.invites.values():
            if invite.id == invite_id:
                return invite
        raise BackendError(
            "invite lookup failed: 404",
            status_code=404,
            detail="Invite not found",
            body={"detail": "Invite not found"},
        )

    def _update(self, invite: InviteRecord, **changes) -> None:
        changes["updated_at"] = datetime.now(timezone.utc)
        self.invites[invite.invite_token.root] = invite.model_copy(update=changes)
