"""Backend REST client.

Thin typed wrapper over the backend's JSON/HTTPS endpoints. The backend
does the real work (OAuth token exchange, persistence, invite bookkeeping);
this client only sends requests and validates the answers.
"""

from typing import Any, TypeVar

import httpx
import logfire
from pydantic import BaseModel

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
from invoicer.adapter.error import (
    BackendError,
    BackendUnavailableError,
    MalformedResponseError,
)
from invoicer.domain.error import SessionExpiredError
from invoicer.domain.model import InviteRecord
from invoicer.domain.service import AuthSession
from invoicer.domain.value import EmailAccountId, InviteId, InviteToken

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BackendClient:
    """Interface of the backend as seen by the use cases.

    Methods marked authenticated send the session's bearer token; a 401 on
    any of them expires the session and raises SessionExpiredError.
    """

    # Invites

    async def validate_invite(self, token: InviteToken) -> ValidateInviteResponse:
        """Look up an invite without changing it. Public."""
        raise NotImplementedError

    async def accept_invite(self, token: InviteToken) -> AcceptInviteResponse:
        """Redeem an invite for the logged-in user. Authenticated."""
        raise NotImplementedError

    async def accept_invite_public(self, token: InviteToken) -> AcceptInviteResponse:
        """Redeem an invite without a session. Public."""
        raise NotImplementedError

    async def create_invite(
        self, email_account_id: EmailAccountId, expires_in_hours: int | None = None
    ) -> CreateInviteResponse:
        """Create a share_access invite for a connected mailbox. Authenticated."""
        raise NotImplementedError

    async def create_email_account_invite(
        self, invited_email: str, expires_in_hours: int | None = None
    ) -> CreateInviteResponse:
        """Create an add_email_account invite for an address. Authenticated."""
        raise NotImplementedError

    async def list_invites(self) -> InviteListResponse:
        """List the current user's invites. Authenticated."""
        raise NotImplementedError

    async def get_invite(self, invite_id: InviteId) -> InviteRecord:
        """Fetch one of the current user's invites. Authenticated."""
        raise NotImplementedError

    async def delete_invite(self, invite_id: InviteId) -> MessageResponse:
        """Revoke one of the current user's invites. Authenticated."""
        raise NotImplementedError

    # Login

    async def get_login_url(self) -> AuthUrlResponse:
        """Authorization URL for the main Google login. Public."""
        raise NotImplementedError

    async def exchange_login_code(self, code: str) -> LoginExchangeResponse:
        """Exchange a main-login authorization code for a session. Public."""
        raise NotImplementedError

    # Mailbox OAuth

    async def get_oauth_url(self, provider: str) -> AuthUrlResponse:
        """Authorization URL for connecting a mailbox. Authenticated."""
        raise NotImplementedError

    async def get_oauth_url_public(self, provider: str) -> AuthUrlResponse:
        """Authorization URL for an invited user without a session. Public."""
        raise NotImplementedError

    async def exchange_oauth_code(
        self, provider: str, code: str
    ) -> EmailAccountConnectedResponse:
        """Exchange a mailbox authorization code. Authenticated."""
        raise NotImplementedError

    async def exchange_oauth_code_public(
        self, provider: str, code: str
    ) -> EmailAccountConnectedResponse:
        """Exchange a mailbox authorization code for an invited user. Public."""
        raise NotImplementedError


class HttpBackendClient(BackendClient):
    """BackendClient speaking HTTP through a shared httpx.AsyncClient."""

    def __init__(self, http: httpx.AsyncClient, auth_session: AuthSession) -> None:
        """Initialize backend client.

        Args:
            http: Client configured with the backend base URL and timeout
            auth_session: Source of the bearer token; expired on 401
        """
        self.http = http
        self.auth_session = auth_session

    async def validate_invite(self, token: InviteToken) -> ValidateInviteResponse:
        return await self._request(
            "GET", f"/api/invites/validate/{token.root}", ValidateInviteResponse
        )

    async def accept_invite(self, token: InviteToken) -> AcceptInviteResponse:
        return await self._request(
            "POST",
            "/api/invites/accept",
            AcceptInviteResponse,
            json={"invite_token": token.root},
            authenticated=True,
        )

    async def accept_invite_public(self, token: InviteToken) -> AcceptInviteResponse:
        return await self._request(
            "POST",
            "/api/invites/accept-public",
            AcceptInviteResponse,
            json={"invite_token": token.root},
        )

    async def create_invite(
        self, email_account_id: EmailAccountId, expires_in_hours: int | None = None
    ) -> CreateInviteResponse:
        body: dict[str, Any] = {"email_account_id": email_account_id}
        if expires_in_hours is not None:
            body["expires_in_hours"] = expires_in_hours
        return await self._request(
            "POST", "/api/invites/", CreateInviteResponse, json=body, authenticated=True
        )

    async def create_email_account_invite(
        self, invited_email: str, expires_in_hours: int | None = None
    ) -> CreateInviteResponse:
        body: dict[str, Any] = {"invited_email": invited_email}
        if expires_in_hours is not None:
            body["expires_in_hours"] = expires_in_hours
        return await self._request(
            "POST",
            "/api/invites/email-account",
            CreateInviteResponse,
            json=body,
            authenticated=True,
        )

    async def list_invites(self) -> InviteListResponse:
        return await self._request(
            "GET", "/api/invites/", InviteListResponse, authenticated=True
        )

    async def get_invite(self, invite_id: InviteId) -> InviteRecord:
        return await self._request(
            "GET", f"/api/invites/{invite_id}", InviteRecord, authenticated=True
        )

    async def delete_invite(self, invite_id: InviteId) -> MessageResponse:
        return await self._request(
            "DELETE", f"/api/invites/{invite_id}", MessageResponse, authenticated=True
        )

    async def get_login_url(self) -> AuthUrlResponse:
        return await self._request("GET", "/auth/google/login", AuthUrlResponse)

    async def exchange_login_code(self, code: str) -> LoginExchangeResponse:
        return await self._request(
            "POST", "/auth/google/exchange", LoginExchangeResponse, json={"code": code}
        )

    async def get_oauth_url(self, provider: str) -> AuthUrlResponse:
        return await self._request(
            "GET",
            f"/api/email-accounts/oauth/{provider}/url",
            AuthUrlResponse,
            authenticated=True,
        )

    async def get_oauth_url_public(self, provider: str) -> AuthUrlResponse:
        return await self._request(
            "GET", f"/api/email-accounts/oauth/{provider}/url-public", AuthUrlResponse
        )

    async def exchange_oauth_code(
        self, provider: str, code: str
    ) -> EmailAccountConnectedResponse:
        return await self._request(
            "POST",
            f"/api/email-accounts/oauth/{provider}/callback",
            EmailAccountConnectedResponse,
            json={"code": code},
            authenticated=True,
        )

    async def exchange_oauth_code_public(
        self, provider: str, code: str
    ) -> EmailAccountConnectedResponse:
        return await self._request(
            "POST",
            f"/api/email-accounts/oauth/{provider}/callback-public",
            EmailAccountConnectedResponse,
            # Sent both ways; backends read it from either the query or the form
            params={"code": code},
            data={"code": code},
        )

    async def _request(
        self,
        method: str,
        path: str,
        schema: type[ResponseT],
        *,
        json: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        authenticated: bool = False,
    ) -> ResponseT:
        """Send one request and validate the response body.

        Raises:
            BackendUnavailableError: If no response arrived
            SessionExpiredError: On 401 from an authenticated endpoint
            BackendError: On any other non-2xx status
            MalformedResponseError: If a 2xx body does not match the schema
        """
        headers: dict[str, str] = {}
        if authenticated and self.auth_session.access_token:
            headers["Authorization"] = f"Bearer {self.auth_session.access_token}"

        try:
            response = await self.http.request(
                method, path, params=params, json=json, data=data, headers=headers
            )
        except httpx.HTTPError as e:
            logfire.error(
                "Backend request failed",
                method=method,
                response=schema.__name__,
                error=str(e),
            )
            raise BackendUnavailableError(
                f"HTTP error waiting for {schema.__name__}: {e}"
            ) from e

        if response.status_code == 401 and authenticated:
            self.auth_session.expire()
            raise SessionExpiredError()

        if response.is_error:
            body = _decode(response)
            detail = body.get("detail") if isinstance(body, dict) else None
            if not isinstance(detail, str):
                detail = None
            logfire.warn(
                "Backend returned an error",
                method=method,
                response=schema.__name__,
                status_code=response.status_code,
                detail=detail,
            )
            raise BackendError(
                f"{schema.__name__} request failed: {response.status_code}",
                status_code=response.status_code,
                detail=detail,
                body=body,
            )

        try:
            return schema.model_validate(response.json())
        except ValueError as e:
            # Covers both undecodable JSON and pydantic validation errors
            logfire.error(
                "Backend response did not match schema",
                response=schema.__name__,
                error=str(e),
            )
            raise MalformedResponseError(f"Unexpected {schema.__name__}: {e}") from e


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
