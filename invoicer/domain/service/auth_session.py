"""Session identity domain service."""

import json

import logfire
from pydantic import ValidationError

from invoicer.domain.model.user import User
from invoicer.domain.repository import SessionStore
from invoicer.domain.value import Route

from .base import Service
from .navigation import Navigator


class AuthSession(Service):
    """Holds the logged-in user's access token and cached profile.

    The identity lives in durable storage under two fixed keys. It is read
    once at start-up (restore), written at login (set_user_data) and
    destroyed at logout or when the backend answers 401 (expire).
    """

    def __init__(
        self,
        store: SessionStore,
        navigator: Navigator,
        access_token_key: str = "access_token",
        user_key: str = "user",
    ) -> None:
        """Initialize auth session.

        Args:
            store: Durable client-local store
            navigator: Used to send the user to login when the session expires
            access_token_key: Storage key for the bearer token
            user_key: Storage key for the JSON user profile
        """
        self.store = store
        self.navigator = navigator
        self.access_token_key = access_token_key
        self.user_key = user_key
        self._user: User | None = None
        self._access_token: str | None = None

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None and self._access_token is not None

    def restore(self) -> User | None:
        """Load a persisted identity.

        A profile that cannot be parsed is discarded together with its token.

        Returns:
            The restored user, or None if there is no usable identity
        """
        token = self.store.get(self.access_token_key)
        raw_user = self.store.get(self.user_key)
        if not token or not raw_user:
            return None

        try:
            user = User.model_validate(json.loads(raw_user))
        except (ValueError, ValidationError) as e:
            logfire.warn("Discarding unreadable stored user", error=str(e))
            self._forget()
            return None

        self._user = user
        self._access_token = token
        logfire.info("Session restored", user_id=user.id)
        return user

    def set_user_data(self, user: User, access_token: str) -> None:
        """Store a new identity after a successful login exchange."""
        self.store.set(self.access_token_key, access_token)
        self.store.set(self.user_key, user.model_dump_json())
        self._user = user
        self._access_token = access_token
        logfire.info("Session stored", user_id=user.id)

    def logout(self) -> None:
        """Drop the identity."""
        self._forget()
        logfire.info("Logged out")

    def expire(self) -> None:
        """Handle a 401: drop the identity and send the user to login."""
        logfire.warn("Session expired, redirecting to login")
        self._forget()
        self.navigator.navigate(Route.LOGIN)

    def _forget(self) -> None:
        self.store.delete(self.access_token_key)
        self.store.delete(self.user_key)
        self._user = None
        self._access_token = None
