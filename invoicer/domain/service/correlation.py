"""Invite correlation across the identity provider redirect."""

import logfire

from invoicer.domain.repository import SessionStore
from invoicer.domain.value import InviteToken
from invoicer.util.observability import redact

from .base import Service


class InviteCorrelation(Service):
    """Carries an invite token across the round trip to the identity provider.

    The provider's redirect back carries no invite context, so the token is
    written to session-scoped storage right before leaving and taken (read
    and deleted) exactly once by the callback after a successful exchange.

    If the session storage is gone by the time the user comes back (other
    browser, cleared storage), the correlation is lost and take() returns
    None. That is an accepted limitation and is not papered over.
    """

    def __init__(
        self, store: SessionStore, key: str = "pending_email_invite_token"
    ) -> None:
        """Initialize invite correlation.

        Args:
            store: Session-scoped client-local store
            key: Fixed storage key; no other component writes it
        """
        self.store = store
        self.key = key

    def stash(self, token: InviteToken) -> None:
        """Remember the invite token before redirecting out."""
        self.store.set(self.key, token.root)
        logfire.info("Invite correlation stored", token=redact(token.root))

    def peek(self) -> InviteToken | None:
        """Look at the pending token without consuming it."""
        value = self.store.get(self.key)
        return InviteToken(root=value) if value else None

    def take(self) -> InviteToken | None:
        """Read and delete the pending token.

        Returns:
            The token written by stash(), or None if there is none
        """
        value = self.store.get(self.key)
        self.store.delete(self.key)
        if not value:
            return None
        logfire.info("Invite correlation consumed", token=redact(value))
        return InviteToken(root=value)

    def clear(self) -> None:
        """Drop a pending token left behind by an abandoned handoff."""
        self.store.delete(self.key)
