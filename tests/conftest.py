"""Test configuration and fixtures."""

import os

# Settings are read from the environment when a container resolves them
os.environ["ENVIRONMENT"] = "test"
os.environ["UI__INVITE_REDIRECT_DELAY"] = "0"
os.environ["UI__ACCOUNT_REDIRECT_DELAY"] = "0"
os.environ["UI__LOGIN_REDIRECT_DELAY"] = "0"
os.environ["OBSERVABILITY__SEND_TO_LOGFIRE"] = "false"

import logfire  # noqa: E402

from invoicer.domain.model import User  # noqa: E402
from invoicer.domain.value import UserId  # noqa: E402

logfire.configure(send_to_logfire=False, console=False)


def make_user(email: str = "owner@example.com", user_id: str = "user-1") -> User:
    """Helper to build a logged-in user profile."""
    return User(id=UserId(user_id), email=email, name="Test User")
