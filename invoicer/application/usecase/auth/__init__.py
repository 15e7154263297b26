"""Authentication use cases."""

from invoicer.application.usecase.auth.login import (
    LoginRequest,
    LoginResponse,
    LoginUseCase,
)
from invoicer.application.usecase.auth.logout import LogoutRequest, LogoutUseCase

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "LoginUseCase",
    "LogoutRequest",
    "LogoutUseCase",
]
