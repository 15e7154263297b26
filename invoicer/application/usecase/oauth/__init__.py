"""OAuth handoff use cases."""

from invoicer.application.usecase.oauth.complete_callback import (
    CompleteOAuthCallbackRequest,
    CompleteOAuthCallbackResponse,
    CompleteOAuthCallbackUseCase,
)
from invoicer.application.usecase.oauth.start_connection import (
    StartEmailConnectionRequest,
    StartEmailConnectionResponse,
    StartEmailConnectionUseCase,
)

__all__ = [
    "CompleteOAuthCallbackRequest",
    "CompleteOAuthCallbackResponse",
    "CompleteOAuthCallbackUseCase",
    "StartEmailConnectionRequest",
    "StartEmailConnectionResponse",
    "StartEmailConnectionUseCase",
]
