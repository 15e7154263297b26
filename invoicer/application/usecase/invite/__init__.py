"""Invite use cases."""

from invoicer.application.usecase.invite.accept_invite import (
    AcceptInviteRequest,
    AcceptInviteResponse,
    AcceptInviteUseCase,
)
from invoicer.application.usecase.invite.create_invite import (
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
)
from invoicer.application.usecase.invite.get_invites import (
    GetInviteRequest,
    GetInvitesRequest,
    GetInvitesResponse,
    GetInvitesUseCase,
    GetInviteUseCase,
)
from invoicer.application.usecase.invite.revoke_invite import (
    RevokeInviteRequest,
    RevokeInviteResponse,
    RevokeInviteUseCase,
)
from invoicer.application.usecase.invite.validate_invite import (
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)

__all__ = [
    "AcceptInviteRequest",
    "AcceptInviteResponse",
    "AcceptInviteUseCase",
    "CreateInviteRequest",
    "CreateInviteResponse",
    "CreateInviteUseCase",
    "GetInviteRequest",
    "GetInvitesRequest",
    "GetInvitesResponse",
    "GetInvitesUseCase",
    "GetInviteUseCase",
    "RevokeInviteRequest",
    "RevokeInviteResponse",
    "RevokeInviteUseCase",
    "ValidateInviteRequest",
    "ValidateInviteResponse",
    "ValidateInviteUseCase",
]
