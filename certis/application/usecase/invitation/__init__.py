"""Invitation use cases."""

from .accept_invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
)
from .create_invitation import CreateInvitationRequest, CreateInvitationUseCase
from .list_pending_invitations import (
    ListPendingInvitationsRequest,
    ListPendingInvitationsResponse,
    ListPendingInvitationsUseCase,
)
from .revoke_invitation import RevokeInvitationRequest, RevokeInvitationUseCase
from .sweep_expired_invitations import (
    SweepExpiredInvitationsRequest,
    SweepExpiredInvitationsResponse,
    SweepExpiredInvitationsUseCase,
)

__all__ = [
    "AcceptInvitationRequest",
    "AcceptInvitationResponse",
    "AcceptInvitationUseCase",
    "CreateInvitationRequest",
    "CreateInvitationUseCase",
    "ListPendingInvitationsRequest",
    "ListPendingInvitationsResponse",
    "ListPendingInvitationsUseCase",
    "RevokeInvitationRequest",
    "RevokeInvitationUseCase",
    "SweepExpiredInvitationsRequest",
    "SweepExpiredInvitationsResponse",
    "SweepExpiredInvitationsUseCase",
]
