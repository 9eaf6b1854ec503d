"""Membership and ownership use cases."""

from .change_role import ChangeRoleRequest, ChangeRoleUseCase
from .reconcile_owner import ReconcileOwnerRequest, ReconcileOwnerUseCase
from .remove_member import RemoveMemberRequest, RemoveMemberUseCase
from .transfer_ownership import (
    TransferOwnershipRequest,
    TransferOwnershipResponse,
    TransferOwnershipUseCase,
)

__all__ = [
    "ChangeRoleRequest",
    "ChangeRoleUseCase",
    "ReconcileOwnerRequest",
    "ReconcileOwnerUseCase",
    "RemoveMemberRequest",
    "RemoveMemberUseCase",
    "TransferOwnershipRequest",
    "TransferOwnershipResponse",
    "TransferOwnershipUseCase",
]
