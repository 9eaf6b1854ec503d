"""Domain services."""

from .authorization_guard import AuthorizationGuard
from .base import Service
from .certificate_service import CertificateService
from .course_service import CourseService
from .invitation_service import InvitationService
from .notification import EmailSender, NotificationService
from .organization_service import OrganizationService
from .ownership_service import OwnershipService
from .tenant_context import TenantContext
from .token_service import TokenService
from .user_service import UserService

__all__ = [
    "AuthorizationGuard",
    "CertificateService",
    "CourseService",
    "EmailSender",
    "InvitationService",
    "NotificationService",
    "OrganizationService",
    "OwnershipService",
    "Service",
    "TenantContext",
    "TokenService",
    "UserService",
]
