"""Domain layer DI providers."""

from dishka import Scope, provide

from certis.config import AuthSettings, InvitationSettings
from certis.domain.repository import (
    CertificateRepository,
    CourseRepository,
    InvitationRepository,
    OrganizationRepository,
    TransactionManager,
    UserRepository,
)
from certis.domain.service import (
    AuthorizationGuard,
    CertificateService,
    CourseService,
    EmailSender,
    InvitationService,
    NotificationService,
    OrganizationService,
    OwnershipService,
    TenantContext,
    TokenService,
    UserService,
)
from certis.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    The guard and the notification service hold no request state and live for
    the whole application; the notification service owns the pending email tasks.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_authorization_guard(self) -> AuthorizationGuard:
        """Provide authorization guard."""
        return AuthorizationGuard()

    @provide(scope=Scope.APP)
    def get_notification_service(
        self, email_sender: EmailSender, invitation_settings: InvitationSettings
    ) -> NotificationService:
        """Provide notification service."""
        return NotificationService(
            email_sender=email_sender, invitation_settings=invitation_settings
        )

    @provide
    def get_token_service(
        self, auth_settings: AuthSettings, user_repository: UserRepository
    ) -> TokenService:
        """Provide token domain service."""
        return TokenService(auth_settings=auth_settings, user_repository=user_repository)

    @provide
    def get_tenant_context(self, token_service: TokenService) -> TenantContext:
        """Provide tenant context."""
        return TenantContext(token_service=token_service)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_organization_service(
        self,
        organization_repository: OrganizationRepository,
        user_repository: UserRepository,
        transaction_manager: TransactionManager,
    ) -> OrganizationService:
        """Provide organization domain service."""
        return OrganizationService(
            organization_repository=organization_repository,
            user_repository=user_repository,
            transaction_manager=transaction_manager,
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        user_repository: UserRepository,
        organization_repository: OrganizationRepository,
        transaction_manager: TransactionManager,
        notification_service: NotificationService,
        authorization_guard: AuthorizationGuard,
        invitation_settings: InvitationSettings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            user_repository=user_repository,
            organization_repository=organization_repository,
            transaction_manager=transaction_manager,
            notification_service=notification_service,
            authorization_guard=authorization_guard,
            invitation_settings=invitation_settings,
        )

    @provide
    def get_ownership_service(
        self,
        user_repository: UserRepository,
        organization_repository: OrganizationRepository,
        transaction_manager: TransactionManager,
        authorization_guard: AuthorizationGuard,
    ) -> OwnershipService:
        """Provide ownership domain service."""
        return OwnershipService(
            user_repository=user_repository,
            organization_repository=organization_repository,
            transaction_manager=transaction_manager,
            authorization_guard=authorization_guard,
        )

    @provide
    def get_certificate_service(
        self,
        certificate_repository: CertificateRepository,
        course_repository: CourseRepository,
        authorization_guard: AuthorizationGuard,
    ) -> CertificateService:
        """Provide certificate domain service."""
        return CertificateService(
            certificate_repository=certificate_repository,
            course_repository=course_repository,
            authorization_guard=authorization_guard,
        )

    @provide
    def get_course_service(
        self,
        course_repository: CourseRepository,
        certificate_repository: CertificateRepository,
        authorization_guard: AuthorizationGuard,
    ) -> CourseService:
        """Provide course domain service."""
        return CourseService(
            course_repository=course_repository,
            certificate_repository=certificate_repository,
            authorization_guard=authorization_guard,
        )
