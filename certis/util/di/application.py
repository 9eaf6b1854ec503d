"""Application layer DI providers."""

from dishka import Scope, provide

from certis.application.usecase.auth import (
    GetCurrentUserUseCase,
    LoginUseCase,
    RefreshTokenUseCase,
    RegisterUseCase,
)
from certis.application.usecase.certificate import (
    IssueCertificateUseCase,
    IssueCertificatesBatchUseCase,
    ListCertificatesUseCase,
    RevokeCertificateUseCase,
)
from certis.application.usecase.course import (
    CreateCourseUseCase,
    DeleteCourseUseCase,
    ListCoursesUseCase,
)
from certis.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CreateInvitationUseCase,
    ListPendingInvitationsUseCase,
    RevokeInvitationUseCase,
    SweepExpiredInvitationsUseCase,
)
from certis.application.usecase.member import (
    ChangeRoleUseCase,
    ReconcileOwnerUseCase,
    RemoveMemberUseCase,
    TransferOwnershipUseCase,
)
from certis.application.usecase.organization import (
    CreateOrganizationUseCase,
    GetMyOrganizationUseCase,
)
from certis.domain.repository import TransactionManager
from certis.domain.service import (
    AuthorizationGuard,
    CertificateService,
    CourseService,
    InvitationService,
    OrganizationService,
    OwnershipService,
    TenantContext,
    TokenService,
    UserService,
)
from certis.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Auth use cases
    @provide
    def get_register_use_case(self, user_service: UserService) -> RegisterUseCase:
        """Provide register use case."""
        return RegisterUseCase(user_service=user_service)

    @provide
    def get_login_use_case(
        self, user_service: UserService, token_service: TokenService
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(user_service=user_service, token_service=token_service)

    @provide
    def get_refresh_token_use_case(
        self, token_service: TokenService, user_service: UserService
    ) -> RefreshTokenUseCase:
        """Provide refresh token use case."""
        return RefreshTokenUseCase(token_service=token_service, user_service=user_service)

    @provide
    def get_current_user_use_case(self, user_service: UserService) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(user_service=user_service)

    # Organization use cases
    @provide
    def get_create_organization_use_case(
        self,
        organization_service: OrganizationService,
        user_service: UserService,
        token_service: TokenService,
    ) -> CreateOrganizationUseCase:
        """Provide create organization use case."""
        return CreateOrganizationUseCase(
            organization_service=organization_service,
            user_service=user_service,
            token_service=token_service,
        )

    @provide
    def get_my_organization_use_case(
        self, organization_service: OrganizationService
    ) -> GetMyOrganizationUseCase:
        """Provide get my organization use case."""
        return GetMyOrganizationUseCase(organization_service=organization_service)

    # Invitation use cases
    @provide
    def get_create_invitation_use_case(
        self, invitation_service: InvitationService, tenant_context: TenantContext
    ) -> CreateInvitationUseCase:
        """Provide create invitation use case."""
        return CreateInvitationUseCase(
            invitation_service=invitation_service, tenant_context=tenant_context
        )

    @provide
    def get_list_pending_invitations_use_case(
        self, invitation_service: InvitationService, tenant_context: TenantContext
    ) -> ListPendingInvitationsUseCase:
        """Provide list pending invitations use case."""
        return ListPendingInvitationsUseCase(
            invitation_service=invitation_service, tenant_context=tenant_context
        )

    @provide
    def get_accept_invitation_use_case(
        self,
        invitation_service: InvitationService,
        user_service: UserService,
        token_service: TokenService,
    ) -> AcceptInvitationUseCase:
        """Provide accept invitation use case."""
        return AcceptInvitationUseCase(
            invitation_service=invitation_service,
            user_service=user_service,
            token_service=token_service,
        )

    @provide
    def get_revoke_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> RevokeInvitationUseCase:
        """Provide revoke invitation use case."""
        return RevokeInvitationUseCase(invitation_service=invitation_service)

    @provide
    def get_sweep_expired_invitations_use_case(
        self,
        invitation_service: InvitationService,
        authorization_guard: AuthorizationGuard,
    ) -> SweepExpiredInvitationsUseCase:
        """Provide sweep expired invitations use case."""
        return SweepExpiredInvitationsUseCase(
            invitation_service=invitation_service,
            authorization_guard=authorization_guard,
        )

    # Membership use cases
    @provide
    def get_change_role_use_case(
        self, ownership_service: OwnershipService
    ) -> ChangeRoleUseCase:
        """Provide change role use case."""
        return ChangeRoleUseCase(ownership_service=ownership_service)

    @provide
    def get_remove_member_use_case(
        self, ownership_service: OwnershipService
    ) -> RemoveMemberUseCase:
        """Provide remove member use case."""
        return RemoveMemberUseCase(ownership_service=ownership_service)

    @provide
    def get_transfer_ownership_use_case(
        self,
        ownership_service: OwnershipService,
        user_service: UserService,
        token_service: TokenService,
    ) -> TransferOwnershipUseCase:
        """Provide transfer ownership use case."""
        return TransferOwnershipUseCase(
            ownership_service=ownership_service,
            user_service=user_service,
            token_service=token_service,
        )

    @provide
    def get_reconcile_owner_use_case(
        self, ownership_service: OwnershipService
    ) -> ReconcileOwnerUseCase:
        """Provide reconcile owner use case."""
        return ReconcileOwnerUseCase(ownership_service=ownership_service)

    # Certificate use cases
    @provide
    def get_issue_certificate_use_case(
        self, certificate_service: CertificateService
    ) -> IssueCertificateUseCase:
        """Provide issue certificate use case."""
        return IssueCertificateUseCase(certificate_service=certificate_service)

    @provide
    def get_revoke_certificate_use_case(
        self, certificate_service: CertificateService
    ) -> RevokeCertificateUseCase:
        """Provide revoke certificate use case."""
        return RevokeCertificateUseCase(certificate_service=certificate_service)

    @provide
    def get_list_certificates_use_case(
        self, certificate_service: CertificateService, tenant_context: TenantContext
    ) -> ListCertificatesUseCase:
        """Provide list certificates use case."""
        return ListCertificatesUseCase(
            certificate_service=certificate_service, tenant_context=tenant_context
        )

    @provide
    def get_issue_certificates_batch_use_case(
        self,
        certificate_service: CertificateService,
        tenant_context: TenantContext,
        transaction_manager: TransactionManager,
    ) -> IssueCertificatesBatchUseCase:
        """Provide batch issue certificates use case."""
        return IssueCertificatesBatchUseCase(
            certificate_service=certificate_service,
            tenant_context=tenant_context,
            transaction_manager=transaction_manager,
        )

    # Course use cases
    @provide
    def get_create_course_use_case(
        self, course_service: CourseService
    ) -> CreateCourseUseCase:
        """Provide create course use case."""
        return CreateCourseUseCase(course_service=course_service)

    @provide
    def get_list_courses_use_case(
        self, course_service: CourseService, tenant_context: TenantContext
    ) -> ListCoursesUseCase:
        """Provide list courses use case."""
        return ListCoursesUseCase(
            course_service=course_service, tenant_context=tenant_context
        )

    @provide
    def get_delete_course_use_case(
        self, course_service: CourseService
    ) -> DeleteCourseUseCase:
        """Provide delete course use case."""
        return DeleteCourseUseCase(course_service=course_service)
