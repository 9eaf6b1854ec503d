"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the rules that span several aggregates (users,
    organizations, invitations) and therefore belong to none of them.
    """

    pass
