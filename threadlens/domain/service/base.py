"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold logic that spans many comments (ranking, paging,
    ingestion) rather than belonging to a single record.
    """

    pass
