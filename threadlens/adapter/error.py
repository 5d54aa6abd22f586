"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class PayloadError(AdapterError):
    """Scraped payload cannot be mapped to a comment."""

    pass
