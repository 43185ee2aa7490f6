"""Exceptions shared across gql-docgen."""


class LoadError(ValueError):
    """Raised when an input document or settings file cannot be read."""
