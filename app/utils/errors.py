# -*- coding: utf-8 -*-


class RequestServiceError(Exception):
    """Base class for errors raised while handling employee requests."""


class ValidationFailure(RequestServiceError):
    """A required field is missing or malformed."""


class DuplicateRequest(RequestServiceError):
    """The employee already holds an active request for a one-time program."""

    def __init__(self, existing):
        self.existing = existing
        super().__init__(
            f"You already have a {existing.status.lower()} request for {existing.program}"
        )


class UnsupportedFileType(RequestServiceError):
    pass


class FileTooLarge(RequestServiceError):
    pass


class RequestNotFound(RequestServiceError):
    pass


class StoredFileNotFound(RequestServiceError):
    pass


class StoreUnavailable(RequestServiceError):
    """The database could not be reached or its schema could not be created."""
