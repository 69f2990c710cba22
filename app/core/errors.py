"""
Domain exceptions raised by services and translated to HTTP errors by routes.
"""


class CatalogEmptyError(Exception):
    """The catalog read succeeded but returned no universities."""

    def __init__(self, message: str = "No universities found. Please add some universities to the database."):
        super().__init__(message)


class CatalogLoadError(Exception):
    """The catalog read failed. The message is the storage error, unmodified."""


class StorageError(Exception):
    """Object storage upload failed (quota, permission, network)."""


class AuthError(Exception):
    """Sign-up, sign-in or session restore failed."""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code


class ImportFileError(Exception):
    """Bulk import rejected the file before or during parsing."""


class SubmissionError(Exception):
    """
    Application submission stopped before completion.

    Carries the partial result so callers can report which step failed and
    which records already exist.
    """

    def __init__(self, message: str, result):
        super().__init__(message)
        self.result = result


class MissingDocumentsError(ValueError):
    """Required attachments were not supplied; raised before any side effect."""

    def __init__(self, missing):
        super().__init__(f"Missing required documents: {', '.join(missing)}")
        self.missing = list(missing)
