"""Exception classes for Docview."""


class DocviewError(Exception):
    """Base exception for all Docview errors."""


class UnknownDocumentError(DocviewError, KeyError):
    """Navigation key is not part of the document catalog."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unknown document: {key}")

    def __str__(self) -> str:
        return f"Unknown document: {self.key}"


class DocumentUnavailableError(DocviewError):
    """Document could not be fetched.

    Covers missing files, transport failures and non-success HTTP responses.
    This is the only failure the viewer surfaces to the user, and it does so
    as a fixed message rather than the exception details.
    """

    def __init__(self, key: str, reason: str) -> None:
        """Initialize with the document key and a short reason.

        Args:
            key: Catalog key of the document
            reason: Human-readable cause, used for logging
        """
        self.key = key
        self.reason = reason
        super().__init__(f"Document '{key}' unavailable: {reason}")
