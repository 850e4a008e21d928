"""Domain exceptions for receipt services."""


INVALID_RECEIPT_MESSAGE = "Invalid or corrupted receipt data"


class ReceiptServiceError(Exception):
    """Base exception for all receipt service errors."""
    pass


class DecodeError(ReceiptServiceError, ValueError):
    """Token is not valid base64url."""
    pass


class EncodeError(ReceiptServiceError):
    """Envelope cannot be serialized; no token must be produced."""
    pass


class MissingDataError(ReceiptServiceError):
    """Token is empty."""
    pass


class CorruptedDataError(ReceiptServiceError):
    """Token does not decode to a JSON object."""
    pass


class UnsupportedVersionError(ReceiptServiceError):
    """Envelope schema version is not supported."""
    pass


class MissingFieldsError(ReceiptServiceError):
    """Envelope lacks receipt.participants."""
    pass


class InvalidReceiptError(ReceiptServiceError):
    """
    The only error callers of decode() observe.

    `kind` keeps the internal failure kind for logging and diagnostics.
    """

    def __init__(self, message: str = INVALID_RECEIPT_MESSAGE, kind=None):
        super().__init__(message)
        self.kind = kind
