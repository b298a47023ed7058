"""
Exceptions raised by the logging adapter.
"""

# canonical adapter-level exception

class LogAdapterError(Exception):
    """
    Base exception for adapter errors.

    - message: human-friendly message
    - error_code: canonical short code (e.g., 'copy_failed') for callers that
      want to branch without isinstance checks
    """

    def __init__(self, message: str, *, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self) -> str:
        if self.error_code:
            return f"{self.message} (code: {self.error_code})"
        return self.message

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict describing the error.
        Shape:
            {"detail": "...", "code": "copy_failed"}
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        return payload


class CopyError(LogAdapterError):
    """
    Raised when caller-supplied key/values cannot be deep-copied.

    `index` is the position in the key/value sequence of the value that failed
    (None when the failing value came from a mapping). The original exception
    is chained as __cause__.
    """

    def __init__(self, message: str = "could not copy log values", *, index: int | None = None,
                 key: object = None):
        super().__init__(message, error_code="copy_failed")
        self.index = index
        self.key = key

    def to_payload(self) -> dict:
        payload = super().to_payload()
        if self.index is not None:
            payload["index"] = self.index
        if isinstance(self.key, str):
            payload["key"] = self.key
        return payload


__all__ = [
    "LogAdapterError",
    "CopyError",
]
