"""
Exceptions raised while extracting Google Form structure
"""

from typing import Optional


class FormExtractionError(Exception):
    """Base exception for form extraction errors"""


class HttpError(FormExtractionError):
    """Raised when the form page answers with a non-success status"""

    def __init__(self, status: int, url: Optional[str] = None):
        self.status = status
        self.url = url
        message = f"HTTP error! Status: {status}"
        if url:
            message += f" ({url})"
        super().__init__(message)


class NoFormFound(FormExtractionError):
    """Raised when the fetched document has no <form> element"""

    def __init__(self, url: Optional[str] = None):
        self.url = url
        super().__init__(f"No form element found{f' at {url}' if url else ''}.")


class NormalizationFailure(FormExtractionError):
    """Raised when a data-params string cannot be recovered into JSON.

    Only the strict loader raises this; field extraction absorbs it and
    reports the metadata as unavailable.
    """

    def __init__(self, cleaned: Optional[str], cause: Exception):
        self.cleaned = cleaned
        self.cause = cause
        super().__init__(f"Failed to parse data-params: {cause}")
