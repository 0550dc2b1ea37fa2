from __future__ import annotations


class HeadlineError(Exception):
    """Base error for headline browsing failures."""


class NotHeadlineBufferError(HeadlineError):
    def __init__(self, message: str = "buffer isn't the headline buffer") -> None:
        super().__init__(message)


class NoHeadlineError(HeadlineError):
    def __init__(self, message: str = "no headline details on that line") -> None:
        super().__init__(message)


class HeadlineStoreFormatError(HeadlineError):
    """Raised when the headline database cannot be read as a list of pairs."""
