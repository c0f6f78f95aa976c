"""Error taxonomy for journal and analysis operations."""

from __future__ import annotations


class JournalError(Exception):
    """Base class for every error raised by the journal core."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NoPlant(JournalError):
    """No journal has been initialized yet."""

    def __init__(self, message: str = "No plant saved.") -> None:
        super().__init__(message)


class MissingImage(JournalError):
    """An image-dependent operation ran on a day without an image."""

    def __init__(self, day: int) -> None:
        self.day = day
        super().__init__(f"No image for Day {day}.")


class UpstreamError(JournalError):
    """An analyzer call failed or returned a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class ParseError(JournalError):
    """A structured response did not have the expected shape."""


class NoImageInResponse(JournalError):
    """Image generation succeeded but the response carried no image."""

    def __init__(self, message: str = "No image generated in response") -> None:
        super().__init__(message)


class JournalIOError(JournalError):
    """Reading or writing persisted state failed."""
