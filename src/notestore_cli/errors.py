"""Domain errors."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NoteStoreApiError(RuntimeError):
    """Raised when a note service call fails or returns a body the client cannot use.

    ``malformed`` separates a successful status carrying an unusable body
    (an HTML login page from a proxy, a truncated payload) from an error status.
    """

    status_code: int
    method: str
    url: str
    response_text: str
    malformed: bool = False

    def __str__(self) -> str:
        problem = "malformed response" if self.malformed else f"error {self.status_code}"
        return f"Note service {problem} for {self.method} {self.url}: {self.response_text}"
