"""Error types raised by the subtitle pipeline.

Every stage raises one of these and lets it propagate up to the CLI,
which maps it to a message and an exit status (see ``exit_code``).
"""

from typing import Optional


class OsdError(Exception):
    """Base class for all osd errors"""

    exit_code = 1


class InputError(OsdError):
    """Bad or missing movie file"""

    exit_code = 2


class MovieNotFoundError(InputError):
    pass


class MovieIsDirectoryError(InputError):
    pass


class MovieTooSmallError(InputError):
    pass


class ConfigurationError(OsdError):
    """A required setting (API key, credentials...) is missing or unreadable"""

    exit_code = 3


class RemoteError(OsdError):
    """The catalog answered with a non-200 status"""

    exit_code = 4

    def __init__(self, status: int, body: str = "", url: Optional[str] = None):
        self.status = status
        self.body = body
        self.url = url
        super().__init__(f"Bad request: {status}, {body}" if body else f"Bad request: {status}")


class NoResultsError(OsdError):
    exit_code = 5


class EmptyCandidatesError(OsdError):
    """Resolution was asked to pick from an empty list"""

    exit_code = 5


class SelectionCancelled(OsdError):
    exit_code = 6


class ChooserUnavailable(OsdError):
    """The interactive selection backend cannot be started"""

    exit_code = 7


class DecodeError(OsdError):
    """A response did not have the expected JSON shape"""

    exit_code = 8


class FileIOError(OsdError):
    exit_code = 9


class RequestTimeout(OsdError):
    exit_code = 10


class NetworkError(OsdError):
    """Connection-level failure (DNS, refused connection, TLS...)"""

    exit_code = 11
