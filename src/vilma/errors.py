import httplib2
from google.auth.exceptions import RefreshError, TransportError
from googleapiclient.errors import HttpError


class VilmaError(Exception):
    """Base class for errors raised by vilma."""


class ConfigError(VilmaError):
    pass


class AuthError(VilmaError):
    pass


class FetchError(VilmaError):
    """Event not found, ambiguous, or the calendar request failed."""


class FormatError(VilmaError):
    pass


class TemplateError(VilmaError):
    """Template missing or could not be rendered."""


class SendError(VilmaError):
    pass


class StorageError(VilmaError):
    pass


class DeleteError(VilmaError):
    pass


# Failures of a single Google API request, from the HTTP answer down to the socket.
API_ERRORS = (HttpError, httplib2.HttpLib2Error, TransportError, RefreshError, OSError)
