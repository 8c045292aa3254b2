"""Error types raised by the s3mini client."""


class S3MiniError(Exception):
    """Base class for every error raised by s3mini."""


class ConfigurationError(S3MiniError):
    """Credentials or settings are missing or invalid."""


class InvalidInvocation(S3MiniError):
    """An operation was called with arguments it cannot act on."""


class MissingRequiredField(InvalidInvocation):
    def __init__(self, field: str):
        super().__init__(f"Missing required field '{field}'")
        self.field = field


class UnsupportedVerb(InvalidInvocation):
    def __init__(self, verb: str):
        super().__init__(f"Unsupported HTTP verb '{verb}'")
        self.verb = verb


class SourceNotFound(InvalidInvocation):
    def __init__(self, path: str):
        super().__init__(f"Local file '{path}' not found")
        self.path = path


class TransportError(S3MiniError):
    """The request could not be sent or the server answered with an error.

    Attributes:
        status_code: HTTP status of the response, None when no response
            was received (connection failure, timeout).
        code: S3 error code from the response body (e.g. "NoSuchKey"),
            when the server sent one.
    """

    def __init__(self, message: str, status_code: int = None, code: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
