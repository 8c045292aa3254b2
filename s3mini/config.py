import os
from dataclasses import dataclass

from .errors import ConfigurationError

ACCESS_KEY_VAR = 'S3_ACCESS_KEY_ID'
SECRET_KEY_VAR = 'S3_SECRET_ACCESS_KEY'
HOST_VAR = 'S3_HOST'
TIMEOUT_VAR = 'S3_CONNECT_TIMEOUT'

DEFAULT_HOST = 's3.amazonaws.com'
DEFAULT_CONNECT_TIMEOUT = 10
SECRET_KEY_LENGTH = 40


@dataclass(frozen=True)
class Credentials:
    access_key: str
    secret_key: str

    def __post_init__(self):
        if not self.access_key:
            raise ConfigurationError(f"{ACCESS_KEY_VAR} is not set")
        if not self.secret_key:
            raise ConfigurationError(f"{SECRET_KEY_VAR} is not set")
        try:
            raw = self.secret_key.encode('ascii')
        except UnicodeEncodeError:
            raise ConfigurationError(f"{SECRET_KEY_VAR} must be ASCII") from None
        if len(raw) != SECRET_KEY_LENGTH:
            raise ConfigurationError(
                f"{SECRET_KEY_VAR} must be {SECRET_KEY_LENGTH} bytes long, got {len(raw)}"
            )


@dataclass(frozen=True)
class Config:
    credentials: Credentials
    host: str = DEFAULT_HOST
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT


def load_config(environ=None, host: str = None, connect_timeout: float = None) -> Config:
    """Build the client configuration from the environment.

    Explicit ``host``/``connect_timeout`` arguments win over the environment.
    Raises ConfigurationError when the credentials are missing or invalid.
    """
    env = os.environ if environ is None else environ

    credentials = Credentials(
        access_key=env.get(ACCESS_KEY_VAR, ''),
        secret_key=env.get(SECRET_KEY_VAR, ''),
    )

    host = host or env.get(HOST_VAR) or DEFAULT_HOST
    if connect_timeout is None:
        raw_timeout = env.get(TIMEOUT_VAR)
        try:
            connect_timeout = float(raw_timeout) if raw_timeout else DEFAULT_CONNECT_TIMEOUT
        except ValueError:
            raise ConfigurationError(f"{TIMEOUT_VAR} must be a number, got '{raw_timeout}'") from None
    if connect_timeout <= 0:
        raise ConfigurationError('Connect timeout must be positive')

    return Config(credentials=credentials, host=host.rstrip('/'), connect_timeout=connect_timeout)
