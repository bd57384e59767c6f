from __future__ import annotations


class UploaderError(Exception):
    """Base error for the gateway uploader.

    ``message`` is what a user gets to see; ``cause`` keeps the underlying
    exception around for diagnostics even when the message is generic.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigMissingError(UploaderError):
    def __init__(self, message: str = "Can't find goflet options") -> None:
        super().__init__(message)


class InvalidConfigError(UploaderError):
    pass


class TokenIssuanceError(UploaderError):
    pass


class InvalidPayloadError(UploaderError):
    pass


class AuthFailedError(UploaderError):
    pass


class ServerError(UploaderError):
    pass


class ClientClosedError(UploaderError):
    def __init__(self) -> None:
        super().__init__("Client is closed")


__all__ = [
    "UploaderError",
    "ConfigMissingError",
    "InvalidConfigError",
    "TokenIssuanceError",
    "InvalidPayloadError",
    "AuthFailedError",
    "ServerError",
    "ClientClosedError",
]
