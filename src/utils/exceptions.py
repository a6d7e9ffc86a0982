from http import HTTPStatus
from typing import Any, Optional


class PikndelError(Exception):
    """Base error for everything the PIKNDEL integration reports to callers.

    :param message: Human readable error message.
    :param status_code: HTTP status the error is rendered with.
    :param pikndel_data: Raw response body from PIKNDEL, when one was received.
    """

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        pikndel_data: Any = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.pikndel_data = pikndel_data


class InputValidationError(PikndelError):
    status_code = HTTPStatus.BAD_REQUEST


class NetworkError(PikndelError):
    pass


class BadRequestError(PikndelError):
    status_code = HTTPStatus.BAD_REQUEST


class UnauthorizedError(PikndelError):
    status_code = HTTPStatus.UNAUTHORIZED


class ProviderServerError(PikndelError):
    pass


class UnexpectedStatusError(PikndelError):
    pass


class MissingCredentialsError(PikndelError):
    pass


class TokenMissingError(PikndelError):
    pass
