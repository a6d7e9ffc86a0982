import json
import logging as log
from http import HTTPStatus
from typing import Any, Callable, Dict, List, Optional, Union

import requests

from config.app_vars import (
    PIKNDEL_BASE_URL,
    PIKNDEL_PASSWORD,
    PIKNDEL_REQUEST_TIMEOUT,
    PIKNDEL_USERNAME,
)
from serializers.order_serializer import build_order_request
from utils.envelope import build_control
from utils.exceptions import (
    BadRequestError,
    InputValidationError,
    MissingCredentialsError,
    NetworkError,
    ProviderServerError,
    TokenMissingError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from utils.token_store import TokenStore, token_store

LOGIN_PATH = "/backoffice/api/account/login"
PLACE_ORDER_PATH = "/backoffice/api/pikndel/place_order"
ORDER_STATUS_PATH = "/backoffice/api/pikndel/order/get_status"

LOGIN_VERSION = "1.3"
PLACE_ORDER_VERSION = "3.2"
ORDER_STATUS_VERSION = "1"


def _dumps(data: Any) -> str:
    try:
        return json.dumps(data)
    except (TypeError, ValueError):
        return str(data)


def _message(data: Any) -> Optional[str]:
    if isinstance(data, dict):
        return data.get("Message")
    return None


class PikndelClient:
    """
    Thin wrapper around the PIKNDEL REST API that:
     1. Injects the Control envelope into every request body.
     2. Attaches the Bearer token when one is cached.
     3. Maps PIKNDEL status codes to PikndelError subclasses.
    """

    def __init__(
        self,
        base_url: str = PIKNDEL_BASE_URL,
        tokens: Optional[TokenStore] = None,
        http: Any = None,
        timeout: float = PIKNDEL_REQUEST_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.tokens = tokens if tokens is not None else token_store
        # Anything exposing requests.request(method, url, json=, headers=, timeout=)
        self.http = http if http is not None else requests
        self.timeout = timeout

    def request(
        self,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        method: str = "post",
        version: Union[str, int, float] = 1,
        auth: bool = True,
        wrap_in_data: bool = False,
    ):
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        token = self.tokens.get()
        if auth and token:
            headers["Authorization"] = f"Bearer {token}"

        data = data or {}
        # Login and order endpoints wrap the payload in Data:{}, others spread it
        if wrap_in_data:
            body = {"Control": build_control(version), "Data": data}
        else:
            body = {"Control": build_control(version), **data}

        try:
            response = self.http.request(
                method=method.upper(),
                url=f"{self.base_url}{path}",
                json=body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise NetworkError(f"Network error calling PIKNDEL [{path}]: {e}") from e

        return self.handle_response(response)

    def handle_response(self, response):
        status = response.status_code
        try:
            data = response.json()
        except ValueError:
            data = response.text

        if status == HTTPStatus.OK:
            return data

        if status == HTTPStatus.BAD_REQUEST:
            raise BadRequestError(
                f"PIKNDEL Bad Request (400): {_message(data) or _dumps(data)}",
                pikndel_data=data,
            )

        if status == HTTPStatus.UNAUTHORIZED:
            # Stale token, force a fresh login
            self.tokens.clear()
            raise UnauthorizedError(
                f"PIKNDEL Unauthorized (401): {_message(data) or 'Invalid or expired token.'}",
                pikndel_data=data,
            )

        if status == HTTPStatus.INTERNAL_SERVER_ERROR:
            raise ProviderServerError(
                f"PIKNDEL Internal Server Error (500): {_message(data) or _dumps(data)}",
                pikndel_data=data,
            )

        raise UnexpectedStatusError(
            f"PIKNDEL Unexpected Response ({status}): {_dumps(data)}",
            status_code=status,
            pikndel_data=data,
        )


def _lookup(*keys: str) -> Callable[[Any], Any]:
    def extract(response: Any):
        value = response
        for key in keys:
            if not isinstance(value, dict):
                return None
            value = value.get(key)
        return value

    return extract


class Pikndel:
    """PIKNDEL operations used by the order routes."""

    status_labels = {
        "NEW": "Order Created",
        "PCK": "Parcel Picked Up",
        "OFD": "Out for Delivery",
        "DLD": "Delivered",
        "RTO": "Return to Origin Initiated",
        "RTN": "Returned",
        "CAN": "Cancelled",
    }

    # Login responses differ between API versions; the first hit wins
    token_lookups: List[Callable[[Any], Any]] = [
        _lookup("Data", "Token"),
        _lookup("Token"),
        _lookup("token"),
        _lookup("access_token"),
    ]
    user_id_lookups: List[Callable[[Any], Any]] = [
        _lookup("Data", "UserId"),
        _lookup("UserId"),
    ]

    def __init__(
        self,
        client: Optional[PikndelClient] = None,
        username: Optional[str] = PIKNDEL_USERNAME,
        password: Optional[str] = PIKNDEL_PASSWORD,
    ):
        self.client = client if client is not None else PikndelClient()
        self.username = username
        self.password = password

    @classmethod
    def readable_status(cls, short_code: Any):
        if not isinstance(short_code, str):
            return short_code
        return cls.status_labels.get(short_code, short_code)

    @staticmethod
    def _first(lookups: List[Callable[[Any], Any]], response: Any):
        for lookup in lookups:
            value = lookup(response)
            if value:
                return value
        return None

    def login(self, username: Optional[str] = None, password: Optional[str] = None):
        """
        Authenticate with PIKNDEL and cache the returned token.

        :param username: Defaults to PIKNDEL_USERNAME.
        :param password: Defaults to PIKNDEL_PASSWORD.
        :return: {"token", "userId", "name"}
        """
        username = username or self.username
        password = password or self.password
        if not username or not password:
            raise MissingCredentialsError(
                "PIKNDEL credentials are missing. Set PIKNDEL_USERNAME and PIKNDEL_PASSWORD."
            )

        response = self.client.request(
            path=LOGIN_PATH,
            version=LOGIN_VERSION,
            auth=False,
            wrap_in_data=True,
            data={
                "Username": username,
                "Password": password,
                "GrantType": "password",
            },
        )

        token = self._first(self.token_lookups, response)
        if not token:
            raise TokenMissingError(
                "Login succeeded but no JWT token was returned by PIKNDEL.",
                pikndel_data=response,
            )

        self.client.tokens.set(token)
        user_id = self._first(self.user_id_lookups, response)
        log.info(f"PIKNDEL authentication successful. UserId={user_id}. Token cached.")
        return {
            "token": token,
            "userId": user_id,
            "name": _lookup("Data", "Name")(response) or None,
        }

    def place_order(self, payload: Dict[str, Any]):
        """Validate, translate and submit an order. Returns PIKNDEL's confirmation as is."""
        body = build_order_request(payload)
        return self.client.request(
            path=PLACE_ORDER_PATH,
            version=PLACE_ORDER_VERSION,
            wrap_in_data=True,
            data=body,
        )

    def get_order_status(self, awb_no: str):
        if not awb_no:
            raise InputValidationError("getOrderStatus: AWBNo is required.")

        return self.client.request(
            path=ORDER_STATUS_PATH,
            version=ORDER_STATUS_VERSION,
            wrap_in_data=True,
            data={"AWBNo": awb_no},
        )


pikndel = Pikndel()


def get_pikndel() -> Pikndel:
    return pikndel
