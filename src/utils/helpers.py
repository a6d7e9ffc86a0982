import hmac
import json
from typing import Any, Optional

from fastapi.responses import ORJSONResponse

from config.database import SessionLocal
from models import WebhookResponse
from serializers import StatusPush
from utils.exceptions import PikndelError


def send_success(data: Any, status_code: int = 200):
    return ORJSONResponse(content={"success": True, "data": data}, status_code=status_code)


def send_error(err: Exception):
    if isinstance(err, PikndelError):
        return ORJSONResponse(
            content={
                "success": False,
                "error": err.message,
                "pikndelData": err.pikndel_data,
            },
            status_code=int(err.status_code),
        )
    return ORJSONResponse(
        content={"success": False, "error": str(err), "pikndelData": None},
        status_code=500,
    )


def secrets_match(incoming: Optional[str], expected: str) -> bool:
    return hmac.compare_digest(incoming.encode("utf-8"), expected.encode("utf-8"))


_BIGINT_MAX = 2**63 - 1


def _as_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
    # Out of range for the BIGINT column
    if not -_BIGINT_MAX <= number <= _BIGINT_MAX:
        return None
    return number


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value)


def save_webhook_response(push: StatusPush, payload: Any) -> WebhookResponse:
    """Insert one row for a status push. Repeated pushes create new rows."""
    with SessionLocal() as db:
        record = WebhookResponse(
            awb_no=_as_text(push.AWBNo),
            short_code=_as_text(push.short_code),
            activity=_as_text(push.activity),
            timestamp=_as_int(push.timestamp),
            raw_payload=payload,
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        db.expunge(record)
        return record
