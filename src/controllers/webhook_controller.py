import json
import logging as log
from http import HTTPStatus

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.concurrency import run_in_threadpool

from config import app_vars
from serializers import StatusPush
from utils.helpers import save_webhook_response, secrets_match
from utils.pikndel import Pikndel

SECRET_HEADER = "x-pikndel-secret"


def verify_webhook_secret(req: Request):
    """
    PIKNDEL sends the shared secret in the ``x-pikndel-secret`` header.
    Returns an error response when the request must be rejected, else None.
    """
    expected_secret = app_vars.PIKNDEL_WEBHOOK_SECRET

    # No secret configured: local development only
    if not expected_secret:
        log.warning("[PIKNDEL Webhook] PIKNDEL_WEBHOOK_SECRET not set - skipping auth check.")
        return None

    incoming_secret = req.headers.get(SECRET_HEADER)

    if not incoming_secret:
        log.warning("[PIKNDEL Webhook] Rejected - missing x-pikndel-secret header.")
        return ORJSONResponse(
            content={
                "success": False,
                "error": "Unauthorized: missing webhook secret header.",
            },
            status_code=HTTPStatus.UNAUTHORIZED,
        )

    if not secrets_match(incoming_secret, expected_secret):
        log.warning("[PIKNDEL Webhook] Rejected - invalid secret.")
        return ORJSONResponse(
            content={"success": False, "error": "Unauthorized: invalid webhook secret."},
            status_code=HTTPStatus.UNAUTHORIZED,
        )

    log.info("[PIKNDEL Webhook] Webhook secret verified.")
    return None


def store_status_push(push: StatusPush, payload):
    """
    Best-effort save. The push is acknowledged whether or not this succeeds,
    so failures are only logged.
    """
    try:
        record = save_webhook_response(push, payload)
        log.info(f"[PIKNDEL Webhook] Saved status push as record {record.id}")
        return record
    except Exception as e:
        log.error(f"[PIKNDEL Webhook] Failed to save status push: {e}", exc_info=True)
        return None


async def process_status_push(req: Request):
    rejected = verify_webhook_secret(req)
    if rejected is not None:
        return rejected

    try:
        body = await req.body()
        payload = await req.json() if body else {}
        push = StatusPush.from_payload(payload)

        log.info(
            "[PIKNDEL Webhook] Incoming status update "
            f"AWBNo={push.AWBNo} short_code={push.short_code} "
            f"activity={push.activity} timestamp={push.timestamp}"
        )
        log.info(f"[PIKNDEL Webhook] Full payload: {json.dumps(payload, indent=2)}")

        readable_status = Pikndel.readable_status(push.short_code)
        log.info(f"[PIKNDEL Webhook] Status: {readable_status} - {push.activity}")

        await run_in_threadpool(store_status_push, push, payload)

        # Always acknowledge so PIKNDEL does not retry
        return ORJSONResponse(
            content={"success": True, "message": "Webhook received and saved."},
            status_code=HTTPStatus.OK,
        )

    except Exception as e:
        log.error(f"[PIKNDEL Webhook] Error processing payload: {e}")
        return ORJSONResponse(
            content={"success": False, "error": "Webhook handler error."},
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        )
