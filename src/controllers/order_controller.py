import logging as log
from http import HTTPStatus
from typing import Optional

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.concurrency import run_in_threadpool

from serializers import LoginRequest
from utils.exceptions import PikndelError
from utils.helpers import send_error, send_success
from utils.pikndel import Pikndel


async def login(payload: Optional[LoginRequest], service: Pikndel):
    try:
        payload = payload or LoginRequest()
        res = await run_in_threadpool(service.login, payload.username, payload.password)
        return send_success(res)

    except PikndelError as e:
        log.error(f"[Route /auth/login] {e.message}")
        return send_error(e)
    except Exception as e:
        log.exception(f"[Route /auth/login] {e}")
        return send_error(e)


async def place_order(req: Request, service: Pikndel):
    try:
        body = await req.body()
        payload = await req.json() if body else {}
        res = await run_in_threadpool(service.place_order, payload)
        return send_success(res, HTTPStatus.OK)

    except PikndelError as e:
        log.error(f"[Route /orders/place] {e.message}")
        return send_error(e)
    except Exception as e:
        log.exception(f"[Route /orders/place] {e}")
        return send_error(e)


async def get_order_status(req: Request, service: Pikndel):
    try:
        body = await req.body()
        payload = await req.json() if body else {}
        awb_no = payload.get("AWBNo") if isinstance(payload, dict) else None
        if not awb_no:
            return ORJSONResponse(
                content={"success": False, "error": "AWBNo is required in request body."},
                status_code=HTTPStatus.BAD_REQUEST,
            )

        res = await run_in_threadpool(service.get_order_status, awb_no)
        return send_success(res)

    except PikndelError as e:
        log.error(f"[Route /orders/status] {e.message}")
        return send_error(e)
    except Exception as e:
        log.exception(f"[Route /orders/status] {e}")
        return send_error(e)
