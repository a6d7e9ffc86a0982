from typing import Optional

from fastapi import APIRouter, Depends, Request

from controllers import get_order_status, login, place_order
from serializers import LoginRequest
from utils.pikndel import Pikndel, get_pikndel

router = APIRouter(
    prefix="/orders",
    tags=["orders"],
    responses={404: {"description": "Not found"}},
)


@router.post("/auth/login", tags=["orders"])
async def handle_login(
    payload: Optional[LoginRequest] = None, service: Pikndel = Depends(get_pikndel)
):
    return await login(payload, service)


@router.post("/place", tags=["orders"])
async def handle_place_order(req: Request, service: Pikndel = Depends(get_pikndel)):
    return await place_order(req, service)


@router.post("/status", tags=["orders"])
async def handle_get_order_status(req: Request, service: Pikndel = Depends(get_pikndel)):
    return await get_order_status(req, service)


order_router = router
