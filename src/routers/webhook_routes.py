from fastapi import APIRouter, Request

from controllers import process_status_push

router = APIRouter(
    prefix="/webhooks",
    tags=["webhook"],
    responses={404: {"description": "Not found"}},
)


@router.post("/pikndel/status", tags=["webhook"])
async def handle_status_push(req: Request):
    return await process_status_push(req)


webhook_router = router
