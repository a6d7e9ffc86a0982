import logging
from contextlib import asynccontextmanager
from http import HTTPStatus

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.app_vars import LOG_LEVEL, PORT, SERVICE_NAME
from config.database import init_db
from routers import order_router, webhook_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("fastapi")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if init_db():
        logger.info("Database connected, webhook table ready")
    yield


app = FastAPI(lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)


@app.get("/health")
def health_check():
    return ORJSONResponse(
        content={"status": "ok", "service": SERVICE_NAME}, status_code=HTTPStatus.OK
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == HTTPStatus.NOT_FOUND:
        return ORJSONResponse(
            content={"success": False, "error": "Route not found."},
            status_code=HTTPStatus.NOT_FOUND,
        )
    return ORJSONResponse(
        content={"success": False, "error": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    logger.warning(f"[Validation Error] {request.url.path} {errors}")
    return ORJSONResponse(
        content={
            "success": False,
            "error": f"Invalid request: {errors}",
            "pikndelData": None,
        },
        status_code=HTTPStatus.BAD_REQUEST,
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"[Global Error] {exc}", exc_info=exc)
    return ORJSONResponse(
        content={"success": False, "error": str(exc)},
        status_code=getattr(exc, "status_code", HTTPStatus.INTERNAL_SERVER_ERROR),
    )


app.include_router(order_router)
# PIKNDEL pushes status updates to /webhooks/pikndel/status
app.include_router(webhook_router)


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=PORT)
