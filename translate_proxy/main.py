"""
/**
 * @file translate_proxy/main.py
 * @description FastAPI 应用入口（MVC：仅装配路由与中间件）。
 */
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from translate_proxy.config import load_settings
from translate_proxy.controllers import health_router, translate_router
from translate_proxy.services import get_dispatcher
from translate_proxy.utils.body_limit import BodySizeLimitMiddleware

MAX_BODY_BYTES = 200 * 1024

settings = load_settings()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
access_logger = logging.getLogger("translate.access")

app = FastAPI(title="animday-api")


@app.on_event("startup")
async def startup_event():
    # fail at boot, not on the first request, when no backend is usable
    dispatcher = get_dispatcher()
    access_logger.info(f"animday-api ready on :{settings.port} ({len(dispatcher.backends)} backend(s))")


@app.middleware("http")
async def access_log(request: Request, call_next):
    start = time.monotonic()
    response = await call_next(request)
    elapsed = (time.monotonic() - start) * 1000
    length = response.headers.get("content-length", "-")
    access_logger.info(f"{request.method} {request.url.path} {response.status_code} {length} - {elapsed:.3f} ms")
    return response


app.add_middleware(BodySizeLimitMiddleware, max_bytes=MAX_BODY_BYTES)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(translate_router)
