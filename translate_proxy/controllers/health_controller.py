"""
/**
 * @file translate_proxy/controllers/health_controller.py
 * @description 服务标识与健康检查控制器。
 */
"""

from fastapi import APIRouter

from translate_proxy.services import get_dispatcher


SERVICE_NAME = "animday-api"

router = APIRouter()


@router.get("/")
def root():
    return {"ok": True, "service": SERVICE_NAME}


@router.get("/health")
def health():
    dispatcher = get_dispatcher()
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "backends": list(dispatcher.backends),
        "timeout_ms": dispatcher.timeout_ms,
        "cache": dispatcher.cache.stats(),
    }
