"""
/**
 * @file translate_proxy/controllers/translate_controller.py
 * @description 翻译控制器：POST /translate，缓存优先，多后端顺序回退。
 */
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException

from translate_proxy.models import TranslateResponse
from translate_proxy.services import TotalFailureError, ValidationError, translate_text


logger = logging.getLogger("translate.controller")

router = APIRouter()


@router.post("/translate", response_model=TranslateResponse, response_model_exclude_none=True)
def translate(payload: Any = Body(default=None)):
    try:
        return translate_text(payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail={"error": e.message})
    except TotalFailureError as e:
        raise HTTPException(status_code=502, detail=e.to_dict())
    except Exception as e:
        logger.exception("Unhandled error while translating")
        raise HTTPException(status_code=500, detail={"error": "server_error", "detail": str(e)})
