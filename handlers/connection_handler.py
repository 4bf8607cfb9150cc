import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from handlers.chat_handler import get_generator
from lib.llm.errors import LLMAuthError, LLMError, LLMRateLimitError, LLMServerError
from lib.reply_generator import ReplyGenerator

router = APIRouter()
logger = logging.getLogger("connection_check")


@router.get("/test")
def get_connection_check(generator: Optional[ReplyGenerator] = Depends(get_generator)):
    """
    Send a probe prompt to the first configured model to verify the API key and connectivity
    """
    if generator is None:
        return JSONResponse(status_code=500, content={"success": False, "error": "API密钥未配置"})

    try:
        model, reply = generator.check_connection()
    except LLMAuthError as e:
        return _failure(e, 401, "API密钥无效或已过期，请检查 OPENROUTER_API_KEY 环境变量")
    except LLMRateLimitError as e:
        return _failure(e, 429, "请求频率限制，请稍后重试")
    except LLMServerError as e:
        return _failure(e, e.status or 502, "OpenRouter服务器错误，请稍后重试")
    except LLMError as e:
        return _failure(e, e.status or 500, f"API请求失败: {e}")

    logger.info("Connection check succeeded with model %s", model)
    return {"success": True, "data": {"model": model, "response": reply}}


def _failure(error: LLMError, status_code: int, message: str) -> JSONResponse:
    logger.error("Connection check failed: %s", error)
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})
