import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from lib.llm.errors import LLMAuthError, NoModelAvailableError
from lib.reply_generator import ReplyGenerator
from lib.storage.history import HistoryStorage


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    counterpart_message: Optional[str] = Field(default=None, alias="counterpartMessage")
    intensity_level: Optional[int] = Field(default=None, alias="intensityLevel", ge=1, le=10)
    stream: bool = False


router = APIRouter()
logger = logging.getLogger("chat")


def get_generator(request: Request) -> Optional[ReplyGenerator]:
    return getattr(request.app.state, "generator", None)


def get_history_storage(request: Request) -> Optional[HistoryStorage]:
    return getattr(request.app.state, "history_storage", None)


@router.post("/chat")
def post_chat(
    request: ChatRequest,
    generator: Optional[ReplyGenerator] = Depends(get_generator),
    history_storage: Optional[HistoryStorage] = Depends(get_history_storage),
):
    """
    Generate three replies to the audited party's statement
    """
    if generator is None:
        raise HTTPException(status_code=500, detail="API密钥未配置")

    message = (request.counterpart_message or "").strip()
    if not message or request.intensity_level is None:
        raise HTTPException(status_code=400, detail="缺少必要参数")

    try:
        result = generator.generate(message, request.intensity_level, stream=request.stream)
    except LLMAuthError:
        raise HTTPException(status_code=401, detail="API密钥无效或已过期")
    except NoModelAvailableError as e:
        logger.error("Reply generation failed: %s", e)
        raise HTTPException(status_code=500, detail="所有可用的免费模型都无法使用")

    if history_storage is not None:
        try:
            history_storage.add(message, request.intensity_level, list(result.responses))
        except Exception as e:
            logger.warning("Can't save history entry. Info: %s", e)

    return {
        "success": True,
        "responses": list(result.responses),
        "model": result.model,
        "strategy": result.strategy,
    }
