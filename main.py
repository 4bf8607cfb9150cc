import logging
import os

from fastapi import FastAPI
from pymongo import MongoClient

from handlers import chat_handler, connection_handler, history_handler
from lib.llm.openrouter import DEFAULT_BASE_URL, OpenRouterClient
from lib.reply_generator import DEFAULT_MODELS, ReplyGenerator
from lib.storage.history import HistoryStorage

logging.basicConfig(
    level=logging.DEBUG if os.getenv("REPLY_TRACE") == "1" else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("main")

app = FastAPI(title="Audit Reply", description="Drafts three audit replies to an audited party's statement")

app.include_router(chat_handler.router, prefix="/api")
app.include_router(connection_handler.router, prefix="/api")
app.include_router(history_handler.router, prefix="/api")

client = OpenRouterClient(
    os.getenv("OPENROUTER_API_KEY"),
    base_url=os.getenv("OPENROUTER_API_BASE_URL", DEFAULT_BASE_URL),
    referer=os.getenv("OPENROUTER_REFERER"),
)
if client.configured:
    models = [m.strip() for m in os.getenv("OPENROUTER_MODELS", "").split(",") if m.strip()]
    app.state.generator = ReplyGenerator(client, models=models or DEFAULT_MODELS)
else:
    logger.error("OPENROUTER_API_KEY is not set, reply generation is disabled")
    app.state.generator = None

mongodb_url = os.getenv("MONGODB_URL")
if mongodb_url:
    mongo_client = MongoClient(mongodb_url)
    history_storage = HistoryStorage(mongo_client[os.getenv("MONGODB_DB", "audit_reply")])
    history_storage.prepare()
    app.state.history_storage = history_storage
else:
    logger.info("MONGODB_URL is not set, history is disabled")
    app.state.history_storage = None

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
