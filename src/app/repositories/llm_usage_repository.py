from typing import Any, Dict

from pymongo.errors import PyMongoError

from src.app.config.database import mongodb_database
from src.app.config.settings import settings
from src.app.utils.logging_utils import loggers


class LLMUsageRepository:
    def __init__(self) -> None:
        self.collection_name = settings.LLM_USAGE_COLLECTION_NAME

    async def add_llm_usage(self, llm_usage: Dict[str, Any]) -> None:
        try:
            collection = mongodb_database.get_collection(self.collection_name)
            await collection.insert_one(dict(llm_usage))
        except PyMongoError as e:
            loggers["gemini"].warning(
                f"Could not store LLM usage in MongoDB: {str(e)}"
            )
