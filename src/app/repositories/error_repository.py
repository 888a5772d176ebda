from pymongo.errors import PyMongoError

from src.app.config.database import mongodb_database
from src.app.config.settings import settings
from src.app.models.domain.error import Error
from src.app.utils.logging_utils import loggers


class ErrorRepo:
    def __init__(self) -> None:
        self.collection_name = settings.ERROR_COLLECTION_NAME

    async def insert_error(self, error: Error) -> None:
        """
        Persist an error record. A failing database is logged and
        never replaces the error being reported.
        """
        loggers["main"].error(f"[{error.source}] {error.error_message}")
        try:
            collection = mongodb_database.get_collection(self.collection_name)
            await collection.insert_one(error.to_dict())
        except PyMongoError as e:
            loggers["main"].warning(
                f"Could not store error record in MongoDB: {str(e)}"
            )
