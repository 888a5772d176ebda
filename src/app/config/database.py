from typing import Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from src.app.config.settings import settings
from src.app.utils.logging_utils import loggers


class MongoDBDatabase:
    def __init__(self) -> None:
        self.client: Optional[AsyncMongoClient] = None
        self.db: Optional[AsyncDatabase] = None

    def connect(self):
        # The client connects lazily, so this never blocks startup
        if self.client is None:
            self.client = AsyncMongoClient(
                settings.MONGODB_URL,
                serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
            )
            self.db = self.client[settings.MONGODB_DB_NAME]
            loggers["main"].info(
                f"MongoDB client created for database {settings.MONGODB_DB_NAME}"
            )

    async def disconnect(self):
        if self.client is not None:
            await self.client.close()
            self.client = None
            self.db = None
            loggers["main"].info("MongoDB client closed")

    def get_collection(self, collection_name: str):
        if self.db is None:
            self.connect()
        return self.db[collection_name]


mongodb_database = MongoDBDatabase()
