import pytest
from pymongo.errors import ServerSelectionTimeoutError

from src.app.config.database import mongodb_database
from src.app.models.domain.error import Error
from src.app.repositories.error_repository import ErrorRepo
from src.app.repositories.llm_usage_repository import LLMUsageRepository


class FakeCollection:
    def __init__(self, fail=False):
        self.fail = fail
        self.documents = []

    async def insert_one(self, document):
        if self.fail:
            raise ServerSelectionTimeoutError("no servers")
        self.documents.append(document)


@pytest.fixture
def collections(monkeypatch):
    created = {}

    def get_collection(name):
        return created.setdefault(name, FakeCollection())

    monkeypatch.setattr(mongodb_database, "get_collection", get_collection)
    return created


@pytest.mark.asyncio
async def test_error_record_is_stored(collections):
    await ErrorRepo().insert_error(Error("bad reply", source="Tests"))

    record = collections["error_logs"].documents[0]
    assert record["error_message"] == "bad reply"
    assert record["source"] == "Tests"
    assert record["request_id"] == "None"


@pytest.mark.asyncio
async def test_llm_usage_is_stored(collections):
    await LLMUsageRepository().add_llm_usage({"model": "gemini-2.5-flash", "total_tokens": 3})

    assert collections["llm_usage_logs"].documents == [
        {"model": "gemini-2.5-flash", "total_tokens": 3}
    ]


@pytest.mark.asyncio
async def test_unreachable_database_does_not_raise(monkeypatch):
    monkeypatch.setattr(
        mongodb_database, "get_collection", lambda name: FakeCollection(fail=True)
    )

    await ErrorRepo().insert_error(Error("bad reply"))
    await LLMUsageRepository().add_llm_usage({"model": "gemini-2.5-flash"})
