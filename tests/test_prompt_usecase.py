import json

import pytest
from fastapi import HTTPException

from src.app.usecases.prompt_usecase.prompt_usecase import PromptUseCase

from tests.fakes import FakeErrorRepo, FakeGeminiService

ACTION = {
    "action_id": 2000000187506,
    "action_type": "FETCH",
    "display_name": "Fetch Message",
    "link_name": "fetch_message",
    "type": "FETCH",
    "disabled": False,
}


def make_usecase(*replies):
    return PromptUseCase(
        gemini_service=FakeGeminiService(replies=list(replies)),
        error_repo=FakeErrorRepo(),
    )


@pytest.mark.asyncio
async def test_json_mapping_without_system_prompt():
    usecase = make_usecase("Here's the code:")

    result = await usecase.generate_json_mapping(None, '{"id": 1}')

    assert result == "Here's the code:"
    messages = usecase.gemini_service.calls[0]["messages"]
    assert [m["role"] for m in messages] == ["user"]
    assert messages[0]["content"].startswith("create json jsob object. ")
    assert "${JSON_PATH}" in messages[0]["content"]
    assert messages[0]["content"].endswith('{"id": 1}')


@pytest.mark.asyncio
async def test_json_mapping_with_system_prompt():
    usecase = make_usecase("ok")

    await usecase.generate_json_mapping("Be strict.", "{}")

    messages = usecase.gemini_service.calls[0]["messages"]
    assert messages[0] == {"role": "system", "content": "Be strict."}


@pytest.mark.asyncio
async def test_rewrite_formats_language():
    usecase = make_usecase("return a + b;", "x = 1")

    await usecase.rewrite("int add(int a, int b) {", "}", "Java")
    await usecase.rewrite("x = ", "", "")

    first, second = usecase.gemini_service.calls
    assert first["messages"][0]["content"].startswith("You are a Java programmer")
    assert first["messages"][1]["content"] == "int add(int a, int b) {<FILL_ME>}"
    assert second["messages"][0]["content"].startswith("You are a programmer")


@pytest.mark.asyncio
async def test_generate_script_defaults_to_deluge():
    usecase = make_usecase("info now;")

    result = await usecase.generate_script("print the current time")

    assert result == "info now;"
    messages = usecase.gemini_service.calls[0]["messages"]
    assert messages[0]["content"].startswith("You are a Deluge programming expert")
    assert messages[1]["content"] == "Generate a complete Deluge script for: print the current time"


@pytest.mark.asyncio
async def test_create_action_returns_action_object():
    usecase = make_usecase("```json\n" + json.dumps(ACTION) + "\n```")

    result = await usecase.create_action("Slack", "create Fetch Message action", "slack_1")

    assert result["action"]["link_name"] == "fetch_message"
    assert result["action"]["uniqueName"] == "slack_1"
    assert result["message"] == "Action 'Fetch Message' created successfully for service 'Slack'"


@pytest.mark.asyncio
async def test_create_action_returns_explanation_text():
    text = "Slack is a messaging platform. Would you like to add an action?"
    usecase = make_usecase(text)

    result = await usecase.create_action("Slack", "what is Slack")

    assert result == {"action": None, "message": text}


@pytest.mark.asyncio
async def test_create_action_rejects_incomplete_action():
    incomplete = {"action_id": 1, "display_name": "Fetch Message"}
    usecase = make_usecase(json.dumps(incomplete))

    with pytest.raises(HTTPException) as exc_info:
        await usecase.create_action("Slack", "create Fetch Message action")

    assert exc_info.value.status_code == 500
    assert "action_type" in exc_info.value.detail
    assert len(usecase.error_repo.errors) == 1
