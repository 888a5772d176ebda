import json

from tests.fakes import failing_responder


def test_root(test_client):
    response = test_client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Workflow Generation API is running"}


def test_request_id_is_echoed(test_client):
    response = test_client.get("/", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"


def test_generate_json(test_client, fake_gemini):
    fake_gemini.responder = lambda model, messages: "Here's the code:\n```xml\n<json:object/>\n```"

    response = test_client.post(
        "/api/generate/json", json={"prompt": '{"id": 1}', "systemPrompt": "Be strict."}
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": "Here's the code:\n```xml\n<json:object/>\n```",
    }
    assert fake_gemini.calls[0]["messages"][0] == {"role": "system", "content": "Be strict."}


def test_rewrite(test_client, fake_gemini):
    fake_gemini.responder = lambda model, messages: "return a + b;"

    response = test_client.post(
        "/api/rewrite",
        json={"code": "int add(int a, int b) {", "instructions": "}", "language": "Java"},
    )

    assert response.status_code == 200
    assert response.json()["data"] == "return a + b;"


def test_deluge(test_client, fake_gemini):
    fake_gemini.responder = lambda model, messages: 'info "hi";'

    response = test_client.post("/api/deluge", json={"prompt": "say hi"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": 'info "hi";'}


def test_create_actions_requires_service_and_prompt(test_client, fake_gemini):
    response = test_client.post("/api/create/actions", json={"serviceName": "Slack"})

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "serviceName and userPrompt are required",
    }
    assert fake_gemini.calls == []


def test_create_actions_with_action_object(test_client, fake_gemini):
    action = {
        "action_id": 2000000187506,
        "action_type": "SEND",
        "display_name": "Send Message",
        "link_name": "send_message",
        "type": "SEND",
    }
    fake_gemini.responder = lambda model, messages: json.dumps(action)

    response = test_client.post(
        "/api/create/actions",
        json={"serviceName": "Slack", "userPrompt": "add Send Message action", "uniqueName": "u1"},
    )

    body = response.json()
    assert response.status_code == 200
    assert body["success"] is True
    assert body["action"]["uniqueName"] == "u1"
    assert body["message"] == "Action 'Send Message' created successfully for service 'Slack'"


def test_create_actions_with_explanation(test_client, fake_gemini):
    fake_gemini.responder = lambda model, messages: "Slack is a messaging tool."

    response = test_client.post(
        "/api/create/actions", json={"serviceName": "Slack", "userPrompt": "what is Slack"}
    )

    assert response.json() == {
        "success": True,
        "action": None,
        "message": "Slack is a messaging tool.",
    }


def test_provider_failure_is_a_500_envelope(test_client, fake_gemini):
    fake_gemini.responder = failing_responder

    response = test_client.post("/api/deluge", json={"prompt": "say hi"})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Gemini is unavailable"}
