import anyio
import pytest
from httpx import ASGITransport, AsyncClient

from docpilot.copilot.assistant import FALLBACK_REPLY
from docpilot.main import create_application

from .conftest import SAMPLE_SUMMARY, GatedProvider, ScriptedProvider


@pytest.fixture
def provider():
    return ScriptedProvider(
        summary=SAMPLE_SUMMARY,
        reply="| Month | Value |\n|---|---|\n| Jan | $12.0M |\n| Feb | $12.2M |\nSteady.",
    )


@pytest.fixture
def test_app(settings, provider):
    return create_application(
        settings, summary_provider=provider, chat_provider=provider
    )


def _client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")


@pytest.mark.anyio
async def test_healthz_endpoint(test_app):
    async with _client(test_app) as client:
        response = await client.get("/healthz")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["summary_model"] == "scripted-model"


@pytest.mark.anyio
async def test_dashboard_and_assets(test_app):
    async with _client(test_app) as client:
        dashboard = await client.get("/v1/dashboard")
        assets = await client.get("/v1/assets")
        single = await client.get("/v1/assets/2")
        missing = await client.get("/v1/assets/42")

    assert dashboard.status_code == 200
    assert dashboard.json()["total_aum_display"] == "$45.9M"
    assert len(assets.json()) == 3
    assert single.json()["name"] == "BlackRock Core Bond"
    assert missing.status_code == 404
    assert missing.json()["error"] == "not_found"


@pytest.mark.anyio
async def test_drafting_flow_upload_summarize_cite_export(test_app, provider):
    document = b"Quarterly letter: revenue grew 10% while risk increased."
    async with _client(test_app) as client:
        upload = await client.post(
            "/v1/drafting/document",
            files={"file": ("letter.txt", document, "text/plain")},
        )
        assert upload.status_code == 200
        assert upload.json()["file_name"] == "letter.txt"
        assert upload.json()["characters"] == len(document)

        summary = await client.post("/v1/drafting/summary")
        assert summary.status_code == 200
        assert summary.json()["sourceReference"] == "Pages 1-2"

        bullet = await client.post("/v1/drafting/citation/bullets/1")
        assert bullet.json() == {
            "title": "Executive Highlight",
            "snippet": "Risk increased",
            "page": 2,
        }

        metric = await client.post("/v1/drafting/citation/metrics/0")
        assert metric.json()["title"] == "Revenue Growth"
        assert metric.json()["page"] == "Pages 1-2"

        missing = await client.post("/v1/drafting/citation/metrics/5")
        assert missing.status_code == 404

        dismissed = await client.delete("/v1/drafting/citation")
        assert dismissed.status_code == 204
        active = await client.get("/v1/drafting/citation")
        assert active.json() is None

        export = await client.get("/v1/drafting/export")
        assert export.status_code == 200
        assert export.headers["content-type"].startswith("text/markdown")
        assert 'filename="Summary_letter.md"' in export.headers["content-disposition"]
        assert export.text.startswith("# Executive Summary: letter.txt")

    assert len(provider.generate_calls) == 1


@pytest.mark.anyio
async def test_short_document_is_rejected_without_model_call(test_app, provider):
    async with _client(test_app) as client:
        await client.post(
            "/v1/drafting/document",
            files={"file": ("tiny.md", b"hi", "text/markdown")},
        )
        response = await client.post("/v1/drafting/summary")
    assert response.status_code == 400
    assert response.json()["error"] == "document_too_short"
    assert provider.generate_calls == []


@pytest.mark.anyio
async def test_unsupported_upload(test_app):
    async with _client(test_app) as client:
        response = await client.post(
            "/v1/drafting/document",
            files={"file": ("deck.pptx", b"PK", "application/octet-stream")},
        )
    assert response.status_code == 415
    assert response.json()["error"] == "unsupported_document"


@pytest.mark.anyio
async def test_summary_failure_is_reported(settings):
    failing = ScriptedProvider(summary={"bullets": []})
    app = create_application(settings, summary_provider=failing, chat_provider=failing)
    async with _client(app) as client:
        await client.post(
            "/v1/drafting/document",
            files={"file": ("memo.txt", b"Plenty of text to summarize.", "text/plain")},
        )
        response = await client.post("/v1/drafting/summary")
        state = await client.get("/v1/drafting")
    assert response.status_code == 502
    assert response.json()["error"] == "summary_failed"
    assert state.json()["summary"] is None


@pytest.mark.anyio
async def test_export_without_summary_is_404(test_app):
    async with _client(test_app) as client:
        response = await client.get("/v1/drafting/export")
    assert response.status_code == 404


@pytest.mark.anyio
async def test_chat_turn_returns_formatted_reply(test_app):
    async with _client(test_app) as client:
        response = await client.post(
            "/v1/copilot/messages", json={"content": "Show Vanguard performance"}
        )
        transcript = await client.get("/v1/copilot/messages")

    assert response.status_code == 200
    body = response.json()
    assert body["user_message"]["content"] == "Show Vanguard performance"
    reply = body["reply"]
    assert reply["sources"] == ["Internal Portfolio API", "Institutional Risk Engine"]
    assert len(reply["data"]) == 6
    kinds = [block["kind"] for block in reply["blocks"]]
    assert kinds == ["table", "text"]
    assert reply["blocks"][0]["header"] == ["Month", "Value"]
    assert reply["blocks"][0]["rows"][0][1] == {"text": "$12.0M", "is_value": True}

    assert len(transcript.json()["messages"]) == 3


@pytest.mark.anyio
async def test_chat_failure_is_not_an_http_error(settings):
    failing = ScriptedProvider(error=RuntimeError("unavailable"))
    app = create_application(settings, summary_provider=failing, chat_provider=failing)
    async with _client(app) as client:
        response = await client.post("/v1/copilot/messages", json={"content": "Hi"})
    assert response.status_code == 200
    assert response.json()["reply"]["content"] == FALLBACK_REPLY


@pytest.mark.anyio
async def test_reset_session_and_suggestions(test_app):
    async with _client(test_app) as client:
        await client.post("/v1/copilot/messages", json={"content": "Hi"})
        reset = await client.delete("/v1/copilot/messages")
        suggestions = await client.get("/v1/copilot/suggestions")
    assert [m["id"] for m in reset.json()["messages"]] == ["welcome"]
    assert len(suggestions.json()["suggestions"]) == 6


@pytest.mark.anyio
async def test_invalid_chat_body_structured(test_app):
    async with _client(test_app) as client:
        response = await client.post("/v1/copilot/messages", json={"text": "Hi"})
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


@pytest.mark.anyio
async def test_reset_during_pending_turn_is_conflict(settings):
    provider = GatedProvider(reply="Vanguard is up 2%")
    app = create_application(settings, summary_provider=None, chat_provider=provider)
    responses = {}

    async with _client(app) as client:

        async def send():
            responses["send"] = await client.post(
                "/v1/copilot/messages", json={"content": "hello vanguard"}
            )

        async with anyio.create_task_group() as tg:
            tg.start_soon(send)
            await provider.started.wait()
            responses["reset"] = await client.delete("/v1/copilot/messages")
            provider.release.set()

    assert responses["reset"].status_code == 409
    assert responses["reset"].json()["error"] == "operation_in_flight"
    body = responses["send"].json()
    assert body["user_message"]["content"] == "hello vanguard"
    assert body["reply"]["content"] == "Vanguard is up 2%"
