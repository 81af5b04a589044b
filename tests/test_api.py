import pytest
from fastapi.testclient import TestClient

from tests.stubs import UNIFORM_PARAGRAPH, VARIED_REWRITE, CrashingGenerator, FailingGenerator, ScriptedGenerator
from textcraft import main
from textcraft.main import app
from textcraft.services.comparator import SUMMARY_STRONG
from textcraft.services.gateway import get_generator


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _use_generator(generator) -> None:
    app.dependency_overrides[get_generator] = lambda: generator


def test_healthz_sets_trace_and_security_headers(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["x-trace-id"]
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_detect_scores_uniform_paragraph(client):
    response = client.post("/v1/detect", json={"text": UNIFORM_PARAGRAPH})

    assert response.status_code == 200
    body = response.json()
    assert body["verdict"] == "likely-ai"
    assert body["ai_probability"] == 70
    assert body["confidence"] == "low"
    assert body["signals"]["uniform_sentences"] is True
    assert body["latency_ms"] >= 0


def test_detect_rejects_short_text(client):
    response = client.post("/v1/detect", json={"text": "Too short to judge."})

    assert response.status_code == 422
    assert response.json()["detail"] == "Text too short for reliable AI detection (minimum 50 words)"


def test_detect_rejects_malformed_body(client):
    response = client.post("/v1/detect", json={"content": UNIFORM_PARAGRAPH})

    assert response.status_code == 422
    assert response.json()["trace_id"]


def test_insights_flags_uniform_sentences(client):
    response = client.post("/v1/insights", json={"text": UNIFORM_PARAGRAPH})

    assert response.status_code == 200
    body = response.json()
    assert len(body["sentences"]) == 5
    assert all(item["flags"] == ["uniform-length"] for item in body["sentences"])
    assert body["overall_suggestions"]


def test_insights_short_text_still_suggests(client):
    response = client.post("/v1/insights", json={"text": "SEO helps."})

    assert response.status_code == 200
    body = response.json()
    assert body["sentences"] == []
    assert body["overall_suggestions"]


def test_compare_reports_improvement(client):
    response = client.post("/v1/compare", json={"original": UNIFORM_PARAGRAPH, "rewritten": VARIED_REWRITE})

    assert response.status_code == 200
    body = response.json()
    assert body["improvement_score"] == 70
    assert body["humanization_score"] == 90
    assert body["summary"] == SUMMARY_STRONG
    assert body["confidence"] == "low"


def test_compare_identical_texts_shows_no_improvement(client):
    response = client.post("/v1/compare", json={"original": UNIFORM_PARAGRAPH, "rewritten": UNIFORM_PARAGRAPH})

    assert response.status_code == 200
    assert response.json()["improvement_score"] == 0


def test_compare_names_the_short_side(client):
    response = client.post("/v1/compare", json={"original": UNIFORM_PARAGRAPH, "rewritten": "Short."})

    assert response.status_code == 422
    assert response.json()["detail"].startswith("Rewritten too short")


def test_humanize_success(client):
    generator = ScriptedGenerator(VARIED_REWRITE)
    _use_generator(generator)

    response = client.post("/v1/humanize", json={"text": UNIFORM_PARAGRAPH, "mode": "human"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["validated"] is True
    assert body["output"] == VARIED_REWRITE
    assert body["retries_used"] == 1
    assert body["detection_before"]["ai_probability"] == 70
    assert body["detection_after"]["ai_probability"] == 0
    assert body["attempts"][0]["valid"] is True
    assert body["humanize_id"]


def test_humanize_invalid_input_is_error(client):
    generator = ScriptedGenerator(VARIED_REWRITE)
    _use_generator(generator)

    response = client.post("/v1/humanize", json={"text": "   "})

    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert body["output"] == ""
    assert generator.calls == []


def test_humanize_outage_returns_partial(client):
    _use_generator(FailingGenerator())

    response = client.post("/v1/humanize", json={"text": UNIFORM_PARAGRAPH})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "partial"
    assert body["fallback"] == "rule_based"
    assert body["output"]


def test_rewrite_sentence(client):
    _use_generator(ScriptedGenerator("Our audit found clearer headings doubled clicks."))

    response = client.post("/v1/rewrite-sentence", json={"sentence": " SEO helps. ", "hint": "Add an outcome."})

    assert response.status_code == 200
    assert response.json() == {
        "original": "SEO helps.",
        "rewritten": "Our audit found clearer headings doubled clicks.",
    }


def test_rewrite_sentence_generator_failure(client):
    _use_generator(FailingGenerator())

    response = client.post("/v1/rewrite-sentence", json={"sentence": "SEO helps."})

    assert response.status_code == 502


def test_rewrite_sentence_unexpected_generator_error(client):
    _use_generator(CrashingGenerator())

    response = client.post("/v1/rewrite-sentence", json={"sentence": "SEO helps."})

    assert response.status_code == 502


OVERSIZED_TEXT = " ".join([UNIFORM_PARAGRAPH] * 40)


@pytest.mark.parametrize(
    ("path", "payload"),
    [
        ("/v1/detect", {"text": OVERSIZED_TEXT}),
        ("/v1/insights", {"text": OVERSIZED_TEXT}),
        ("/v1/compare", {"original": OVERSIZED_TEXT, "rewritten": UNIFORM_PARAGRAPH}),
        ("/v1/compare", {"original": UNIFORM_PARAGRAPH, "rewritten": OVERSIZED_TEXT}),
    ],
)
def test_analysis_routes_reject_oversized_text(client, path, payload):
    response = client.post(path, json=payload)

    assert response.status_code == 422
    assert response.json()["detail"] == "Text too long (maximum 5000 characters)"


def test_run_serves_app_with_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

    main.run()

    assert calls == [
        (("textcraft.main:app",), {"host": main.settings.host, "port": main.settings.port, "log_config": None})
    ]
