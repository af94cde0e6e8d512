"""
API tests for crawl scoring endpoints.
"""

from __future__ import annotations

from api.queue import QueueUnavailableError


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_score_crawl_returns_site_score_and_findings(client, page_payload):
    response = client.post("/crawls/crawl-1/score", json={"pages": [page_payload("home")]})

    assert response.status_code == 200
    data = response.json()
    assert data["crawlId"] == "crawl-1"
    assert [f["ruleId"] for f in data["findings"]] == [
        "hero_cta_missing",
        "headline_missing",
        "hero_image_missing",
        "social_proof_missing",
    ]
    assert data["findings"][0]["evidence"] == {
        "ctaCount": 0,
        "pageType": "home",
        "aboveFoldHeight": 800.0,
    }
    assert data["findings"][0]["severity"] == "high"
    assert data["siteScore"]["breakdown"] == {
        "performance": 100,
        "conversion": 0,
        "trust": 0,
        "mobile": None,
    }
    # 100 * 0.20 / (0.20 + 0.40 + 0.25)
    assert data["siteScore"]["overall"] == 24


def test_score_crawl_page_evaluations(client, page_payload):
    pages = [
        page_payload("home", page_id="home"),
        page_payload("cart", page_id="cart"),
    ]

    response = client.post("/crawls/crawl-1/score", json={"pages": pages})

    assert response.status_code == 200
    evaluations = response.json()["pages"]
    assert [e["pageId"] for e in evaluations] == ["home", "cart"]
    cart = evaluations[1]
    assert cart["pageType"] == "cart"
    # performance passes (15); shipping and trust signals are missing (0 of 20)
    assert (cart["pageScore"], cart["maxScore"]) == (15, 35)


def test_score_crawl_rejects_pages_from_another_crawl(client, page_payload):
    response = client.post(
        "/crawls/crawl-1/score",
        json={"pages": [page_payload("home", crawl_id="crawl-2")]},
    )

    assert response.status_code == 400
    assert "crawl-1" in response.json()["detail"]


def test_score_crawl_rejects_duplicate_page_ids(client, page_payload):
    response = client.post(
        "/crawls/crawl-1/score",
        json={"pages": [page_payload("home"), page_payload("product")]},
    )

    assert response.status_code == 400


def test_score_crawl_requires_pages(client):
    response = client.post("/crawls/crawl-1/score", json={"pages": []})

    assert response.status_code == 422


def test_score_crawl_with_only_unparseable_pages_is_422(client, page_payload):
    response = client.post("/crawls/crawl-1/score", json={"pages": [page_payload("blog")]})

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["rejectedPages"][0]["index"] == 0
    assert detail["rejectedPages"][0]["pageId"] == "page-1"
    assert any(e.startswith("type") for e in detail["rejectedPages"][0]["errors"])


def test_score_crawl_rejects_missing_metrics(client, page_payload):
    page = page_payload("home")
    del page["metrics"]["performance"]

    response = client.post("/crawls/crawl-1/score", json={"pages": [page]})

    assert response.status_code == 422


def test_unparseable_page_does_not_block_the_rest_of_the_crawl(client, page_payload):
    pages = [
        page_payload("home", page_id="home"),
        page_payload("blog", page_id="journal"),
        page_payload("cart", page_id="cart"),
    ]

    response = client.post("/crawls/crawl-1/score", json={"pages": pages})

    assert response.status_code == 200
    data = response.json()
    assert [e["pageId"] for e in data["pages"]] == ["home", "cart"]
    assert len(data["rejectedPages"]) == 1
    assert data["rejectedPages"][0]["index"] == 1
    assert data["rejectedPages"][0]["pageId"] == "journal"


def test_hero_image_without_size_is_scored_as_missing(client, page_payload):
    """A partially extracted hero image group is scored, not rejected."""
    pages = [
        page_payload("home", page_id="home"),
        page_payload("home", page_id="landing", heroImage={"src": "https://cdn.test/hero.jpg"}),
    ]

    response = client.post("/crawls/crawl-1/score", json={"pages": pages})

    assert response.status_code == 200
    data = response.json()
    assert data["rejectedPages"] == []
    landing = data["pages"][1]
    assert landing["pageId"] == "landing"
    assert "hero_image_missing" in [f["ruleId"] for f in landing["findings"]]


# --- background jobs ---


def test_enqueue_scoring_job(client, page_payload, monkeypatch):
    calls = []

    def fake_enqueue(crawl_id, pages):
        calls.append((crawl_id, pages))
        return "job-123"

    monkeypatch.setattr("api.services.scoring_service.enqueue_scoring_job", fake_enqueue)

    response = client.post("/crawls/crawl-1/score/jobs", json={"pages": [page_payload("home")]})

    assert response.status_code == 202
    assert response.json() == {
        "jobId": "job-123",
        "crawlId": "crawl-1",
        "status": "queued",
        "rejectedPages": [],
    }
    crawl_id, pages = calls[0]
    assert crawl_id == "crawl-1"
    assert pages[0]["crawlId"] == "crawl-1"
    assert pages[0]["metrics"]["aboveFold"]["height"] == 800


def test_enqueue_rejects_mismatched_crawl_before_queueing(client, page_payload, monkeypatch):
    calls = []
    monkeypatch.setattr(
        "api.services.scoring_service.enqueue_scoring_job",
        lambda crawl_id, pages: calls.append(crawl_id),
    )

    response = client.post(
        "/crawls/crawl-1/score/jobs",
        json={"pages": [page_payload("home", crawl_id="crawl-2")]},
    )

    assert response.status_code == 400
    assert calls == []


def test_enqueue_rejects_duplicate_page_ids_before_queueing(client, page_payload, monkeypatch):
    calls = []
    monkeypatch.setattr(
        "api.services.scoring_service.enqueue_scoring_job",
        lambda crawl_id, pages: calls.append(crawl_id),
    )

    response = client.post(
        "/crawls/crawl-1/score/jobs",
        json={"pages": [page_payload("home"), page_payload("product")]},
    )

    assert response.status_code == 400
    assert "Duplicate page ids" in response.json()["detail"]
    assert calls == []


def test_enqueue_skips_unparseable_pages(client, page_payload, monkeypatch):
    calls = []

    def fake_enqueue(crawl_id, pages):
        calls.append(pages)
        return "job-7"

    monkeypatch.setattr("api.services.scoring_service.enqueue_scoring_job", fake_enqueue)

    response = client.post(
        "/crawls/crawl-1/score/jobs",
        json={
            "pages": [
                page_payload("blog", page_id="journal"),
                page_payload("home", page_id="home"),
            ]
        },
    )

    assert response.status_code == 202
    assert [p["id"] for p in calls[0]] == ["home"]
    assert response.json()["rejectedPages"][0]["pageId"] == "journal"


def test_enqueue_returns_503_when_queue_unavailable(client, page_payload, monkeypatch):
    def failing_enqueue(crawl_id, pages):
        raise QueueUnavailableError("Failed to connect to Redis: connection refused")

    monkeypatch.setattr("api.services.scoring_service.enqueue_scoring_job", failing_enqueue)

    response = client.post("/crawls/crawl-1/score/jobs", json={"pages": [page_payload("home")]})

    assert response.status_code == 503
    assert "enqueue" in response.json()["detail"]
