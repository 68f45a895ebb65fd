from app import create_app


def _client():
    return create_app("TestingConfig").test_client()


def test_home_lists_plugins():
    response = _client().get("/")
    assert response.status_code == 200
    payload = response.get_json()["data"]
    titles = [item["title"] for item in payload["plugins"]]
    assert "Scientific Calculator" in titles
    calculator = next(item for item in payload["plugins"] if item["title"] == "Scientific Calculator")
    assert calculator["api"] == "/api/scientific_calculator"
    assert payload["site"]["title"] == "ScanCal"
    assert response.headers.get("Content-Security-Policy")
    assert response.headers.get("X-Request-ID")


def test_unknown_route_uses_json_envelope():
    response = _client().get("/does-not-exist")
    assert response.status_code == 404
    data = response.get_json()
    assert data["success"] is False
    assert data["error"]["code"] == "not_found"


def test_wrong_method_uses_json_envelope():
    response = _client().get("/api/scientific_calculator/evaluate")
    assert response.status_code == 405
    assert response.get_json()["error"]["code"] == "http_405"


def test_oversized_payload_is_rejected():
    app = create_app("TestingConfig")
    app.config["MAX_CONTENT_LENGTH"] = 64
    response = app.test_client().post(
        "/api/scientific_calculator/evaluate",
        json={"expression": "1+" * 100 + "1"},
    )
    assert response.status_code == 413
    assert response.get_json()["error"]["code"] == "payload_too_large"
