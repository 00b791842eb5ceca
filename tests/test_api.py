"""Tests for the public API endpoints."""

from fastapi.testclient import TestClient

from food_score.api.app import create_app
from tests.conftest import heart_profile

SUGARY_NUTRIMENTS = {
    "sugars_100g": 25,
    "saturated-fat_100g": 1,
    "sodium_100g": 0.1,
    "energy-kcal_100g": 90,
    "fiber_100g": 0,
    "proteins_100g": 0,
}


def test_health_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_analysis_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/analysis",
        json={"nutriments": SUGARY_NUTRIMENTS, "additives": ["E211", "E300"]},
    )

    assert response.status_code == 200
    data = response.json()
    analysis = data["analysis"]
    assert analysis["health_score"]["score"] == 61
    assert analysis["health_score"]["config_kind"] == "default"
    assert analysis["interactions"][0]["rule"]["id"] == "benzene-formation"
    assert analysis["interaction_summary"]["summary"] == (
        "1 significant additive interaction detected."
    )
    assert analysis["personalized"] is None
    assert data["additive_load_summary"] == (
        "Minimally Processed: 1 moderate-risk additive, 1 safe additive."
    )
    assert data["processing_level"]["label"] == "Minimally Processed"


def test_analysis_endpoint_with_profile(container, profile_repository) -> None:
    profile_repository.save_profile("user-1", heart_profile())
    client = TestClient(create_app(container))

    response = client.post(
        "/analysis",
        json={
            "nutriments": {"saturated-fat_100g": 4},
            "additives": ["E250"],
            "user_id": "user-1",
        },
    )

    assert response.status_code == 200
    personalized = response.json()["analysis"]["personalized"]
    assert personalized["additive_warnings"][0]["additive"] == "E250"
    assert personalized["profile_summary"]["overall_fit"] == "poor"


def test_analysis_endpoint_rejects_invalid_codes(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/analysis", json={"additives": ["--"]})

    assert response.status_code == 422


def test_additive_detail_local(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/additives/e123")

    assert response.status_code == 200
    data = response.json()
    assert data["additive"]["code"] == "E123"
    assert data["additive"]["source"] == "local"
    assert data["banned_in"] == ["usa", "canada"]
    assert data["has_explanation"] is True
    assert "personalized_risk" not in data


def test_additive_detail_remote_and_offline(container) -> None:
    client = TestClient(create_app(container))

    offline = client.get("/additives/E171", params={"allow_network": "false"})
    online = client.get("/additives/E171")

    assert offline.json()["additive"]["source"] == "fallback"
    assert online.json()["additive"]["source"] == "fresh_remote"
    assert online.json()["additive"]["name"] == "Titanium dioxide"
    assert online.json()["has_explanation"] is False


def test_additive_detail_with_profile(container, profile_repository) -> None:
    profile_repository.save_profile("user-1", heart_profile())
    client = TestClient(create_app(container))

    response = client.get("/additives/E951", params={"user_id": "user-1"})

    assert response.json()["personalized_risk"] == {
        "risk": "moderate",
        "is_personalized": True,
        "reason": "Lower concern for this profile",
    }


def test_regulations_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/additives/E102/regulations")

    assert response.status_code == 200
    data = response.json()
    assert data["code"] == "E102"
    assert data["has_data"] is True
    assert data["banned_anywhere"] is False
    assert [row["status"] for row in data["rows"]][-1] == "unknown"


def test_regulations_endpoint_rejects_invalid_code(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/additives/-/regulations")

    assert response.status_code == 422


def test_explanation_endpoint(container) -> None:
    client = TestClient(create_app(container))

    found = client.get("/additives/E211/explanation")
    missing = client.get("/additives/E171/explanation")

    assert found.status_code == 200
    assert found.json()["explanation"]["name"] == "Sodium Benzoate"
    assert missing.status_code == 404


def test_interactions_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/additives/E211/interactions", params={"with": ["E300"]})
    alone = client.get("/additives/E211/interactions")

    assert response.status_code == 200
    assert response.json()["warnings"][0]["rule"]["id"] == "benzene-formation"
    assert alone.json() == {
        "warnings": [],
        "summary": {
            "warning_count": 0,
            "caution_count": 0,
            "info_count": 0,
            "highest_severity": None,
            "summary": "No known additive interactions detected.",
        },
    }


def test_analysis_endpoint_treats_non_finite_strings_as_missing(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/analysis",
        json={"nutriments": {"sugars_100g": "inf", "fiber_100g": "nan"}},
    )

    assert response.status_code == 200
    details = response.json()["analysis"]["health_score"]["breakdown"]["details"]
    factors = {detail["factor"] for detail in details}
    assert "sugar" not in factors
    assert "fiber" not in factors
