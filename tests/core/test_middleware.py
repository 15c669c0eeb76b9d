import pytest


@pytest.mark.django_db
def test_api_responses_are_not_cached(client, admin_user):
    client.force_login(admin_user)

    resp = client.get("/api/v1/billing/periods/", {"month": "2024-04"})

    assert "no-store" in resp["Cache-Control"]
    assert resp["Pragma"] == "no-cache"


@pytest.mark.django_db
def test_other_paths_are_untouched(client, settings):
    settings.NO_STORE_PATH_PREFIXES = ("/api/v1/billing/",)

    resp = client.get("/api/v1/organizations/")

    assert resp.status_code in (401, 403)
    assert "no-store" not in resp.get("Cache-Control", "")
