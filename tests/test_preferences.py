from fastapi.testclient import TestClient

from statsboard.api.schemas.preferences import Layout
from statsboard.api.schemas.preferences import PreferencesUpdate
from statsboard.services.preferences_service import DEFAULT_SECTIONS
from statsboard.services.preferences_service import apply_layout
from statsboard.services.preferences_service import get_layout
from statsboard.services.preferences_service import get_preferences
from statsboard.services.preferences_service import reset_layout
from statsboard.services.preferences_service import save_layout
from statsboard.services.preferences_service import update_preferences


def test_preferences_default_when_nothing_saved(db_session) -> None:
    preferences = get_preferences(db_session, "octocat")

    assert preferences.model_dump() == {
        "chart_type": "line",
        "show_private_repos": True,
        "date_format": "MMM DD, YYYY",
        "export_format": "json",
        "theme": "dark",
    }


def test_update_preferences_merges_partial_changes(db_session) -> None:
    update_preferences(db_session, "OctoCat", PreferencesUpdate(theme="light"))
    merged = update_preferences(
        db_session, "octocat", PreferencesUpdate(export_format="csv")
    )

    assert merged.theme == "light"
    assert merged.export_format == "csv"
    assert get_preferences(db_session, "octocat") == merged


def test_apply_layout_defaults_when_uninitialized() -> None:
    layout = Layout(section_order=["activity"], hidden_sections=["stats"])

    assert apply_layout(layout) == list(DEFAULT_SECTIONS)


def test_apply_layout_orders_and_hides_sections() -> None:
    layout = Layout(
        section_order=["achievements", "stats", "unknown"],
        hidden_sections=["languages"],
        initialized=True,
    )

    assert apply_layout(layout) == [
        "achievements",
        "stats",
        "contributions",
        "activity",
        "top-repos",
    ]


def test_save_layout_drops_unknown_sections(db_session) -> None:
    saved = save_layout(
        db_session,
        "octocat",
        Layout(
            section_order=["top-repos", "bogus", "top-repos", "stats"],
            hidden_sections=["activity", "bogus"],
        ),
    )

    assert saved == Layout(
        section_order=["top-repos", "stats"],
        hidden_sections=["activity"],
        initialized=True,
    )
    assert get_layout(db_session, "octocat") == saved


def test_reset_layout_restores_default(db_session) -> None:
    save_layout(db_session, "octocat", Layout(section_order=["stats"]))

    reset_layout(db_session, "octocat")

    assert get_layout(db_session, "octocat") == Layout()


def test_preferences_endpoints(db_client: TestClient) -> None:
    put_response = db_client.put(
        "/preferences/octocat", json={"chart_type": "bar", "date_format": "DD/MM/YYYY"}
    )
    get_response = db_client.get("/preferences/octocat")

    assert put_response.status_code == 200
    assert get_response.json()["chart_type"] == "bar"
    assert get_response.json()["date_format"] == "DD/MM/YYYY"
    assert get_response.json()["theme"] == "dark"


def test_preferences_endpoint_rejects_unknown_values(db_client: TestClient) -> None:
    response = db_client.put("/preferences/octocat", json={"theme": "neon"})

    assert response.status_code == 422


def test_layout_endpoints(db_client: TestClient) -> None:
    put_response = db_client.put(
        "/layout/octocat",
        json={"section_order": ["activity", "stats"], "hidden_sections": ["top-repos"]},
    )
    delete_response = db_client.delete("/layout/octocat")
    get_response = db_client.get("/layout/octocat")

    assert put_response.status_code == 200
    assert put_response.json()["initialized"] is True
    assert delete_response.status_code == 204
    assert get_response.json() == {
        "section_order": [],
        "hidden_sections": [],
        "initialized": False,
    }
