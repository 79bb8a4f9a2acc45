"""Page scripts run through Streamlit's AppTest against the in-memory client."""

from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from streamlit.testing.v1 import AppTest

from utils.auth import AUTH_SESSION_KEY, AuthSession


@pytest.fixture
def signed_in(client):
    alex = client.auth.add_user("alex@example.com", "secret", user_id="p1")
    client.auth.session = SimpleNamespace(user=alex)
    auth = AuthSession(client)
    auth.initialize()
    return auth


def _app(page, auth):
    at = AppTest.from_file(f"../pages/{page}.py", default_timeout=30)
    at.session_state[AUTH_SESSION_KEY] = auth
    return at


class TestMatchesPage:
    @pytest.fixture(autouse=True)
    def seed(self, client):
        kick_off = (datetime.now(timezone.utc) + timedelta(days=3)).isoformat()
        client.tables["matches"] = [{"id": "m1", "opponent_team": "Kowloon FC", "match_date": kick_off,
                                     "location": "Victoria Park", "created_by": "p2", "status": "scheduled"}]

    def test_renders_pending_rsvp(self, signed_in):
        at = _app("matches", signed_in)
        at.run()
        assert not at.exception
        assert at.button(key="accept_m1")

    def test_rsvp_write_failure_is_shown_on_page(self, client, signed_in):
        at = _app("matches", signed_in)
        at.run()
        client.fail_tables.add("match_participants")

        at.button(key="accept_m1").click().run()

        assert not at.exception
        assert len(at.error) == 1
        assert "match_participants" in at.error[0].value
        assert not [r for r in client.tables.get("match_participants", []) if r["player_id"] == "p1"]

    def test_card_previews_first_three_participants_of_any_status(self, client, signed_in):
        client.tables["match_participants"] = [
            {"id": f"mp{i}", "match_id": "m1", "player_id": player_id, "status": status}
            for i, (player_id, status) in enumerate([
                ("p2", "declined"), ("p3", "accepted"), ("x1", "pending"), ("x2", "accepted"), ("x3", "accepted"),
            ])
        ]
        at = _app("matches", signed_in)
        at.run()

        preview = next(c.value for c in at.caption if c.value.startswith("👥"))
        assert "Ben Lee 🔴 Declined" in preview
        assert "Chris Chan" in preview
        assert "x1" in preview and "x2" not in preview
        assert preview.endswith("+2 more")


class TestAvailabilityPage:
    @pytest.fixture(autouse=True)
    def seed(self, client):
        client.tables["availability"] = [{"id": "a1", "player_id": "p1", "date": date.today().isoformat(),
                                           "is_available": True, "event_type": "training", "notes": None}]

    def test_delete_failure_is_shown_on_page(self, client, signed_in):
        at = _app("availability", signed_in)
        at.run()
        client.fail_tables.add("availability")

        at.button(key="delete_availability_a1").click().run()

        assert not at.exception
        assert len(at.error) == 1
        assert len(client.tables["availability"]) == 1
