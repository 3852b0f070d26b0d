import pytest
from fastapi.testclient import TestClient

from main import _lenient_float, app


@pytest.fixture
def client():
    return TestClient(app)


def test_root_lists_endpoints(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "/simulate" in response.json()["endpoints"]


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


class TestSimulateEndpoint:
    def test_default_shot(self, client):
        response = client.post("/simulate", json={})
        assert response.status_code == 200

        body = response.json()
        assert body["shot_category"] == "Straight"
        assert body["status"] == "landed"
        assert 150 < body["carry_yards"] < 220
        assert body["pin_meters"] == pytest.approx(150 * 0.9144)
        assert body["face_heading"] == pytest.approx([0.0, 0.0, 1.0])
        point = body["trajectory"][0]
        assert set(point) == {"time", "x", "y", "z"}

    def test_push_fade(self, client):
        body = client.post("/simulate", json={"club_face": 3, "club_path": 0}).json()

        assert body["shot_category"] == "Push-Fade"
        assert body["side_spin_rpm"] == pytest.approx(-2250)
        assert body["face_heading"][0] < 0

    def test_junk_fields_become_zero(self, client):
        response = client.post(
            "/simulate",
            json={"club_face": "abc", "club_path": "", "swing_speed": None, "launch_angle": "19"},
        )
        assert response.status_code == 200

        body = response.json()
        assert body["trajectory"] == []
        assert body["carry_yards"] == 0
        assert body["landing_point"] == [0.0, 0.0, 0.0]

    def test_numeric_strings_are_parsed(self, client):
        body = client.post("/simulate", json={"club_path": "3", "swing_speed": "75"}).json()
        assert body["shot_category"] == "Draw"

    def test_leading_number_is_used(self, client):
        body = client.post("/simulate", json={"club_path": "3deg", "swing_speed": "75 mph"}).json()
        assert body["side_spin_rpm"] == pytest.approx(2250)
        assert body["shot_category"] == "Draw"

    def test_incomplete_flight(self, client):
        body = client.post("/simulate", json={"launch_angle": 90}).json()

        assert body["status"] == "incomplete"
        assert body["carry_yards"] == 0
        assert body["landing_point"] is None


class TestClassifyEndpoint:
    def test_classify(self, client):
        response = client.post("/classify", json={"face_angle": 0, "path_angle": 3, "side_spin": 3000})
        assert response.status_code == 200
        assert response.json() == {"shot_category": "Hook"}

    def test_missing_field(self, client):
        assert client.post("/classify", json={"face_angle": 0}).status_code == 422


class TestDispersionEndpoint:
    def test_records(self, client):
        response = client.post("/dispersion", json={"face_angles": [0, 3], "path_angles": [0]})
        assert response.status_code == 200

        rows = response.json()
        assert [row["shot_category"] for row in rows] == ["Straight", "Push-Fade"]

    def test_empty_axis(self, client):
        response = client.post("/dispersion", json={"face_angles": [], "path_angles": [0]})
        assert response.status_code == 400

    def test_too_many_shots(self, client):
        response = client.post(
            "/dispersion",
            json={"face_angles": list(range(60)), "path_angles": list(range(60))},
        )
        assert response.status_code == 400


@pytest.mark.parametrize("raw,expected", [
    ("12abc", 12.0),
    ("3e", 3.0),
    ("1.5.2", 1.5),
    ("  -4.25", -4.25),
    (".5x", 0.5),
    ("2e2yards", 200.0),
    ("abc", 0.0),
    ("", 0.0),
    (None, 0.0),
    (True, 0.0),
    ("NaN", 0.0),
    ("1e999", 0.0),
    (7, 7.0),
    (float("inf"), 0.0),
])
def test_lenient_float_matches_form_parsing(raw, expected):
    assert _lenient_float(raw) == expected
