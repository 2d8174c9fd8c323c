"""Test module for the fact puzzle API."""

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from puzzle_service.main import app, settings

client = TestClient(app)

API = settings.API_V1_STR


def _photo_upload(size=(480, 360)) -> dict:
    buffer = io.BytesIO()
    Image.new("RGB", size, (40, 120, 200)).save(buffer, format="PNG")
    buffer.seek(0)
    return {"file": ("photo.png", buffer, "image/png")}


@pytest.fixture
def puzzle_id() -> str:
    """ID of a freshly uploaded puzzle."""
    response = client.post(f"{API}/puzzle/upload", files=_photo_upload())
    assert response.status_code == 200
    return response.json()["puzzle_id"]


def test_health_check() -> None:
    """Test the health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


class TestUpload:
    """Tests for photo upload."""

    def test_upload_puzzle(self) -> None:
        """A photo starts a puzzle and lists the piece counts."""
        response = client.post(f"{API}/puzzle/upload", files=_photo_upload())
        assert response.status_code == 200
        data = response.json()
        assert data["width"] == 480
        assert data["height"] == 360
        assert data["piece_count_options"] == [12, 15, 16, 21]

    def test_upload_without_file(self) -> None:
        """A request without a file is rejected."""
        response = client.post(f"{API}/puzzle/upload")
        assert response.status_code == 400

    def test_upload_invalid_image(self) -> None:
        """Bytes that are not an image are rejected."""
        files = {"file": ("photo.png", io.BytesIO(b"fake image content"), "image/png")}
        response = client.post(f"{API}/puzzle/upload", files=files)
        assert response.status_code == 400

    def test_upload_oversized_image(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Images over the pixel limit are rejected, not a server error."""
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
        response = client.post(f"{API}/puzzle/upload", files=_photo_upload())
        assert response.status_code == 400


class TestChooseSize:
    """Tests for the front side."""

    def test_front_side(self, puzzle_id: str) -> None:
        """Choosing a size returns the image, paths and edge metadata."""
        response = client.post(f"{API}/puzzle/{puzzle_id}/size", json={"piece_count": 12, "seed": 42})
        assert response.status_code == 200
        data = response.json()
        assert (data["rows"], data["cols"], data["seed"]) == (3, 4, 42)
        assert data["image"].startswith("data:image/png;base64,")
        assert len(data["paths"]) == 1 + 4 * 4 + 5 * 3
        assert len(data["horizontal"]) == 4
        assert len(data["vertical"]) == 5

    def test_same_seed_same_paths(self, puzzle_id: str) -> None:
        """The seed reproduces the cut-lines."""
        first = client.post(f"{API}/puzzle/{puzzle_id}/size", json={"piece_count": 16, "seed": 5}).json()
        second = client.post(f"{API}/puzzle/{puzzle_id}/size", json={"piece_count": 16, "seed": 5}).json()
        assert first["paths"] == second["paths"]

    def test_unknown_puzzle(self) -> None:
        """Unknown puzzle IDs are not found."""
        response = client.post(f"{API}/puzzle/nonexistent/size", json={"piece_count": 12})
        assert response.status_code == 404

    def test_unsupported_piece_count(self, puzzle_id: str) -> None:
        """Only the offered piece counts are accepted."""
        response = client.post(f"{API}/puzzle/{puzzle_id}/size", json={"piece_count": 13})
        assert response.status_code == 400

    def test_seed_out_of_range(self, puzzle_id: str) -> None:
        """Seeds must fit in 32 bits."""
        response = client.post(f"{API}/puzzle/{puzzle_id}/size", json={"piece_count": 12, "seed": 2**32})
        assert response.status_code == 422


class TestFacts:
    """Tests for collecting facts and the back side."""

    def test_full_flow(self, puzzle_id: str) -> None:
        """Upload, size, facts and back side in order."""
        client.post(f"{API}/puzzle/{puzzle_id}/size", json={"piece_count": 12, "seed": 42})

        response = client.post(f"{API}/puzzle/{puzzle_id}/facts", json={"text": "First fact\nSecond fact"})
        assert response.status_code == 200
        data = response.json()
        assert data == {
            "accepted": 2,
            "total": 12,
            "remaining": 10,
            "complete": False,
            "notices": [],
            "failures": [],
            "rejected": [],
        }

        assert client.get(f"{API}/puzzle/{puzzle_id}/back").status_code == 409

        text = "\n".join(f"Fact {i}" for i in range(3, 13))
        data = client.post(f"{API}/puzzle/{puzzle_id}/facts", json={"text": text}).json()
        assert data["accepted"] == 10
        assert data["complete"] is True

        response = client.get(f"{API}/puzzle/{puzzle_id}/back")
        assert response.status_code == 200
        back = response.json()
        assert back["image"].startswith("data:image/png;base64,")
        assert [f["index"] for f in back["front"]] == list(range(12))
        assert [f["index"] for f in back["back"]] == [3, 2, 1, 0, 7, 6, 5, 4, 11, 10, 9, 8]
        assert back["front"][0]["text"] == "First fact"

    def test_facts_before_size(self, puzzle_id: str) -> None:
        """Facts need a piece count first."""
        response = client.post(f"{API}/puzzle/{puzzle_id}/facts", json={"text": "Too early"})
        assert response.status_code == 409

    def test_empty_facts(self, puzzle_id: str) -> None:
        """Empty text is a validation error."""
        client.post(f"{API}/puzzle/{puzzle_id}/size", json={"piece_count": 12})
        response = client.post(f"{API}/puzzle/{puzzle_id}/facts", json={"text": ""})
        assert response.status_code == 422

    def test_empty_lines_are_reported(self, puzzle_id: str) -> None:
        """Lines without printable text are returned and use no piece."""
        client.post(f"{API}/puzzle/{puzzle_id}/size", json={"piece_count": 12, "seed": 42})
        data = client.post(f"{API}/puzzle/{puzzle_id}/facts", json={"text": "🎉🎉\nReal fact"}).json()
        assert data["accepted"] == 1
        assert data["remaining"] == 11
        assert data["rejected"] == ["🎉🎉"]

    def test_shortened_fact_is_reported(self, puzzle_id: str) -> None:
        """Shortened facts come back as notices."""
        client.post(f"{API}/puzzle/{puzzle_id}/size", json={"piece_count": 12, "seed": 42})
        long_fact = "Short fact. " + " ".join(["word"] * 80)
        data = client.post(f"{API}/puzzle/{puzzle_id}/facts", json={"text": long_fact}).json()
        assert data["notices"] == [{"index": 0, "original": long_fact, "text": "Short fact"}]


class TestDiscard:
    """Tests for discarding a puzzle."""

    def test_discard(self, puzzle_id: str) -> None:
        """A discarded puzzle is gone."""
        response = client.delete(f"{API}/puzzle/{puzzle_id}")
        assert response.status_code == 200
        assert response.json() == {"status": "discarded"}
        assert client.post(f"{API}/puzzle/{puzzle_id}/size", json={"piece_count": 12}).status_code == 404
        assert client.delete(f"{API}/puzzle/{puzzle_id}").status_code == 404
