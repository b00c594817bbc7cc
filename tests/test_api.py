"""Tests for the icon HTTP API."""

import inspect
import io

import numpy as np
from fastapi.testclient import TestClient
from PIL import Image
from py_totem.api.main import app, random_icon, render, seeded_icon, status_palette
from py_totem.core.export import data_url_to_bytes
from py_totem.core.generator import render_icon
from py_totem.core.palettes import BLOCKED_PALETTES, MUTED_PALETTES


class TestIconAPI:
    """Test the icon endpoints."""

    def setup_method(self):
        """Set up test client."""
        self.client = TestClient(app)

    def test_root_and_health(self):
        assert self.client.get("/").json()["status"] == "running"
        assert self.client.get("/health").json() == {"status": "healthy"}

    def test_seeded_icon_png(self):
        response = self.client.get("/icons/john@example.com.png")
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.headers["x-totem-seed"] == "john@example.com"

        image = Image.open(io.BytesIO(response.content)).convert("RGB")
        assert image.size == (60, 150)
        np.testing.assert_array_equal(np.asarray(image), render_icon("john@example.com").pixels)

    def test_seeded_icon_is_stable(self):
        first = self.client.get("/icons/alice.png", params={"status": "review"})
        second = self.client.get("/icons/alice.png", params={"status": "review"})
        assert first.content == second.content

    def test_high_res_and_cell_size(self):
        response = self.client.get("/icons/alice.png", params={"high_res": True, "cell_size": 2})
        image = Image.open(io.BytesIO(response.content))
        assert image.size == (48, 120)

    def test_cell_size_out_of_range(self):
        response = self.client.get("/icons/alice.png", params={"cell_size": 20})
        assert response.status_code == 422

    def test_random_icon_reports_seed(self):
        response = self.client.get("/icons/random.png")
        assert response.status_code == 200
        assert response.headers["x-totem-seed"].isdigit()

    def test_status_palette(self):
        response = self.client.get("/palettes/blocked")
        assert response.json() == BLOCKED_PALETTES.to_dict()
        assert "in-progress" in self.client.get("/palettes").json()["statuses"]

    def test_render_with_palette_override(self):
        payload = {
            "seed": "john@example.com",
            "palettes": {"section0": MUTED_PALETTES.section0.to_dict()},
            "cell_size": 4,
        }
        response = self.client.post("/icons/render", json=payload)
        assert response.status_code == 200
        data = response.json()

        assert data["seed"] == "john@example.com"
        assert (data["width"], data["height"]) == (48, 120)
        assert (data["columns"], data["rows"]) == (12, 30)

        expected = render_icon("john@example.com", cell_size=4)
        assert [(g["section"], g["group_index"]) for g in data["groups"]] == [
            tuple(meta) for meta in expected.group_meta
        ]
        for group in data["groups"]:
            if group["section"] == 0:
                assert group["color"] in MUTED_PALETTES.section0.colors

        image = Image.open(io.BytesIO(data_url_to_bytes(data["data_url"])))
        assert image.size == (48, 120)

    def test_render_without_seed(self):
        response = self.client.post("/icons/render", json={})
        data = response.json()
        assert data["seed"] is None
        assert data["session_seed"].isdigit()

    def test_rendering_handlers_are_synchronous(self):
        """CPU-bound handlers are plain functions so FastAPI runs them in its threadpool."""
        for handler in (random_icon, seeded_icon, status_palette, render):
            assert not inspect.iscoroutinefunction(handler)
