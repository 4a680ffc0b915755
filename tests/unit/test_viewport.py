"""Unit tests for canvas dimensions, zoom steps and auto-fit."""

import pytest

from infocanvas.core.viewport import (
    ASPECT_RATIOS,
    MAX_ZOOM,
    MIN_ZOOM,
    ZoomController,
    compute_fit_zoom,
    dimensions_for,
)


@pytest.mark.unit
class TestCanvasDimensions:
    @pytest.mark.parametrize(
        ("ratio", "size", "label"),
        [
            ("1:1", (500, 500), "1080 x 1080 px"),
            ("16:9", (640, 360), "1920 x 1080 px"),
            ("4:5", (400, 500), "1080 x 1350 px"),
            ("9:16", (360, 640), "1080 x 1920 px"),
        ],
    )
    def test_table(self, ratio, size, label):
        dims = dimensions_for(ratio)
        assert (dims.width, dims.height) == size
        assert dims.label == label

    def test_unknown_ratio_uses_portrait(self):
        assert dimensions_for("3:2") == dimensions_for("9:16")

    def test_all_ratios_listed(self):
        assert set(ASPECT_RATIOS) == {"9:16", "1:1", "16:9", "4:5"}


@pytest.mark.unit
class TestZoomController:
    def test_initial_zoom(self):
        zoom = ZoomController()
        assert zoom.zoom == 0.75
        assert zoom.zoom_percent == 75

    def test_steps(self):
        zoom = ZoomController()
        assert zoom.zoom_in() == pytest.approx(0.85)
        assert zoom.zoom_out() == pytest.approx(0.75)

    def test_zoom_in_caps_at_max(self):
        zoom = ZoomController()
        for _ in range(100):
            zoom.zoom_in()
        assert zoom.zoom == MAX_ZOOM

    def test_zoom_out_floors_at_min(self):
        zoom = ZoomController()
        for _ in range(100):
            zoom.zoom_out()
        assert zoom.zoom == MIN_ZOOM

    def test_constructor_clamps(self):
        assert ZoomController(10).zoom == MAX_ZOOM
        assert ZoomController(0).zoom == MIN_ZOOM


@pytest.mark.unit
class TestAutoFit:
    def test_compute_fit_zoom_formula(self):
        # available 940 x 680; min(940/360, 680/640) * 0.9
        assert compute_fit_zoom(1000, 800, 360, 640) == pytest.approx(680 / 640 * 0.9)

    def test_compute_fit_zoom_no_room(self):
        assert compute_fit_zoom(60, 500, 360, 640) is None
        assert compute_fit_zoom(500, 120, 360, 640) is None
        assert compute_fit_zoom(0, 0, 360, 640) is None

    def test_compute_fit_zoom_floor(self):
        assert compute_fit_zoom(70, 130, 360, 640) == MIN_ZOOM

    def test_auto_fit_overwrites_manual_zoom(self):
        zoom = ZoomController()
        zoom.zoom_in()
        fitted = zoom.auto_fit(1000, 800, 500, 500)
        assert fitted == pytest.approx(min(940 / 500, 680 / 500) * 0.9)
        assert zoom.zoom == fitted

    def test_auto_fit_caps_at_max(self):
        zoom = ZoomController()
        assert zoom.auto_fit(10_000, 10_000, 360, 640) == MAX_ZOOM

    def test_auto_fit_without_room_keeps_zoom(self):
        zoom = ZoomController()
        assert zoom.auto_fit(10, 10, 360, 640) == 0.75
        assert zoom.zoom == 0.75
