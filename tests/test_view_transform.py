"""Tests for zoom/speed clamping on the view transform."""
import pytest

from knowledgegraph3d.config import ROTATION_SPEED_DEFAULT
from knowledgegraph3d.model.view_transform import ViewTransform


def test_defaults():
    view = ViewTransform()
    assert view.rotation == (0.0, 0.0)
    assert view.zoom == 1.0
    assert view.rotation_speed == ROTATION_SPEED_DEFAULT
    assert view.zoom_percent == 100


def test_zoom_in_saturates_at_two():
    view = ViewTransform()
    seen = [view.zoom_in() for _ in range(30)]
    assert max(seen) == 2.0
    assert view.zoom == 2.0
    assert view.zoom_percent == 200


def test_zoom_out_saturates_at_half():
    view = ViewTransform()
    for _ in range(30):
        view.zoom_out()
        assert view.zoom >= 0.5
    assert view.zoom == 0.5
    assert view.zoom_percent == 50


def test_zoom_steps_do_not_drift():
    view = ViewTransform()
    for _ in range(3):
        view.zoom_in()
    assert view.zoom == 1.3
    assert view.zoom_percent == 130


@pytest.mark.parametrize("requested, applied", [(5.0, 2.0), (0.1, 0.5), (1.5, 1.5)])
def test_set_zoom_clamps(requested, applied):
    assert ViewTransform().set_zoom(requested) == applied


@pytest.mark.parametrize("requested, applied", [(-1.0, 0.0), (3.0, 2.0), (1.2, 1.2)])
def test_rotation_speed_clamps(requested, applied):
    view = ViewTransform()
    assert view.set_rotation_speed(requested) == applied
    assert view.rotation_speed == applied


def test_constructor_clamps():
    view = ViewTransform(zoom=9.0, rotation_speed=-4.0)
    assert view.zoom == 2.0
    assert view.rotation_speed == 0.0


def test_reset_rotation_keeps_zoom():
    view = ViewTransform(rotation_x=1.0, rotation_y=2.0, zoom=1.5)
    view.reset_rotation()
    assert view.rotation == (0.0, 0.0)
    assert view.zoom == 1.5
