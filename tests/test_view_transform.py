import pytest

from territory_editor.core.models.view_transform import ViewTransform, clamp_zoom


def test_zoom_in_never_exceeds_max():
    view = ViewTransform()
    for _ in range(100):
        view.zoom_in()
        assert view.zoom <= 5.0
    assert view.zoom == 5.0


def test_zoom_out_never_goes_below_min():
    view = ViewTransform()
    for _ in range(100):
        view.zoom_out()
        assert view.zoom >= 0.1
    assert view.zoom == 0.1


def test_zoom_by_arbitrary_factor_is_clamped():
    view = ViewTransform(zoom=2.0)
    assert view.zoom_by(1.5) == pytest.approx(3.0)
    assert view.zoom_by(100.0) == 5.0
    assert view.zoom_by(0.0) == 0.1


def test_constructor_clamps_zoom():
    assert ViewTransform(zoom=0.0).zoom == 0.1
    assert ViewTransform(zoom=9.0).zoom == 5.0


def test_pan_is_not_scaled_by_zoom():
    view = ViewTransform(zoom=4.0)
    view.pan(10.0, -5.0)
    view.pan(2.5, 2.5)
    assert (view.offset_x, view.offset_y) == (12.5, -2.5)


def test_reset():
    view = ViewTransform(zoom=3.0, offset_x=40.0, offset_y=8.0)
    view.reset()
    assert (view.zoom, view.offset_x, view.offset_y) == (1.0, 0.0, 0.0)


def test_clamp_zoom():
    assert clamp_zoom(0.05) == 0.1
    assert clamp_zoom(1.0) == 1.0
    assert clamp_zoom(6.0) == 5.0


@pytest.mark.parametrize("limits", [(0.0, 5.0), (-1.0, 5.0), (3.0, 2.0)])
def test_invalid_zoom_range_rejected(limits):
    with pytest.raises(ValueError):
        ViewTransform(min_zoom=limits[0], max_zoom=limits[1])
