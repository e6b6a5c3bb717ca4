import pytest

from territory_editor.core.models.point import Point
from territory_editor.core.models.settings import EditorSettings
from territory_editor.core.models.territory import Territory
from territory_editor.core.models.view_transform import ViewTransform
from territory_editor.core.render import (
    ClearSurface, DrawImage, DrawLine, DrawText, FillCircle, FillPolygon, FillRect, PopTransform,
    PushTransform, StrokePath, build_frame
)


def kinds(commands):
    return [type(c).__name__ for c in commands]


def without_grid(commands):
    return [c for c in commands if not isinstance(c, DrawLine)]


@pytest.fixture
def settings():
    return EditorSettings()


def test_empty_frame(settings):
    view = ViewTransform(zoom=2.0, offset_x=10.0, offset_y=20.0)
    commands = build_frame(view, [], [], "#3B82F6", 400, 300, settings)

    assert commands[0] == ClearSurface(settings.background_color)
    assert commands[1] == PushTransform(2.0, 10.0, 20.0)
    assert isinstance(commands[2], FillRect)
    assert commands[-1] == PopTransform()
    assert not any(isinstance(c, (FillPolygon, StrokePath, FillCircle, DrawText)) for c in commands)


def test_background_rect_covers_visible_area(settings):
    view = ViewTransform(zoom=2.0, offset_x=100.0, offset_y=50.0)
    rect = build_frame(view, [], [], "#3B82F6", 400, 300, settings)[2]
    assert (rect.left, rect.top, rect.width, rect.height) == (-50.0, -25.0, 200.0, 150.0)


def test_map_image_drawn_after_background():
    settings = EditorSettings(map_image_path="maps/valley.png")
    commands = build_frame(ViewTransform(), [], [], "#3B82F6", 100, 100, settings)
    assert commands[3] == DrawImage("maps/valley.png", 0.0, 0.0)


def test_grid_lines_vertical_then_horizontal(settings):
    commands = build_frame(ViewTransform(), [], [], "#3B82F6", 100, 100, settings)
    lines = [c for c in commands if isinstance(c, DrawLine)]
    # 0, 50, 100 세로선 3개와 가로선 3개
    assert len(lines) == 6
    assert all(l.start.x == l.end.x for l in lines[:3])
    assert all(l.start.y == l.end.y for l in lines[3:])
    assert all(l.color == settings.grid_color for l in lines)


def test_territories_drawn_in_store_order(settings, square_points):
    a = Territory.create("A", square_points, "#FF0000")
    b = Territory.create("B", [Point(200, 0), Point(300, 0), Point(250, 80)], "#00FF00")
    commands = without_grid(build_frame(ViewTransform(), [a, b], [], "#3B82F6", 400, 300, settings))

    body = commands[3:-1]
    assert kinds(body) == (
        ["FillPolygon", "StrokePath"] + ["FillCircle"] * 4 + ["DrawText"]
        + ["FillPolygon", "StrokePath"] + ["FillCircle"] * 3 + ["DrawText"]
    )
    assert body[0] == FillPolygon(a.points, "#FF0000", settings.fill_alpha)
    assert body[1].closed is True
    assert body[6] == DrawText(Point(50.0, 50.0), "A", settings.label_color, 14.0)
    assert body[7].color == "#00FF00"


def test_draft_vertices_are_numbered_from_one(settings):
    draft = [Point(10, 10), Point(60, 10), Point(60, 60)]
    commands = build_frame(ViewTransform(), [], draft, "#3B82F6", 400, 300, settings)

    texts = [c for c in commands if isinstance(c, DrawText)]
    assert [t.text for t in texts] == ["1", "2", "3"]
    assert texts[0].position == Point(10, 2.0)
    assert texts[0].font_size == 12.0


def test_draft_with_two_points_has_no_fill(settings):
    draft = [Point(10, 10), Point(60, 10)]
    commands = without_grid(build_frame(ViewTransform(), [], draft, "#3B82F6", 400, 300, settings))
    assert not any(isinstance(c, FillPolygon) for c in commands)
    strokes = [c for c in commands if isinstance(c, StrokePath)]
    assert strokes == [StrokePath(tuple(draft), "#3B82F6", 2.0, closed=False)]


def test_draft_with_three_points_is_filled_but_open(settings):
    draft = [Point(10, 10), Point(60, 10), Point(60, 60)]
    commands = without_grid(build_frame(ViewTransform(), [], draft, "#3B82F6", 400, 300, settings))
    assert kinds(commands[3:5]) == ["FillPolygon", "StrokePath"]
    assert commands[4].closed is False


def test_draft_drawn_after_territories(settings, square_points):
    t = Territory.create("A", square_points, "#FF0000")
    commands = build_frame(ViewTransform(), [t], [Point(5, 5)], "#3B82F6", 400, 300, settings)
    labels = [i for i, c in enumerate(commands) if isinstance(c, DrawText) and c.text == "A"]
    draft_stroke = [i for i, c in enumerate(commands) if isinstance(c, StrokePath) and not c.closed]
    assert labels[0] < draft_stroke[0]


def test_sizes_scaled_by_zoom(settings, square_points):
    t = Territory.create("A", square_points, "#FF0000")
    commands = build_frame(ViewTransform(zoom=4.0), [t], [], "#3B82F6", 400, 300, settings)

    stroke = next(c for c in commands if isinstance(c, StrokePath))
    circle = next(c for c in commands if isinstance(c, FillCircle))
    label = next(c for c in commands if isinstance(c, DrawText))
    grid = next(c for c in commands if isinstance(c, DrawLine))
    assert stroke.width == pytest.approx(0.5)
    assert circle.radius == pytest.approx(1.0)
    assert label.font_size == pytest.approx(3.5)
    assert grid.width == pytest.approx(0.25)


def test_default_settings_used_when_omitted():
    commands = build_frame(ViewTransform(), [], [], "#3B82F6", 10, 10)
    assert commands[0] == ClearSurface(EditorSettings().background_color)
