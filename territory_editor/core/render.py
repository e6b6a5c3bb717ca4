"""
렌더 패스 모듈

뷰 변환, 확정된 영역, 초안 다각형으로부터 한 프레임의 그리기 명령 목록을 만듭니다.
상태에 대한 순수 함수이며 증분 갱신은 하지 않습니다. 상태가 바뀔 때마다
프레임 전체를 다시 계산합니다.

그리기 명령 (모두 지도 좌표, PushTransform 이후 적용):
    ClearSurface, PushTransform, PopTransform, FillRect, DrawImage, DrawLine,
    FillPolygon, StrokePath, FillCircle, DrawText

명령 실행은 ui/map/command_painter.py 에서 QPainter로 수행합니다.
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

from territory_editor.core.geometry import centroid, grid_positions, visible_logical_rect
from territory_editor.core.models.point import Point
from territory_editor.core.models.settings import EditorSettings
from territory_editor.core.models.territory import Territory
from territory_editor.core.models.view_transform import ViewTransform

VERTEX_RADIUS = 4.0  # 꼭짓점 표시 반지름 (화면 픽셀)
BORDER_WIDTH = 2.0  # 테두리 두께 (화면 픽셀)
GRID_WIDTH = 1.0  # 격자선 두께 (화면 픽셀)
LABEL_FONT_SIZE = 14.0  # 영역 이름 글꼴 크기
INDEX_FONT_SIZE = 12.0  # 초안 꼭짓점 번호 글꼴 크기
INDEX_OFFSET = 8.0  # 번호를 꼭짓점 위로 띄우는 거리


@dataclass(frozen=True)
class ClearSurface:
    color: str


@dataclass(frozen=True)
class PushTransform:
    zoom: float
    offset_x: float
    offset_y: float


@dataclass(frozen=True)
class PopTransform:
    pass


@dataclass(frozen=True)
class FillRect:
    left: float
    top: float
    width: float
    height: float
    color: str


@dataclass(frozen=True)
class DrawImage:
    source: str
    left: float
    top: float


@dataclass(frozen=True)
class DrawLine:
    start: Point
    end: Point
    color: str
    width: float


@dataclass(frozen=True)
class FillPolygon:
    points: Tuple[Point, ...]
    color: str
    alpha: int


@dataclass(frozen=True)
class StrokePath:
    points: Tuple[Point, ...]
    color: str
    width: float
    closed: bool


@dataclass(frozen=True)
class FillCircle:
    center: Point
    radius: float
    color: str


@dataclass(frozen=True)
class DrawText:
    position: Point
    text: str
    color: str
    font_size: float


DrawCommand = Union[
    ClearSurface, PushTransform, PopTransform, FillRect, DrawImage, DrawLine,
    FillPolygon, StrokePath, FillCircle, DrawText
]


def _grid_commands(view: ViewTransform, width: float, height: float,
                   settings: EditorSettings) -> List[DrawCommand]:
    left, top, right, bottom = visible_logical_rect(view, width, height)
    line_width = GRID_WIDTH / view.zoom
    commands: List[DrawCommand] = []

    # 세로선
    for x in grid_positions(left, right, settings.grid_spacing):
        commands.append(DrawLine(Point(x, top), Point(x, bottom), settings.grid_color, line_width))

    # 가로선
    for y in grid_positions(top, bottom, settings.grid_spacing):
        commands.append(DrawLine(Point(left, y), Point(right, y), settings.grid_color, line_width))

    return commands


def _territory_commands(territory: Territory, zoom: float, settings: EditorSettings) -> List[DrawCommand]:
    pts = territory.points
    commands: List[DrawCommand] = [
        FillPolygon(pts, territory.color, settings.fill_alpha),
        StrokePath(pts, territory.color, BORDER_WIDTH / zoom, closed=True),
    ]
    for p in pts:
        commands.append(FillCircle(p, VERTEX_RADIUS / zoom, territory.color))
    commands.append(DrawText(centroid(pts), territory.name, settings.label_color, LABEL_FONT_SIZE / zoom))
    return commands


def _draft_commands(draft: Sequence[Point], color: str, zoom: float,
                    settings: EditorSettings) -> List[DrawCommand]:
    pts = tuple(draft)
    commands: List[DrawCommand] = []
    if len(pts) >= 3:
        commands.append(FillPolygon(pts, color, settings.fill_alpha))

    # 그리는 중에는 닫는 변을 그리지 않음
    commands.append(StrokePath(pts, color, BORDER_WIDTH / zoom, closed=False))

    for index, p in enumerate(pts, start=1):
        commands.append(FillCircle(p, VERTEX_RADIUS / zoom, color))
        label_pos = Point(p.x, p.y - INDEX_OFFSET / zoom)
        commands.append(DrawText(label_pos, str(index), settings.label_color, INDEX_FONT_SIZE / zoom))
    return commands


def build_frame(view: ViewTransform,
                territories: Iterable[Territory],
                draft_points: Sequence[Point],
                draw_color: str,
                width: float,
                height: float,
                settings: EditorSettings = None) -> List[DrawCommand]:
    """
    한 프레임의 그리기 명령 목록을 만듭니다.

    순서:
        1. 화면 지우기
        2. 뷰 변환 적용 (오프셋 이동 후 줌 배율)
        3. 배경 (이미지가 있으면 이미지) 과 격자
        4. 확정된 영역 (저장소 삽입 순서): 반투명 채우기, 테두리, 꼭짓점, 중심 라벨
        5. 초안 다각형: 3점 이상이면 채우기, 열린 경로, 번호가 붙은 꼭짓점
        6. 뷰 변환 해제

    선 두께와 글꼴 크기는 줌으로 나누어 화면상 크기가 일정하게 유지됩니다.

    매개변수:
        view: 뷰 변환
        territories: 확정된 영역 (그리기 순서)
        draft_points: 초안 꼭짓점
        draw_color: 현재 선택된 그리기 색상
        width, height: 화면 크기 (픽셀)
        settings: 편집기 설정 (없으면 기본값)

    반환값:
        DrawCommand 목록
    """
    if settings is None:
        settings = EditorSettings()

    zoom = view.zoom
    left, top, right, bottom = visible_logical_rect(view, width, height)

    commands: List[DrawCommand] = [
        ClearSurface(settings.background_color),
        PushTransform(zoom, view.offset_x, view.offset_y),
        FillRect(left, top, right - left, bottom - top, settings.background_color),
    ]
    if settings.map_image_path:
        commands.append(DrawImage(settings.map_image_path, 0.0, 0.0))

    commands.extend(_grid_commands(view, width, height, settings))

    for territory in territories:
        commands.extend(_territory_commands(territory, zoom, settings))

    if draft_points:
        commands.extend(_draft_commands(draft_points, draw_color, zoom, settings))

    commands.append(PopTransform())
    return commands
