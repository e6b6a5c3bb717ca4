"""
기하학 연산 모듈

이 모듈은 좌표 변환, 거리 계산, 다각형 연산 등의 기하학적 연산을 제공합니다.

주요 기능:
- 화면 좌표 ↔ 지도(논리) 좌표 변환
- 점 간 유클리드 거리
- 다각형 무게중심(꼭짓점 평균), 면적, 내부 판정
- 화면에 보이는 논리 좌표 영역 및 격자선 위치 계산

좌표계 설명:
- 화면 좌표: 캔버스 위젯 기준 픽셀 좌표
- 지도 좌표: 줌/패닝이 적용되지 않은 논리 좌표 (영역 데이터가 저장되는 좌표계)
"""

import math
import numpy as np
from typing import List, Sequence, Tuple, TYPE_CHECKING

from territory_editor.core.models.point import Point

if TYPE_CHECKING:
    from territory_editor.core.models.view_transform import ViewTransform


def to_logical(screen_point: Point, view: "ViewTransform") -> Point:
    """
    화면 좌표를 지도 좌표로 변환합니다.

    매개변수:
        screen_point: 화면 픽셀 좌표
        view: 현재 뷰 변환 (줌은 0이 아님이 보장됨)

    반환값:
        지도 좌표 Point
    """
    return Point(
        (screen_point.x - view.offset_x) / view.zoom,
        (screen_point.y - view.offset_y) / view.zoom,
    )


def to_screen(point: Point, view: "ViewTransform") -> Point:
    """
    지도 좌표를 화면 좌표로 변환합니다. to_logical의 역변환입니다.

    매개변수:
        point: 지도 좌표
        view: 현재 뷰 변환

    반환값:
        화면 픽셀 좌표 Point
    """
    return Point(
        point.x * view.zoom + view.offset_x,
        point.y * view.zoom + view.offset_y,
    )


def distance(p1: Point, p2: Point) -> float:
    """두 점 사이의 유클리드 거리를 반환합니다."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def _as_array(points: Sequence[Point]) -> np.ndarray:
    return np.array([(p.x, p.y) for p in points], dtype=float)


def centroid(points: Sequence[Point]) -> Point:
    """
    꼭짓점 좌표의 산술 평균을 반환합니다.

    영역 이름 라벨을 그릴 위치로 사용됩니다.
    (면적 가중 무게중심이 아니라 단순 꼭짓점 평균입니다.)

    매개변수:
        points: 꼭짓점 목록 (1개 이상)

    반환값:
        평균 좌표 Point
    """
    if not points:
        raise ValueError("centroid of an empty point list is undefined")
    cx, cy = _as_array(points).mean(axis=0)
    return Point(float(cx), float(cy))


def polygon_area(points: Sequence[Point]) -> float:
    """
    신발끈 공식(shoelace)으로 다각형 면적을 계산합니다.

    매개변수:
        points: 다각형 꼭짓점 목록 (마지막 점 → 첫 점 연결은 암묵적)

    반환값:
        면적 (항상 0 이상)
    """
    if len(points) < 3:
        return 0.0
    pts = _as_array(points)
    x = pts[:, 0]
    y = pts[:, 1]
    return float(0.5 * abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))))


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """
    짝-홀 광선 교차법으로 점이 다각형 내부에 있는지 판정합니다.

    매개변수:
        point: 판정할 점
        polygon: 다각형 꼭짓점 목록

    반환값:
        내부이면 True
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    j = n - 1
    for i in range(n):
        pi, pj = polygon[i], polygon[j]
        if (pi.y > point.y) != (pj.y > point.y):
            x_cross = (pj.x - pi.x) * (point.y - pi.y) / (pj.y - pi.y) + pi.x
            if point.x < x_cross:
                inside = not inside
        j = i
    return inside


def visible_logical_rect(view: "ViewTransform", width: float, height: float) -> Tuple[float, float, float, float]:
    """
    화면(width x height)에 보이는 지도 좌표 영역을 계산합니다.

    반환값:
        (left, top, right, bottom) 지도 좌표
    """
    top_left = to_logical(Point(0.0, 0.0), view)
    bottom_right = to_logical(Point(float(width), float(height)), view)
    return top_left.x, top_left.y, bottom_right.x, bottom_right.y


def grid_positions(start: float, end: float, spacing: float) -> List[float]:
    """
    [start, end] 구간을 덮는 격자선 좌표 목록을 반환합니다.

    격자선은 spacing의 정수배 위치에만 놓이므로 패닝해도 격자가 지도에 고정됩니다.

    매개변수:
        start, end: 구간 (지도 좌표)
        spacing: 격자 간격 (0 이하이면 빈 목록)

    반환값:
        격자선 좌표 목록
    """
    if spacing <= 0:
        return []
    start_idx = math.floor(start / spacing)
    end_idx = math.ceil(end / spacing)
    return [i * spacing for i in range(start_idx, end_idx + 1)]
