"""
다각형 누적기 모듈

영역을 그리는 동안의 작업 상태(초안 다각형)를 관리합니다.

클래스:
    AddPointResult: 클릭 처리 결과
    PolygonAccumulator: 초안 꼭짓점 목록과 그리기 모드 상태

흐름:
    enter_drawing_mode() → add_point() 반복 (undo_last/clear 가능) → commit()
"""

from enum import Enum
from typing import List

from territory_editor.core.constants import CLOSE_THRESHOLD, MIN_POLYGON_POINTS
from territory_editor.core.errors import EmptyName, InsufficientPoints
from territory_editor.core.geometry import distance
from territory_editor.core.models.point import Point
from territory_editor.core.models.territory import Territory


class AddPointResult(Enum):
    APPENDED = "appended"  # 꼭짓점 추가됨
    CLOSE_REQUESTED = "close_requested"  # 첫 점 근처 클릭, 추가하지 않음
    IGNORED = "ignored"  # 그리기 모드가 아님


class PolygonAccumulator:
    """
    그리는 중인 영역의 꼭짓점을 누적합니다.

    속성:
        draft_points: 초안 꼭짓점 목록 (삽입 순서 유지)
        drawing_mode_active: 그리기 모드 여부
        close_threshold: 첫 점 근접 판정 거리 (화면 픽셀 기준)
    """

    def __init__(self, close_threshold: float = CLOSE_THRESHOLD):
        self.draft_points: List[Point] = []
        self.drawing_mode_active = False
        self.close_threshold = close_threshold

    def __len__(self):
        return len(self.draft_points)

    def enter_drawing_mode(self):
        """그리기 모드를 켭니다. 기존 초안은 유지되므로 이어 그릴 수 있습니다."""
        self.drawing_mode_active = True

    def exit_drawing_mode(self, clear_draft: bool = True):
        """
        그리기 모드를 끕니다.

        매개변수:
            clear_draft: True이면 초안도 버립니다.
        """
        self.drawing_mode_active = False
        if clear_draft:
            self.draft_points = []

    def is_near_first_point(self, p: Point, zoom: float) -> bool:
        """
        점이 첫 꼭짓점의 닫기 판정 거리 안에 있는지 확인합니다.

        판정 거리는 화면 픽셀 기준이므로 지도 좌표에서는 zoom으로 나눕니다.
        꼭짓점이 3개 미만이면 항상 False입니다.
        """
        if len(self.draft_points) < MIN_POLYGON_POINTS:
            return False
        return distance(p, self.draft_points[0]) < self.close_threshold / zoom

    def add_point(self, p: Point, zoom: float = 1.0) -> AddPointResult:
        """
        클릭 위치를 초안에 추가합니다.

        매개변수:
            p: 지도 좌표 클릭 위치
            zoom: 현재 줌 배율

        반환값:
            AddPointResult (첫 점 근처 클릭은 CLOSE_REQUESTED, 점은 추가되지 않음)
        """
        if not self.drawing_mode_active:
            return AddPointResult.IGNORED
        if self.is_near_first_point(p, zoom):
            return AddPointResult.CLOSE_REQUESTED
        self.draft_points.append(p)
        return AddPointResult.APPENDED

    def undo_last(self):
        """마지막 꼭짓점을 제거합니다. 비어 있으면 아무것도 하지 않습니다."""
        if self.draft_points:
            self.draft_points.pop()

    def clear(self):
        self.draft_points = []

    def can_commit(self, name: str) -> bool:
        return len(self.draft_points) >= MIN_POLYGON_POINTS and bool(name.strip())

    def commit(self, name: str, color: str) -> Territory:
        """
        초안을 영역으로 확정합니다.

        성공하면 초안을 비우고 그리기 모드를 종료합니다.

        매개변수:
            name: 영역 이름 (앞뒤 공백 제거 후 저장)
            color: 영역 색상

        반환값:
            새 Territory

        예외:
            InsufficientPoints: 꼭짓점이 3개 미만
            EmptyName: 이름이 비어 있음
        """
        if len(self.draft_points) < MIN_POLYGON_POINTS:
            raise InsufficientPoints(len(self.draft_points), MIN_POLYGON_POINTS)
        label = name.strip()
        if not label:
            raise EmptyName()

        territory = Territory.create(label, list(self.draft_points), color)
        self.exit_drawing_mode(clear_draft=True)
        return territory
