"""
영역 모델 모듈

이 모듈은 지도 위에 그려지는 이름과 색상을 가진 닫힌 다각형 영역을 정의합니다.

클래스:
    Territory: 확정된 영역을 표현하는 불변 데이터 클래스
"""

import uuid
from dataclasses import dataclass, field
from typing import Iterable, Tuple

from territory_editor.core.constants import MIN_POLYGON_POINTS
from territory_editor.core.errors import InsufficientPoints
from territory_editor.core.geometry import centroid, point_in_polygon, polygon_area
from territory_editor.core.models.point import Point


def new_territory_id() -> str:
    """고유한 영역 ID를 생성합니다."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Territory:
    """
    확정된 영역을 표현하는 데이터 클래스입니다.

    생성 후에는 수정할 수 없으며 삭제만 가능합니다.
    꼭짓점 순서가 변의 순서를 결정하고, 마지막 점 → 첫 점 연결은 암묵적입니다.

    속성:
        name: 영역 이름 (표시용, 중복 허용)
        points: 꼭짓점 목록 (3개 이상)
        color: 테두리/채우기 색상 (16진수 색상 코드)
        id: 영역 고유 식별자 (유일성만 보장)
    """
    name: str
    points: Tuple[Point, ...]
    color: str
    id: str = field(default_factory=new_territory_id)

    def __post_init__(self):
        pts = tuple(self.points)
        if len(pts) < MIN_POLYGON_POINTS:
            raise InsufficientPoints(len(pts), MIN_POLYGON_POINTS)
        object.__setattr__(self, "points", pts)

    @classmethod
    def create(cls, name: str, points: Iterable[Point], color: str) -> "Territory":
        return cls(name=name, points=tuple(points), color=color)

    def centroid(self) -> Point:
        return centroid(self.points)

    def area(self) -> float:
        return polygon_area(self.points)

    def contains(self, point: Point) -> bool:
        return point_in_polygon(point, self.points)

    def to_export_dict(self) -> dict:
        """외부 저장소 전달용 딕셔너리 (내부 id 제외)."""
        return {
            "name": self.name,
            "points": [p.to_dict() for p in self.points],
            "color": self.color,
        }
