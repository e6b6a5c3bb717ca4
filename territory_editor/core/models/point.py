from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """
    지도 좌표계(줌/패닝이 적용되지 않은 논리 좌표)의 한 점입니다.

    속성:
        x: 논리 X 좌표
        y: 논리 Y 좌표
    """
    x: float
    y: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}
