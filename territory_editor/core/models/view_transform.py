"""
뷰 변환 모델 모듈

지도 좌표계에서 화면 좌표계로의 아핀 변환(줌 + 오프셋)을 정의합니다.

    screen = logical * zoom + offset

클래스:
    ViewTransform: 현재 줌 배율과 패닝 오프셋
"""

from dataclasses import dataclass

from territory_editor.core.constants import MIN_ZOOM, MAX_ZOOM, ZOOM_IN_FACTOR, ZOOM_OUT_FACTOR


def clamp_zoom(value: float, min_zoom: float = MIN_ZOOM, max_zoom: float = MAX_ZOOM) -> float:
    """줌 값을 [min_zoom, max_zoom] 범위로 제한합니다."""
    return max(min_zoom, min(max_zoom, value))


@dataclass
class ViewTransform:
    """
    지도 뷰의 줌/패닝 상태입니다.

    프로세스 로컬 UI 상태이며 영역 데이터와 함께 저장되지 않습니다.
    줌은 항상 [min_zoom, max_zoom] 범위 안에 있으므로 0이 될 수 없습니다.

    속성:
        zoom: 줌 배율
        offset_x, offset_y: 화면 픽셀 단위 패닝 오프셋 (제한 없음)
        min_zoom, max_zoom: 줌 한계
    """
    zoom: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    min_zoom: float = MIN_ZOOM
    max_zoom: float = MAX_ZOOM

    def __post_init__(self):
        if not 0 < self.min_zoom <= self.max_zoom:
            raise ValueError(f"invalid zoom range [{self.min_zoom}, {self.max_zoom}]")
        self.zoom = clamp_zoom(self.zoom, self.min_zoom, self.max_zoom)

    def zoom_by(self, factor: float) -> float:
        """
        현재 줌에 배수를 곱하고 한계 범위로 제한합니다.

        매개변수:
            factor: 줌 배수 (휠 한 단계 1.1 / 0.9 또는 연속 입력 장치의 임의 배수)

        반환값:
            변경된 줌 배율
        """
        self.zoom = clamp_zoom(self.zoom * factor, self.min_zoom, self.max_zoom)
        return self.zoom

    def zoom_in(self) -> float:
        return self.zoom_by(ZOOM_IN_FACTOR)

    def zoom_out(self) -> float:
        return self.zoom_by(ZOOM_OUT_FACTOR)

    def pan(self, dx: float, dy: float):
        """
        화면 픽셀 단위 드래그 변위만큼 오프셋을 이동합니다.

        변위는 줌으로 나누지 않습니다. 줌 레벨과 관계없이
        마우스를 움직인 만큼 화면이 같은 픽셀 수로 따라옵니다.
        """
        self.offset_x += dx
        self.offset_y += dy

    def reset(self):
        """줌 1.0, 오프셋 (0, 0)으로 되돌립니다."""
        self.zoom = clamp_zoom(1.0, self.min_zoom, self.max_zoom)
        self.offset_x = 0.0
        self.offset_y = 0.0
