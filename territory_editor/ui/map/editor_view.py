"""
영역 편집 캔버스 모듈

이 모듈은 영역 다각형을 그리기 위한 지도 캔버스 위젯을 제공합니다.

클래스:
    TerritoryEditorView: 지도 캔버스 위젯

주요 기능:
    - 배경 격자, 확정된 영역, 초안 다각형 그리기 (매 변경마다 전체 프레임)
    - 마우스 휠 줌 인/아웃
    - 가운데 버튼 / Shift+좌클릭 드래그 패닝 (그리기 모드가 아니면 좌클릭 드래그도 패닝)
    - 그리기 모드에서 좌클릭으로 꼭짓점 추가, 첫 점 근처 클릭으로 닫기 요청
    - 영역 위 우클릭 컨텍스트 메뉴 (삭제)
"""

from PyQt6.QtCore import Qt, QSize, pyqtSignal
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QMenu, QSizePolicy, QWidget

from territory_editor.core.geometry import to_logical
from territory_editor.core.models.point import Point
from territory_editor.core.models.settings import EditorSettings
from territory_editor.core.models.view_transform import ViewTransform
from territory_editor.core.polygon_accumulator import AddPointResult, PolygonAccumulator
from territory_editor.core.render import build_frame
from territory_editor.core.territory_store import TerritoryStore
from territory_editor.ui.map.command_painter import CommandPainter


class TerritoryEditorView(QWidget):
    """
    영역 편집 캔버스입니다.

    시그널:
        coord_changed(float, float): 마우스 위치의 지도 좌표가 변경될 때 발생
        view_changed(): 뷰가 변경(줌, 패닝)될 때 발생
        draft_changed(int): 초안 꼭짓점 수가 바뀔 때 발생
        close_requested(): 첫 꼭짓점 근처를 클릭했을 때 발생
        delete_requested(str): 컨텍스트 메뉴에서 영역 삭제를 선택했을 때 발생 (영역 id)

    속성:
        view: 뷰 변환 (줌/오프셋)
        accumulator: 초안 다각형
        store: 확정된 영역 저장소
        settings: 편집기 설정
        draw_color: 현재 그리기 색상
        is_panning: 패닝 중 여부
        last_pan_pos: 마지막 패닝 위치
    """

    coord_changed = pyqtSignal(float, float)
    view_changed = pyqtSignal()
    draft_changed = pyqtSignal(int)
    close_requested = pyqtSignal()
    delete_requested = pyqtSignal(str)

    def __init__(self, store: TerritoryStore, accumulator: PolygonAccumulator,
                 settings: EditorSettings, parent=None):
        super().__init__(parent)
        self.store = store
        self.accumulator = accumulator
        self.settings = settings
        self.view = ViewTransform(min_zoom=settings.min_zoom, max_zoom=settings.max_zoom)
        self.draw_color = settings.default_color
        self.painter_exec = CommandPainter()

        self.is_panning = False
        self.last_pan_pos = None

        self.setMouseTracking(True)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.update_cursor()

    def sizeHint(self):
        return QSize(self.settings.canvas_width, self.settings.canvas_height)

    def paintEvent(self, event):
        """현재 상태로 프레임 전체를 다시 그립니다."""
        commands = build_frame(
            self.view,
            self.store.list(),
            self.accumulator.draft_points,
            self.draw_color,
            self.width(),
            self.height(),
            self.settings,
        )
        painter = QPainter(self)
        try:
            self.painter_exec.execute(painter, commands)
        finally:
            painter.end()

    def logical_pos(self, pos) -> Point:
        return to_logical(Point(pos.x(), pos.y()), self.view)

    def set_draw_color(self, color: str):
        self.draw_color = color
        self.update()

    def zoom_step(self, zoom_in: bool):
        factor = self.settings.zoom_in_factor if zoom_in else self.settings.zoom_out_factor
        self.view.zoom_by(factor)
        self.view_changed.emit()
        self.update()

    def reset_view(self):
        self.view.reset()
        self.view_changed.emit()
        self.update()

    def notify_draft_changed(self):
        """초안이 외부(버튼 등)에서 바뀐 뒤 호출합니다."""
        self.update_cursor()
        self.draft_changed.emit(len(self.accumulator))
        self.update()

    def wheelEvent(self, event):
        """
        마우스 휠 이벤트를 처리합니다 (줌 인/아웃).

        매개변수:
            event: 휠 이벤트 객체
        """
        delta = event.angleDelta().y()
        if delta == 0:
            return
        self.zoom_step(delta > 0)
        event.accept()

    def mousePressEvent(self, event):
        """
        마우스 클릭 이벤트를 처리합니다.

        가운데 버튼, Shift+좌클릭, 그리기 모드가 아닐 때의 좌클릭은 패닝을 시작합니다.
        그리기 모드의 좌클릭은 꼭짓점을 추가합니다.

        매개변수:
            event: 마우스 이벤트 객체
        """
        button = event.button()
        shift = bool(event.modifiers() & Qt.KeyboardModifier.ShiftModifier)

        if button == Qt.MouseButton.MiddleButton:
            self.start_pan(event)
            return
        if button == Qt.MouseButton.LeftButton and (shift or not self.accumulator.drawing_mode_active):
            self.start_pan(event)
            return

        if button == Qt.MouseButton.LeftButton:
            pt = self.logical_pos(event.position())
            result = self.accumulator.add_point(pt, self.view.zoom)
            if result == AddPointResult.APPENDED:
                self.notify_draft_changed()
            elif result == AddPointResult.CLOSE_REQUESTED:
                self.close_requested.emit()
            return

        # 우클릭 시 컨텍스트 메뉴
        if button == Qt.MouseButton.RightButton:
            self.show_context_menu(event.position())

    def start_pan(self, event):
        """
        패닝을 시작합니다.

        매개변수:
            event: 마우스 이벤트 객체
        """
        self.is_panning = True
        self.last_pan_pos = event.position()
        self.setCursor(Qt.CursorShape.ClosedHandCursor)

    def mouseMoveEvent(self, event):
        """
        마우스 이동 이벤트를 처리합니다.

        패닝 중이면 화면 픽셀 변위만큼 오프셋을 이동합니다 (줌으로 나누지 않음).

        매개변수:
            event: 마우스 이벤트 객체
        """
        pos = event.position()
        if self.is_panning and self.last_pan_pos is not None:
            delta = pos - self.last_pan_pos
            self.last_pan_pos = pos
            self.view.pan(delta.x(), delta.y())
            self.view_changed.emit()
            self.update()
            return

        pt = self.logical_pos(pos)
        self.coord_changed.emit(pt.x, pt.y)

    def mouseReleaseEvent(self, event):
        """패닝을 종료합니다."""
        if self.is_panning:
            self.is_panning = False
            self.last_pan_pos = None
            self.update_cursor()

    def leaveEvent(self, event):
        if self.is_panning:
            self.is_panning = False
            self.last_pan_pos = None
            self.update_cursor()
        super().leaveEvent(event)

    def update_cursor(self):
        """현재 모드에 맞게 커서를 업데이트합니다."""
        if self.accumulator.drawing_mode_active:
            self.setCursor(Qt.CursorShape.CrossCursor)
        else:
            self.setCursor(Qt.CursorShape.OpenHandCursor)

    def territory_at(self, pos):
        """화면 위치에 있는 영역을 반환합니다. 겹치면 위에 그려진(나중에 추가된) 영역이 우선입니다."""
        pt = self.logical_pos(pos)
        hit = None
        for t in self.store.list():
            if t.contains(pt):
                hit = t
        return hit

    def show_context_menu(self, pos):
        """
        컨텍스트 메뉴를 표시합니다.

        매개변수:
            pos: 화면 좌표 위치
        """
        target = self.territory_at(pos)
        if target is None:
            return

        menu = QMenu(self)
        a_title = menu.addAction(f"{target.name} ({len(target.points)} points)")
        a_title.setEnabled(False)
        menu.addSeparator()
        a_del = menu.addAction("Delete Territory")

        action = menu.exec(self.mapToGlobal(pos.toPoint()))
        if action == a_del:
            self.delete_requested.emit(target.id)
