"""
메인 윈도우 모듈

영역 편집기의 메인 윈도우를 제공합니다.

클래스:
    MainWindow: 툴바, 편집 캔버스, 속성/목록 패널로 구성된 메인 윈도우

주요 기능:
    - 그리기 툴바: 그리기 시작/취소, 점 되돌리기, 초안 지우기, 영역 저장, 줌
    - 영역 파일 열기/저장, 종료 시 저장되지 않은 변경 확인
    - REST 업로드와 Redis 게시
    - 실시간 업데이트 서버 연결(작업 스레드), 재연결, 지도 구독 및 수신 로그
"""

import os

from PyQt6.QtCore import Qt, QThread, pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QColorDialog, QFileDialog, QFormLayout, QFrame, QHBoxLayout, QLabel, QLineEdit, QListWidget,
    QListWidgetItem, QMainWindow, QPushButton, QSizePolicy, QToolBar, QVBoxLayout, QWidget
)

from territory_editor.core.constants import APP_NAME, DEFAULT_WINDOW_SIZE, logger
from territory_editor.core.errors import ExportError, TerritoryFileError, ValidationError
from territory_editor.core.exporter import RedisTerritoryPublisher, TerritoryUploader, build_export_payload
from territory_editor.core.live_update import LiveUpdateBridge
from territory_editor.core.models.settings import EditorSettings
from territory_editor.core.polygon_accumulator import PolygonAccumulator
from territory_editor.core.territory_io import load_territories, save_territories
from territory_editor.core.territory_store import TerritoryStore
from territory_editor.ui.map.editor_view import TerritoryEditorView
from territory_editor.ui.widgets.message_box import (
    show_critical, show_information, show_question, show_warning
)
from territory_editor.workers.connect_worker import ConnectWorker

TOOLBAR_QSS = """
    QToolBar {
        background-color: transparent;
        border-bottom: 1px solid #CCC;
        spacing: 3px;
    }
    QToolBar::separator {
        background-color: #808080;
        width: 2px;
        margin-top: 4px;
        margin-bottom: 4px;
    }
"""


class MainWindow(QMainWindow):
    data_changed = pyqtSignal()

    def __init__(self, settings: EditorSettings = None, bridge: LiveUpdateBridge = None):
        super().__init__()
        self.settings = settings or EditorSettings()
        self.setWindowTitle(APP_NAME)
        self.resize(*DEFAULT_WINDOW_SIZE)

        self.store = TerritoryStore()
        self.accumulator = PolygonAccumulator(self.settings.close_threshold)
        self.uploader = TerritoryUploader(self.settings.export)
        self.redis_publisher = RedisTerritoryPublisher(self.settings.redis)
        self.file_path = ""

        self.bridge = bridge or LiveUpdateBridge(self.settings.live_update, parent=self)
        self.bridge.connection_changed.connect(self.on_connection_changed)
        self.bridge.territory_updated.connect(self.on_territory_update)
        self.bridge.map_updated.connect(self.on_map_update)
        self.worker = None
        self.worker_thread = None

        self.init_ui()
        self.data_changed.connect(self.refresh_territory_list)
        self.update_drawing_controls()
        self.on_connection_changed(self.bridge.is_connected)

        if self.settings.live_update.enabled:
            self.start_connection()

    def init_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        main_v = QVBoxLayout(central)
        main_v.setContentsMargins(0, 0, 0, 0)
        main_v.setSpacing(0)

        top_tb = QToolBar()
        top_tb.setStyleSheet(TOOLBAR_QSS)
        main_v.addWidget(top_tb)

        top_tb.addWidget(QLabel(" File: "))
        top_tb.addAction("Open Territories", self.open_territories)
        top_tb.addAction("Save Territories", self.save_territories)
        top_tb.addAction("Exit", self.close)
        top_tb.addSeparator()

        top_tb.addWidget(QLabel(" Export: "))
        top_tb.addAction("Upload", self.upload_territories)
        top_tb.addAction("Publish to Redis", self.publish_territories)
        top_tb.addSeparator()

        top_tb.addWidget(QLabel(" Live: "))
        self.a_reconnect = top_tb.addAction("Reconnect", self.start_connection)
        top_tb.addSeparator()

        body = QWidget()
        main_h = QHBoxLayout(body)
        main_h.setContentsMargins(5, 5, 5, 5)
        main_h.setSpacing(15)
        main_v.addWidget(body)

        # --- 캔버스 영역 ---
        left_widget = QWidget()
        left_v = QVBoxLayout(left_widget)
        left_v.setContentsMargins(0, 0, 0, 0)

        tb = QToolBar()
        tb.setSizePolicy(QSizePolicy.Policy.Preferred, QSizePolicy.Policy.Fixed)
        tb.setStyleSheet(TOOLBAR_QSS)
        left_v.addWidget(tb)

        tb.addWidget(QLabel("Draw: "))
        self.a_toggle_draw = tb.addAction("Start Drawing", self.toggle_drawing)
        self.a_undo = tb.addAction("Undo Point", self.undo_point)
        self.a_clear = tb.addAction("Clear", self.clear_draft)
        self.a_commit = tb.addAction("Save Territory", self.commit_territory)
        tb.addSeparator()

        tb.addWidget(QLabel("View: "))
        tb.addAction("Zoom In", lambda: self.view.zoom_step(True))
        tb.addAction("Zoom Out", lambda: self.view.zoom_step(False))
        tb.addAction("Reset", lambda: self.view.reset_view())

        self.view = TerritoryEditorView(self.store, self.accumulator, self.settings, self)
        left_v.addWidget(self.view)

        self.lbl_coords = QLabel("X: 0.0 Y: 0.0  Zoom: 100%")
        self.lbl_coords.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        left_v.addWidget(self.lbl_coords)

        self.lbl_hint = QLabel("")
        left_v.addWidget(self.lbl_hint)

        main_h.addWidget(left_widget, 3)

        # --- 속성/목록 영역 ---
        right_widget = QWidget()
        right_v = QVBoxLayout(right_widget)
        right_v.setContentsMargins(0, 0, 0, 0)

        form = QFormLayout()
        self.name_edit = QLineEdit()
        self.name_edit.setPlaceholderText("Territory name...")
        self.name_edit.textChanged.connect(lambda _t: self.update_drawing_controls())
        form.addRow("Name:", self.name_edit)

        self.color_btn = QPushButton()
        self.color_btn.clicked.connect(self.pick_color)
        form.addRow("Color:", self.color_btn)
        self.set_color_button(self.view.draw_color)

        map_row = QHBoxLayout()
        self.map_edit = QLineEdit(self.settings.live_update.initial_map_id or "")
        self.map_edit.setPlaceholderText("Map ID")
        self.map_edit.returnPressed.connect(self.apply_map_id)
        btn_join = QPushButton("Follow")
        btn_join.clicked.connect(self.apply_map_id)
        map_row.addWidget(self.map_edit)
        map_row.addWidget(btn_join)
        form.addRow("Map:", map_row)

        self.lbl_conn = QLabel("-")
        form.addRow("Live:", self.lbl_conn)
        right_v.addLayout(form)

        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        right_v.addWidget(line)

        self.lbl_count = QLabel("Territories (0)")
        self.lbl_count.setObjectName("boldLbl")
        right_v.addWidget(self.lbl_count)

        self.territory_list = QListWidget()
        right_v.addWidget(self.territory_list)

        btn_del = QPushButton("Delete Selected")
        btn_del.clicked.connect(self.delete_selected)
        right_v.addWidget(btn_del)

        lbl_log = QLabel("Live Updates")
        lbl_log.setObjectName("boldLbl")
        right_v.addWidget(lbl_log)
        self.update_log = QListWidget()
        right_v.addWidget(self.update_log)

        main_h.addWidget(right_widget, 1)

        self.view.coord_changed.connect(self.update_status)
        self.view.view_changed.connect(self.update_zoom_label)
        self.view.draft_changed.connect(lambda _n: self.update_drawing_controls())
        self.view.close_requested.connect(self.on_close_requested)
        self.view.delete_requested.connect(self.delete_territory)

    # ------------------------------------------------------------------
    # 상태 표시
    # ------------------------------------------------------------------
    def update_status(self, x, y):
        self.lbl_coords.setText(f"X: {x:.1f} Y: {y:.1f}  Zoom: {self.view.view.zoom * 100:.0f}%")

    def update_zoom_label(self):
        text = self.lbl_coords.text()
        head = text.split("  Zoom:")[0]
        self.lbl_coords.setText(f"{head}  Zoom: {self.view.view.zoom * 100:.0f}%")

    def update_drawing_controls(self):
        drawing = self.accumulator.drawing_mode_active
        n = len(self.accumulator)
        self.a_toggle_draw.setText("Cancel Drawing" if drawing else "Start Drawing")
        self.a_undo.setEnabled(drawing and n > 0)
        self.a_clear.setEnabled(drawing and n > 0)
        self.a_commit.setEnabled(drawing and self.accumulator.can_commit(self.name_edit.text()))
        self.a_commit.setText(f"Save Territory ({n} points)")
        self.name_edit.setEnabled(drawing)
        self.color_btn.setEnabled(drawing)

        if drawing:
            self.lbl_hint.setText(
                "Click to add points | Shift+drag or middle button to pan | "
                "Wheel to zoom | Click the first point to finish (3+ points)"
            )
        else:
            self.lbl_hint.setText("Press \"Start Drawing\" to create a new territory")

    def refresh_territory_list(self):
        self.territory_list.clear()
        for t in self.store.list():
            item = QListWidgetItem(f"{t.name}  ({len(t.points)} points, area {t.area():.0f})")
            item.setData(Qt.ItemDataRole.UserRole, t.id)
            item.setForeground(Qt.GlobalColor.black)
            item.setBackground(self._light_color(t.color))
            self.territory_list.addItem(item)
        self.lbl_count.setText(f"Territories ({len(self.store)})")
        self.view.update()

    @staticmethod
    def _light_color(hex_color):
        c = QColor(hex_color)
        c.setAlpha(0x60)
        return c

    def set_color_button(self, color):
        self.color_btn.setText(color)
        self.color_btn.setStyleSheet(f"background-color: {color}")

    # ------------------------------------------------------------------
    # 그리기
    # ------------------------------------------------------------------
    def toggle_drawing(self):
        if self.accumulator.drawing_mode_active:
            self.accumulator.exit_drawing_mode(clear_draft=True)
        else:
            self.accumulator.enter_drawing_mode()
        self.view.notify_draft_changed()
        self.update_drawing_controls()

    def undo_point(self):
        self.accumulator.undo_last()
        self.view.notify_draft_changed()

    def clear_draft(self):
        self.accumulator.clear()
        self.view.notify_draft_changed()

    def pick_color(self):
        c = QColorDialog.getColor(QColor(self.view.draw_color), self)
        if c.isValid():
            color = c.name().upper()
            self.view.set_draw_color(color)
            self.set_color_button(color)

    def commit_territory(self):
        try:
            territory = self.accumulator.commit(self.name_edit.text(), self.view.draw_color)
        except ValidationError as e:
            show_warning(self, "Cannot Save Territory", str(e))
            return

        self.store.add(territory)
        logger.info(f"Territory '{territory.name}' created with {len(territory.points)} points")
        self.name_edit.clear()
        self.view.notify_draft_changed()
        self.update_drawing_controls()
        self.data_changed.emit()

    def on_close_requested(self):
        """첫 꼭짓점 근처를 클릭하면 이름이 있을 때 바로 확정하고, 없으면 이름 입력을 요청합니다."""
        if self.name_edit.text().strip():
            self.commit_territory()
        else:
            self.lbl_hint.setText("Polygon closed: enter a name and press \"Save Territory\"")
            self.name_edit.setFocus()

    def delete_territory(self, territory_id):
        if self.store.remove(territory_id):
            self.data_changed.emit()

    def delete_selected(self):
        item = self.territory_list.currentItem()
        if item is None:
            show_information(self, "Info", "Please select a territory.")
            return
        self.delete_territory(item.data(Qt.ItemDataRole.UserRole))

    # ------------------------------------------------------------------
    # 파일 / 내보내기
    # ------------------------------------------------------------------
    def open_territories(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open Territories", "", "JSON (*.json)")
        if not path:
            return
        try:
            territories = load_territories(path)
        except TerritoryFileError as e:
            show_critical(self, "Open Failed", str(e))
            return

        if len(self.store) and not show_question(
                self, "Replace Territories",
                f"Replace the {len(self.store)} current territories with {len(territories)} from file?"):
            return
        self.store.replace_all(territories)
        self.store.mark_saved()
        self.file_path = path
        self.data_changed.emit()

    def save_territories(self):
        path = self.file_path
        if not path:
            path, _ = QFileDialog.getSaveFileName(self, "Save Territories", "territories.json", "JSON (*.json)")
            if not path:
                return
        try:
            save_territories(path, self.store)
        except OSError as e:
            show_critical(self, "Save Failed", str(e))
            return
        self.file_path = path
        self.statusBar().showMessage(f"Saved {len(self.store)} territories to {os.path.basename(path)}", 5000)

    def upload_territories(self):
        if not self.uploader.enabled:
            show_information(self, "Upload", "Set export.url in the settings file to enable uploads.")
            return
        try:
            self.uploader.upload(build_export_payload(self.store))
        except ExportError as e:
            show_critical(self, "Upload Failed", str(e))
            return
        self.statusBar().showMessage(f"Uploaded {len(self.store)} territories", 5000)

    def publish_territories(self):
        map_id = self.bridge.active_map_id or self.map_edit.text().strip()
        if not map_id:
            show_information(self, "Publish", "Enter a map ID first.")
            return
        if not self.settings.redis.enabled:
            show_information(self, "Publish", "Enable redis in the settings file to publish.")
            return
        if self.redis_publisher.publish(map_id, build_export_payload(self.store)):
            self.statusBar().showMessage(f"Published {len(self.store)} territories for {map_id}", 5000)
        else:
            show_critical(self, "Publish Failed", "Could not publish to Redis. See the log for details.")

    # ------------------------------------------------------------------
    # 실시간 업데이트
    # ------------------------------------------------------------------
    def start_connection(self):
        """연결 작업을 작업 스레드에서 시작합니다. 이미 연결 중이거나 시도 중이면 무시합니다."""
        if self.bridge.is_connected:
            return
        if self.worker_thread is not None and self.worker_thread.isRunning():
            return
        self.a_reconnect.setEnabled(False)
        self.worker_thread = QThread()
        self.worker = ConnectWorker(self.bridge)
        self.worker.moveToThread(self.worker_thread)
        self.worker_thread.started.connect(self.worker.run)
        self.worker.finished.connect(self.worker_thread.quit)
        self.worker.finished.connect(self.on_connect_finished)
        self.worker_thread.start()

    def on_connect_finished(self, ok):
        self.a_reconnect.setEnabled(True)
        if not ok:
            self.statusBar().showMessage("Live update server unreachable, use \"Reconnect\" to try again", 5000)

    def apply_map_id(self):
        self.bridge.set_active_map(self.map_edit.text().strip() or None)
        self.on_connection_changed(self.bridge.is_connected)

    def on_connection_changed(self, connected):
        map_id = self.bridge.active_map_id or "-"
        state = "Connected" if connected else "Offline"
        self.lbl_conn.setText(f"{state} (map: {map_id})")
        self.lbl_conn.setStyleSheet("color: #2E7D32;" if connected else "color: #C62828;")

    def on_territory_update(self, update):
        name = update.territory.get("name") or update.territory_id or "?"
        self.update_log.addItem(f"[{update.timestamp or '-'}] Territory updated: {name}")
        self.update_log.scrollToBottom()

    def on_map_update(self, update):
        self.update_log.addItem(f"[{update.timestamp or '-'}] Map {update.map_id} updated")
        self.update_log.scrollToBottom()

    def cleanup(self):
        if self.worker_thread and self.worker_thread.isRunning():
            self.worker_thread.quit()
            self.worker_thread.wait()
        self.bridge.close()
        self.redis_publisher.disconnect()

    def closeEvent(self, event):
        if self.store.modified:
            reply = show_question(self, "Save Territories", "Do you want to save changes to the territories?")
            if reply:
                self.save_territories()
        self.cleanup()
        event.accept()
