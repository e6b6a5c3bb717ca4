from PyQt6.QtCore import QObject, pyqtSignal

from territory_editor.core.live_update import LiveUpdateBridge


class ConnectWorker(QObject):
    """
    실시간 업데이트 서버 연결을 GUI 스레드 밖에서 수행합니다.

    연결 시도(핸드셰이크)가 블로킹이므로 QThread로 옮겨 실행합니다.
    재연결은 Socket.IO 클라이언트가 자체 스레드에서 처리합니다.
    """
    finished = pyqtSignal(bool)

    def __init__(self, bridge: LiveUpdateBridge):
        super().__init__()
        self.bridge = bridge

    def run(self):
        ok = self.bridge.connect()
        self.finished.emit(ok)
