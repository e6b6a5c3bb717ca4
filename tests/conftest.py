import pytest
from PyQt6.QtCore import QCoreApplication
from socketio.exceptions import ConnectionError as SocketConnectionError

from territory_editor.core.models.point import Point


@pytest.fixture(scope="session")
def qt_core_app():
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.fixture
def square_points():
    return [Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100)]


class FakeSocketClient:
    """socketio.Client 대역: 핸들러를 기록하고 emit 호출을 저장합니다."""

    def __init__(self, fail_connect=False, failures=0, max_attempts=6):
        self.handlers = {}
        self.emitted = []
        self.connect_calls = []
        # fail_connect: 서버가 계속 내려가 있음, failures: 처음 몇 번만 실패
        self.fail_connect = fail_connect
        self.failures = failures
        self.max_attempts = max_attempts

    def on(self, event, handler=None):
        self.handlers[event] = handler

    def emit(self, event, data=None):
        self.emitted.append((event, data))

    def connect(self, url, **kwargs):
        self.connect_calls.append((url, kwargs))
        attempts = self.max_attempts if kwargs.get("retry") else 1
        for _ in range(attempts):
            if self.fail_connect:
                break
            if self.failures:
                self.failures -= 1
                continue
            self.handlers["connect"]()
            return
        raise SocketConnectionError("refused")

    def disconnect(self):
        self.handlers["disconnect"]()

    # 서버 쪽 이벤트 흉내
    def fire(self, event, *args):
        self.handlers[event](*args)


@pytest.fixture
def fake_client():
    return FakeSocketClient()
