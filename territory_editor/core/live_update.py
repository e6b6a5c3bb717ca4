"""
실시간 업데이트 브리지 모듈

알림 서버와의 Socket.IO 연결 하나를 소유하고, 현재 선택된 지도 하나에 대한 구독을 관리합니다.

클래스:
    LiveUpdateBridge: 연결 소유 객체 (connect / disconnect / subscribe / unsubscribe)

동작:
    - 연결(재연결 포함)될 때마다 활성 지도가 있으면 join-map을 한 번 보냅니다.
    - 활성 지도를 바꾸면 이전 지도에 leave-map을 보낸 뒤 새 지도에 join-map을 보냅니다.
      연결이 없으면 join은 다음 연결 시점으로 미룹니다.
    - 수신 이벤트의 mapId가 활성 지도와 같을 때만 시그널을 발생시킵니다.
    - 연결 오류는 로그로 남기고 연결 상태 플래그에만 반영합니다.

스레드:
    python-socketio 핸들러는 클라이언트 스레드에서 호출됩니다.
    시그널은 Qt가 GUI 스레드로 전달합니다.
"""

from typing import Optional

import socketio
from socketio.exceptions import ConnectionError as SocketConnectionError
from PyQt6.QtCore import QObject, pyqtSignal

from territory_editor.core.constants import (
    EVENT_JOIN_MAP, EVENT_LEAVE_MAP, EVENT_MAP_UPDATE, EVENT_TERRITORY_UPDATE, logger
)
from territory_editor.core.errors import PayloadError
from territory_editor.core.models.settings import LiveUpdateConfig
from territory_editor.core.payloads import MapUpdate, TerritoryUpdate, parse_payload


class LiveUpdateBridge(QObject):
    """
    지도별 실시간 업데이트 채널 브리지입니다.

    시그널:
        connection_changed(bool): 연결 상태가 바뀔 때 발생
        territory_updated(object): 활성 지도의 TerritoryUpdate 수신
        map_updated(object): 활성 지도의 MapUpdate 수신

    속성:
        _config: 연결 설정
        _client: Socket.IO 클라이언트
        _connected: 연결 상태
        _active_map_id: 현재 구독 중인 지도 ID
    """

    connection_changed = pyqtSignal(bool)
    territory_updated = pyqtSignal(object)
    map_updated = pyqtSignal(object)

    def __init__(self, config: LiveUpdateConfig, client=None, parent=None):
        """
        매개변수:
            config: 연결 설정
            client: Socket.IO 클라이언트 (없으면 설정값으로 생성)
            parent: 부모 QObject
        """
        super().__init__(parent)
        self._config = config
        if client is None:
            client = socketio.Client(
                reconnection=True,
                reconnection_attempts=config.reconnection_attempts,
                reconnection_delay=config.reconnection_delay,
            )
        self._client = client
        self._connected = False
        self._active_map_id: Optional[str] = config.initial_map_id

        self._client.on("connect", self._on_connect)
        self._client.on("disconnect", self._on_disconnect)
        self._client.on("connect_error", self._on_connect_error)
        self._client.on(EVENT_TERRITORY_UPDATE, self._on_territory_update)
        self._client.on(EVENT_MAP_UPDATE, self._on_map_update)

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def active_map_id(self) -> Optional[str]:
        return self._active_map_id

    def _set_connected(self, value: bool):
        if self._connected != value:
            self._connected = value
            self.connection_changed.emit(value)

    def connect(self) -> bool:
        """
        알림 서버에 연결합니다.

        첫 연결 실패도 클라이언트의 재연결 설정(횟수, 간격)에 따라 재시도합니다.
        모두 실패하면 다시 호출하여 연결할 수 있습니다.

        반환값:
            연결 성공 여부 (실패는 로그와 상태 플래그로만 알림)
        """
        if self._connected:
            return True
        url = self._config.server_url
        logger.info(f"[LiveUpdate] Connecting to {url}")
        try:
            self._client.connect(
                url,
                transports=list(self._config.transports),
                socketio_path=self._config.socketio_path,
                retry=True,
            )
        except SocketConnectionError as e:
            logger.error(f"[LiveUpdate] Connection to {url} failed: {e}")
            self._set_connected(False)
            return False
        return True

    def disconnect(self):
        """연결을 종료합니다. 구독 상태(활성 지도)는 유지되어 다음 연결 시 복원됩니다."""
        logger.info("[LiveUpdate] Disconnecting")
        self._client.disconnect()
        self._set_connected(False)

    def subscribe(self, map_id: str):
        """
        지도 구독을 시작합니다.

        다른 지도를 구독 중이면 먼저 구독을 해지합니다.
        연결이 없으면 join-map은 연결 시점까지 미뤄집니다.

        매개변수:
            map_id: 구독할 지도 ID
        """
        if map_id == self._active_map_id:
            return
        if self._active_map_id is not None:
            self.unsubscribe(self._active_map_id)

        self._active_map_id = map_id
        if self._connected:
            self._emit(EVENT_JOIN_MAP, map_id)
        else:
            logger.info(f"[LiveUpdate] Offline, join for map {map_id} deferred until connect")

    def unsubscribe(self, map_id: str):
        """활성 지도가 map_id이면 구독을 해지합니다. 아니면 아무것도 하지 않습니다."""
        if map_id != self._active_map_id:
            return
        if self._connected:
            self._emit(EVENT_LEAVE_MAP, map_id)
        self._active_map_id = None

    def set_active_map(self, map_id: Optional[str]):
        """활성 지도를 바꿉니다. None이면 현재 구독만 해지합니다."""
        if map_id:
            self.subscribe(map_id)
        elif self._active_map_id is not None:
            self.unsubscribe(self._active_map_id)

    def close(self):
        """활성 지도에서 나간 뒤 연결을 종료합니다."""
        if self._active_map_id is not None:
            self.unsubscribe(self._active_map_id)
        self.disconnect()

    def _emit(self, event: str, map_id: str):
        logger.info(f"[LiveUpdate] {event} {map_id}")
        self._client.emit(event, map_id)

    def _on_connect(self):
        logger.info("[LiveUpdate] Connected")
        self._set_connected(True)
        if self._active_map_id is not None:
            self._emit(EVENT_JOIN_MAP, self._active_map_id)

    def _on_disconnect(self, *args):
        logger.info("[LiveUpdate] Disconnected")
        self._set_connected(False)

    def _on_connect_error(self, data=None):
        logger.error(f"[LiveUpdate] Connection error: {data}")
        self._set_connected(False)

    def _accept(self, event: str, raw):
        try:
            payload = parse_payload(event, raw)
        except PayloadError as e:
            logger.warning(f"[LiveUpdate] Dropping malformed {event} payload: {e}")
            return None
        if payload.map_id != self._active_map_id:
            # 지도 전환 직후 도착한 이전 지도의 이벤트
            return None
        return payload

    def _on_territory_update(self, data):
        payload = self._accept(EVENT_TERRITORY_UPDATE, data)
        if isinstance(payload, TerritoryUpdate):
            logger.info(f"[LiveUpdate] Territory update for map {payload.map_id}: {payload.territory_id}")
            self.territory_updated.emit(payload)

    def _on_map_update(self, data):
        payload = self._accept(EVENT_MAP_UPDATE, data)
        if isinstance(payload, MapUpdate):
            logger.info(f"[LiveUpdate] Map update for map {payload.map_id}")
            self.map_updated.emit(payload)
