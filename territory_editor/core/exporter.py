"""
영역 내보내기 모듈

확정된 영역 목록을 외부 저장소로 전달합니다.

클래스:
    TerritoryUploader: REST 엔드포인트로 POST 전송
    RedisTerritoryPublisher: Redis 키에 저장하고 갱신 알림을 게시

전송 형식:
    {"territories": [{"name", "points": [{"x", "y"}], "color"}, ...]}

Redis 형식:
    Key: "{key_prefix}:{mapId}"  Value: 위 JSON
    Channel: "{channel}"  Message: {"mapId", "count"}
"""

import json
from typing import Optional

import redis
import requests

from territory_editor.core.constants import logger
from territory_editor.core.errors import ExportError
from territory_editor.core.models.settings import ExportConfig, RedisConfig
from territory_editor.core.territory_store import TerritoryStore


def build_export_payload(store: TerritoryStore) -> dict:
    """저장소의 모든 영역을 전송 형식으로 만듭니다."""
    return {"territories": store.export_all()}


class TerritoryUploader:
    """
    REST 엔드포인트로 영역 목록을 전송하는 클래스

    속성:
        _config: REST 전달 설정
        _session: HTTP 세션
    """

    def __init__(self, config: ExportConfig, session: Optional[requests.Session] = None):
        self._config = config
        self._session = session or requests.Session()

    @property
    def enabled(self) -> bool:
        return bool(self._config.url)

    def upload(self, payload: dict) -> dict:
        """
        영역 목록을 POST로 전송합니다.

        매개변수:
            payload: build_export_payload 출력

        반환값:
            서버 응답 JSON (본문이 없으면 빈 딕셔너리)

        예외:
            ExportError: 주소 미설정, 전송 실패, 2xx 이외의 응답
        """
        if not self.enabled:
            raise ExportError("Export URL is not configured")

        url = self._config.url
        count = len(payload.get("territories", []))
        try:
            resp = self._session.post(url, json=payload, timeout=self._config.timeout_sec)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"[Export] Upload of {count} territories to {url} failed: {e}")
            raise ExportError(f"Upload to {url} failed: {e}") from e

        logger.info(f"[Export] Uploaded {count} territories to {url} ({resp.status_code})")
        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError:
            return {}


class RedisTerritoryPublisher:
    """
    Redis로 영역 목록을 게시하는 클래스

    속성:
        _config: Redis 설정
        _client: Redis 클라이언트
        _connected: 연결 상태
    """

    def __init__(self, config: RedisConfig, client=None):
        """
        매개변수:
            config: Redis 설정
            client: 이미 만들어진 Redis 클라이언트 (선택)
        """
        self._config = config
        self._client: Optional['redis.Redis'] = client
        self._connected = client is not None

    def connect(self) -> bool:
        """
        Redis 서버에 연결합니다.

        반환값:
            연결 성공 여부
        """
        if not self._config.enabled:
            return False

        try:
            pool_kwargs = dict(
                host=self._config.host,
                port=self._config.port,
                db=0,
                socket_connect_timeout=self._config.timeout_sec,
                socket_timeout=self._config.timeout_sec,
                password=self._config.password,
            )
            if self._config.use_tls:
                pool_kwargs.update(connection_class=redis.SSLConnection, ssl_cert_reqs=None)
            pool = redis.ConnectionPool(**pool_kwargs)

            self._client = redis.Redis(connection_pool=pool, decode_responses=True)
            # 연결 테스트
            self._client.ping()
            self._connected = True
            return True

        except redis.RedisError as e:
            logger.error(f"[Redis] Connection to {self._config.host}:{self._config.port} failed: {e}")
            self._connected = False
            self._client = None
            return False

    def disconnect(self):
        """Redis 연결을 종료합니다."""
        if self._client:
            try:
                self._client.close()
            except redis.RedisError as e:
                logger.warning(f"[Redis] Error while closing connection: {e}")
        self._client = None
        self._connected = False

    def is_connected(self) -> bool:
        """연결 상태를 반환합니다."""
        return self._connected and self._client is not None

    def key_for(self, map_id: str) -> str:
        return f"{self._config.key_prefix}:{map_id}"

    def publish(self, map_id: str, payload: dict) -> bool:
        """
        영역 목록을 Redis에 저장하고 갱신 알림을 게시합니다.

        매개변수:
            map_id: 지도 ID
            payload: build_export_payload 출력

        반환값:
            전송 성공 여부
        """
        if not self.is_connected():
            # 재연결 시도
            if not self.connect():
                return False

        count = len(payload.get("territories", []))
        try:
            self._client.set(self.key_for(map_id), json.dumps(payload))
            self._client.publish(self._config.channel, json.dumps({"mapId": map_id, "count": count}))
        except redis.RedisError as e:
            logger.error(f"[Redis] Publishing territories for map {map_id} failed: {e}")
            self._connected = False
            return False

        logger.info(f"[Redis] Published {count} territories for map {map_id}")
        return True

    def update_config(self, config: RedisConfig):
        """설정을 업데이트하고 재연결합니다."""
        self.disconnect()
        self._config = config
        if config.enabled:
            self.connect()
