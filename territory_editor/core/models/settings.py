"""
편집기 설정 모델 모듈

이 모듈은 편집기 전반의 설정값들을 관리합니다.

클래스:
    LiveUpdateConfig: 실시간 업데이트(Socket.IO) 연결 설정
    ExportConfig: REST 전달 설정
    RedisConfig: Redis 게시 설정
    EditorSettings: 편집기 전체 설정

함수:
    load_settings: JSON 파일에서 설정 읽기 (파일/키가 없으면 기본값)
    save_settings: 설정을 JSON 파일로 저장
"""

import json
import os
from dataclasses import MISSING, asdict, dataclass, field, fields
from typing import List, Optional

from territory_editor.core.constants import (
    CLOSE_THRESHOLD, DEFAULT_DRAW_COLOR, FILL_ALPHA, GRID_SPACING, MAX_ZOOM, MIN_ZOOM,
    ZOOM_IN_FACTOR, ZOOM_OUT_FACTOR, logger
)


@dataclass
class LiveUpdateConfig:
    """
    실시간 업데이트 채널 연결 설정

    속성:
        enabled: 시작 시 연결 여부
        server_url: Socket.IO 서버 주소
        socketio_path: Socket.IO 엔드포인트 경로
        transports: 사용할 전송 방식 (우선순위 순)
        reconnection_attempts: 재연결 시도 횟수
        reconnection_delay: 재연결 간격 (초)
        initial_map_id: 시작 시 구독할 지도 ID (선택)
    """
    enabled: bool = True
    server_url: str = "http://localhost:5000"
    socketio_path: str = "socket.io"
    transports: List[str] = field(default_factory=lambda: ["websocket", "polling"])
    reconnection_attempts: int = 5
    reconnection_delay: float = 1.0
    initial_map_id: Optional[str] = None


@dataclass
class ExportConfig:
    """
    REST 전달 설정

    속성:
        url: 영역 목록을 POST할 주소 (비어 있으면 비활성)
        timeout_sec: 요청 타임아웃 (초)
    """
    url: str = ""
    timeout_sec: float = 10.0


@dataclass
class RedisConfig:
    """
    Redis 연결 설정

    속성:
        enabled: Redis 게시 활성화 여부
        host: Redis 서버 호스트
        port: Redis 서버 포트
        password: Redis 비밀번호 (선택)
        key_prefix: 영역 목록 키 접두사 ("territories:{mapId}")
        channel: 갱신 알림 채널
        use_tls: TLS 사용 여부
        timeout_sec: 연결 타임아웃 (초)
    """
    enabled: bool = False
    host: str = "127.0.0.1"
    port: int = 6379
    password: Optional[str] = None
    key_prefix: str = "territories"
    channel: str = "territories:updates"
    use_tls: bool = False
    timeout_sec: float = 5.0


@dataclass
class EditorSettings:
    """
    편집기 전체 설정을 담는 데이터 클래스입니다.

    그리기 설정:
        close_threshold: 첫 점 근접 판정 거리 (화면 픽셀)
        grid_spacing: 배경 격자 간격 (논리 단위)
        fill_alpha: 다각형 채우기 불투명도 (0~255)
        default_color: 기본 그리기 색상

    뷰 설정:
        min_zoom, max_zoom: 줌 한계
        zoom_in_factor, zoom_out_factor: 휠/버튼 한 단계 줌 배수
        canvas_width, canvas_height: 캔버스 기본 크기
        background_color, grid_color, label_color: 배경/격자/라벨 색상
        map_image_path: 배경 지도 이미지 (선택)
        theme_mode: UI 테마 모드 (System/Light/Dark)
    """
    # 그리기 설정
    close_threshold: float = CLOSE_THRESHOLD
    grid_spacing: float = GRID_SPACING
    fill_alpha: int = FILL_ALPHA
    default_color: str = DEFAULT_DRAW_COLOR

    # 뷰 설정
    min_zoom: float = MIN_ZOOM
    max_zoom: float = MAX_ZOOM
    zoom_in_factor: float = ZOOM_IN_FACTOR
    zoom_out_factor: float = ZOOM_OUT_FACTOR
    canvas_width: int = 1200
    canvas_height: int = 800
    background_color: str = "#1A1A1A"
    grid_color: str = "#333333"
    label_color: str = "#FFFFFF"
    map_image_path: str = ""

    # 테마 설정
    theme_mode: str = "System"  # "System", "Light", "Dark"

    # 외부 연동 설정
    live_update: LiveUpdateConfig = field(default_factory=LiveUpdateConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    redis: RedisConfig = field(default_factory=RedisConfig)


def _default_of(f):
    if f.default is not MISSING:
        return f.default
    if f.default_factory is not MISSING:
        return f.default_factory()
    return None


def _accepts(default, value) -> bool:
    """기본값의 타입으로 설정값 타입을 확인합니다. None 기본값은 문자열 선택 항목입니다."""
    if default is None:
        return value is None or isinstance(value, str)
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, (int, float)):
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, type(default))


def _build(cls, data, section: str):
    """
    딕셔너리에서 설정 데이터 클래스를 만듭니다.

    알 수 없는 키는 무시하고, 타입이 맞지 않는 값은 경고 후 기본값을 사용합니다.
    섹션이 객체가 아니면 섹션 전체를 기본값으로 대체합니다.
    """
    if data is None:
        return cls()
    if not isinstance(data, dict):
        logger.warning(f"Settings section '{section}' must be an object, using defaults")
        return cls()

    kwargs = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        value = data[f.name]
        if not _accepts(_default_of(f), value):
            logger.warning(f"Ignoring invalid value for {section}.{f.name}: {value!r}")
            continue
        kwargs[f.name] = value
    return cls(**kwargs)


def _check_view_limits(settings: EditorSettings):
    # 줌은 0이 될 수 없음
    if not 0 < settings.min_zoom <= settings.max_zoom:
        logger.warning(
            f"Invalid zoom range [{settings.min_zoom}, {settings.max_zoom}], using [{MIN_ZOOM}, {MAX_ZOOM}]"
        )
        settings.min_zoom = MIN_ZOOM
        settings.max_zoom = MAX_ZOOM
    if settings.zoom_in_factor <= 0:
        logger.warning(f"Invalid zoom_in_factor {settings.zoom_in_factor}, using {ZOOM_IN_FACTOR}")
        settings.zoom_in_factor = ZOOM_IN_FACTOR
    if settings.zoom_out_factor <= 0:
        logger.warning(f"Invalid zoom_out_factor {settings.zoom_out_factor}, using {ZOOM_OUT_FACTOR}")
        settings.zoom_out_factor = ZOOM_OUT_FACTOR


def settings_from_dict(data: dict) -> EditorSettings:
    data = dict(data)
    nested = {
        "live_update": _build(LiveUpdateConfig, data.pop("live_update", None), "live_update"),
        "export": _build(ExportConfig, data.pop("export", None), "export"),
        "redis": _build(RedisConfig, data.pop("redis", None), "redis"),
    }
    settings = _build(EditorSettings, data, "editor")
    for name, value in nested.items():
        setattr(settings, name, value)
    _check_view_limits(settings)
    return settings


def load_settings(path: str) -> EditorSettings:
    """
    JSON 설정 파일을 읽습니다.

    파일이 없거나 읽을 수 없으면 기본 설정을 반환합니다.

    매개변수:
        path: 설정 파일 경로

    반환값:
        EditorSettings
    """
    if not path or not os.path.exists(path):
        return EditorSettings()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read settings file {path}: {e}")
        return EditorSettings()
    if not isinstance(data, dict):
        logger.warning(f"Ignoring settings file {path}: top-level value is not an object")
        return EditorSettings()
    return settings_from_dict(data)


def save_settings(path: str, settings: EditorSettings):
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(asdict(settings), f, indent=4)
