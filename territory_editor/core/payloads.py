"""
실시간 업데이트 페이로드 모듈

실시간 채널에서 들어오는 이벤트 페이로드를 검증하여 태그가 붙은 데이터 클래스로 변환합니다.
모든 페이로드는 필터링에 쓰이는 문자열 mapId 필드를 반드시 포함해야 합니다.

서버 메시지 형식:
    territory-update: {"type", "mapId", "territoryId", "territory": {...}, "timestamp"}
    map-update: {"type", "mapId", "timestamp"}
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from territory_editor.core.constants import EVENT_MAP_UPDATE, EVENT_TERRITORY_UPDATE
from territory_editor.core.errors import PayloadError


@dataclass(frozen=True)
class TerritoryUpdate:
    map_id: str
    territory_id: Optional[str] = None
    territory: Dict[str, Any] = field(default_factory=dict)
    timestamp: Optional[str] = None
    type: str = EVENT_TERRITORY_UPDATE


@dataclass(frozen=True)
class MapUpdate:
    map_id: str
    timestamp: Optional[str] = None
    type: str = EVENT_MAP_UPDATE


MapEvent = Union[TerritoryUpdate, MapUpdate]


def _require_map_id(raw: Any) -> str:
    if not isinstance(raw, dict):
        raise PayloadError(f"Payload must be an object, got {type(raw).__name__}")
    map_id = raw.get("mapId")
    if not isinstance(map_id, str) or not map_id:
        raise PayloadError("Payload is missing a non-empty string 'mapId'")
    return map_id


def _optional_str(raw: dict, key: str) -> Optional[str]:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise PayloadError(f"Payload field '{key}' must be a string")
    return value


def parse_payload(event: str, raw: Any) -> MapEvent:
    """
    이벤트 이름에 맞게 페이로드를 검증하고 변환합니다.

    매개변수:
        event: 이벤트 이름 ("territory-update" 또는 "map-update")
        raw: 수신한 원본 페이로드

    반환값:
        TerritoryUpdate 또는 MapUpdate

    예외:
        PayloadError: 알 수 없는 이벤트이거나 형식이 잘못된 경우
    """
    map_id = _require_map_id(raw)
    timestamp = _optional_str(raw, "timestamp")

    if event == EVENT_TERRITORY_UPDATE:
        territory = raw.get("territory")
        if territory is None:
            territory = {}
        elif not isinstance(territory, dict):
            raise PayloadError("Payload field 'territory' must be an object")
        return TerritoryUpdate(
            map_id=map_id,
            territory_id=_optional_str(raw, "territoryId"),
            territory=territory,
            timestamp=timestamp,
        )
    if event == EVENT_MAP_UPDATE:
        return MapUpdate(map_id=map_id, timestamp=timestamp)

    raise PayloadError(f"Unknown event '{event}'")
