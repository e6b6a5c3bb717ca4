"""
영역 파일 입출력 모듈

영역 목록을 JSON 파일로 저장하고 불러옵니다. 파일 형식은 REST 전송 형식과 같습니다.

    {"territories": [{"name": str, "points": [{"x": num, "y": num}, ...], "color": "#RRGGBB"}]}

불러온 영역에는 새 id가 부여됩니다.
"""

import json
import math
import re
from typing import List

from territory_editor.core.constants import MIN_POLYGON_POINTS, logger
from territory_editor.core.errors import TerritoryFileError
from territory_editor.core.exporter import build_export_payload
from territory_editor.core.models.point import Point
from territory_editor.core.models.territory import Territory
from territory_editor.core.territory_store import TerritoryStore

HEX_COLOR_RE = re.compile(r'^#[0-9A-Fa-f]{6}$')
MAX_NAME_LENGTH = 100


def save_territories(path: str, store: TerritoryStore):
    payload = build_export_payload(store)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(payload, f, indent=4, ensure_ascii=False)
    store.mark_saved()
    logger.info(f"Saved {len(store)} territories to {path}")


def territory_from_dict(entry, index: int = 0) -> Territory:
    """
    전송 형식 딕셔너리 하나를 검증하여 Territory로 변환합니다.

    매개변수:
        entry: {"name", "points", "color"} 딕셔너리
        index: 오류 메시지에 표시할 항목 번호

    반환값:
        새 id가 부여된 Territory

    예외:
        TerritoryFileError: 필드가 없거나 형식이 잘못된 경우
    """
    where = f"territory #{index + 1}"
    if not isinstance(entry, dict):
        raise TerritoryFileError(f"{where}: entry must be an object")

    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        raise TerritoryFileError(f"{where}: name must be a non-empty string")
    if len(name) > MAX_NAME_LENGTH:
        raise TerritoryFileError(f"{where}: name is longer than {MAX_NAME_LENGTH} characters")

    color = entry.get("color")
    if not isinstance(color, str) or not HEX_COLOR_RE.match(color):
        raise TerritoryFileError(f"{where}: color must be a hex color like #3B82F6")

    raw_points = entry.get("points")
    if not isinstance(raw_points, list) or len(raw_points) < MIN_POLYGON_POINTS:
        raise TerritoryFileError(f"{where}: at least {MIN_POLYGON_POINTS} points are required")

    points: List[Point] = []
    for p in raw_points:
        if not isinstance(p, dict):
            raise TerritoryFileError(f"{where}: point must be an object with x and y")
        x, y = p.get("x"), p.get("y")
        # bool은 int의 하위 클래스이므로 제외
        if isinstance(x, bool) or isinstance(y, bool) or not isinstance(x, (int, float)) or not isinstance(y, (int, float)):
            raise TerritoryFileError(f"{where}: point coordinates must be numbers")
        if not (math.isfinite(x) and math.isfinite(y)):
            raise TerritoryFileError(f"{where}: point coordinates must be finite")
        points.append(Point(float(x), float(y)))

    return Territory.create(name.strip(), points, color)


def load_territories(path: str) -> List[Territory]:
    """
    JSON 파일에서 영역 목록을 읽습니다.

    매개변수:
        path: 파일 경로

    반환값:
        Territory 목록 (파일 순서)

    예외:
        TerritoryFileError: 파일을 읽을 수 없거나 형식이 잘못된 경우
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise TerritoryFileError(f"Could not read {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("territories"), list):
        raise TerritoryFileError(f"{path}: expected an object with a 'territories' list")

    territories = [territory_from_dict(entry, i) for i, entry in enumerate(data["territories"])]
    logger.info(f"Loaded {len(territories)} territories from {path}")
    return territories
