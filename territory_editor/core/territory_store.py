"""
영역 저장소 모듈

확정된 영역 목록을 메모리에 보관합니다.
크기 제한이나 축출 정책은 없으며, 삽입 순서가 곧 그리기 순서입니다.
"""

from typing import Iterable, Iterator, List, Optional

from territory_editor.core.models.territory import Territory


class TerritoryStore:
    """
    확정된 영역 컬렉션입니다.

    이름 중복은 허용되며, 유일성 키는 id뿐입니다.

    속성:
        modified: 마지막 저장 이후 변경 여부
    """

    def __init__(self, territories: Iterable[Territory] = ()):
        self._territories: List[Territory] = list(territories)
        self.modified = False

    def __len__(self):
        return len(self._territories)

    def add(self, territory: Territory):
        self._territories.append(territory)
        self.modified = True

    def remove(self, territory_id: str) -> bool:
        """
        id가 일치하는 영역을 삭제합니다.

        반환값:
            삭제했으면 True, 없으면 False (오류 아님)
        """
        for i, t in enumerate(self._territories):
            if t.id == territory_id:
                del self._territories[i]
                self.modified = True
                return True
        return False

    def get(self, territory_id: str) -> Optional[Territory]:
        for t in self._territories:
            if t.id == territory_id:
                return t
        return None

    def list(self) -> Iterator[Territory]:
        """
        삽입 순서대로 영역을 순회합니다.

        호출 시점의 스냅샷을 순회하므로 이후 변경은 반영되지 않습니다.
        """
        return iter(tuple(self._territories))

    def clear(self):
        self._territories = []
        self.modified = True

    def replace_all(self, territories: Iterable[Territory]):
        self._territories = list(territories)
        self.modified = True

    def mark_saved(self):
        self.modified = False

    def export_all(self) -> List[dict]:
        """모든 영역을 {name, points, color} 형태로 직렬화합니다 (id 제외)."""
        return [t.to_export_dict() for t in self._territories]
