"""
오류 정의 모듈

영역 편집기에서 발생하는 예외 계층을 정의합니다.
검증 오류는 모두 복구 가능하며, 운영자에게 메시지로 표시됩니다.
"""


class TerritoryEditorError(Exception):
    """영역 편집기 예외의 기본 클래스입니다."""


class ValidationError(TerritoryEditorError):
    """영역 확정(commit) 시 입력 검증 실패."""


class InsufficientPoints(ValidationError):
    """꼭짓점이 3개 미만인 다각형으로 영역을 만들려고 할 때 발생합니다."""

    def __init__(self, count: int, required: int = 3):
        super().__init__(f"At least {required} points are required to create a territory (got {count})")
        self.count = count
        self.required = required


class EmptyName(ValidationError):
    """영역 이름이 비어 있을 때 발생합니다."""

    def __init__(self):
        super().__init__("Territory name must not be empty")


class PayloadError(TerritoryEditorError):
    """실시간 업데이트 이벤트 페이로드 형식이 잘못되었을 때 발생합니다."""


class ExportError(TerritoryEditorError):
    """영역 데이터를 외부 저장소로 전달하지 못했을 때 발생합니다."""


class TerritoryFileError(TerritoryEditorError):
    """영역 파일을 읽거나 검증하지 못했을 때 발생합니다."""
