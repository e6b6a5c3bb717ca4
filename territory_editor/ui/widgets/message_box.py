"""
메시지 박스 위젯 모듈

이 모듈은 편집기에서 사용되는 메시지 박스를 제공합니다.
기본 QMessageBox보다 넓게 표시됩니다.

함수:
    show_information: 정보 메시지 표시
    show_warning: 경고 메시지 표시 (검증 오류 등)
    show_critical: 오류 메시지 표시
    show_question: 질문 메시지 표시 (Yes/No)
"""

from PyQt6.QtWidgets import QMessageBox

StandardButton = QMessageBox.StandardButton


class ResizableMessageBox(QMessageBox):
    """최소 너비 400픽셀의 메시지 박스입니다."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMinimumWidth(400)


def _show(parent, icon, title: str, text: str, buttons, default=None):
    msg = ResizableMessageBox(parent)
    msg.setIcon(icon)
    msg.setWindowTitle(title)
    msg.setText(text)
    msg.setStandardButtons(buttons)
    if default is not None:
        msg.setDefaultButton(default)
    return msg.exec()


def show_information(parent, title: str, text: str):
    return _show(parent, QMessageBox.Icon.Information, title, text, StandardButton.Ok)


def show_warning(parent, title: str, text: str):
    return _show(parent, QMessageBox.Icon.Warning, title, text, StandardButton.Ok)


def show_critical(parent, title: str, text: str):
    return _show(parent, QMessageBox.Icon.Critical, title, text, StandardButton.Ok)


def show_question(parent, title: str, text: str) -> bool:
    """
    Yes/No 질문을 표시합니다.

    반환값:
        Yes를 선택하면 True
    """
    answer = _show(parent, QMessageBox.Icon.Question, title, text,
                   StandardButton.Yes | StandardButton.No, StandardButton.No)
    return answer == StandardButton.Yes
