"""
스타일 관리자 모듈

이 모듈은 편집기의 UI 테마와 QSS 스타일시트를 관리합니다.

클래스:
    StyleManager: 스타일 관리 싱글톤 클래스

함수:
    apply_modern_style: 테마 적용

지원 테마:
    - Light: 밝은 테마
    - Dark: 어두운 테마
    - System: 시스템 설정 따름
"""

import os
from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import Qt

from territory_editor.core.constants import logger

THEME_FILES = {
    "light": "editor_light.qss",
    "dark": "editor_dark.qss",
}


class StyleManager:
    """
    편집기 테마를 관리하는 싱글톤 클래스입니다.

    사용법:
        StyleManager.instance().apply_theme(app, "Dark")
    """

    _instance = None
    _styles_dir = os.path.dirname(os.path.abspath(__file__))

    @classmethod
    def instance(cls):
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def __init__(self):
        self._styles = {}
        self._load_styles()

    def _load_styles(self):
        """
        디스크에서 QSS 파일을 읽습니다.

        파일이 없거나 읽기 실패 시 빈 스타일시트로 대체합니다.
        """
        for theme, filename in THEME_FILES.items():
            path = os.path.join(self._styles_dir, filename)
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    self._styles[theme] = f.read()
            except OSError as e:
                logger.warning(f"Could not load {theme} theme: {e}")
                self._styles[theme] = ""

    def stylesheet(self, theme: str) -> str:
        return self._styles.get(theme, "")

    def apply_theme(self, app: QApplication, theme_mode: str = "System"):
        """
        애플리케이션에 테마를 적용합니다.

        매개변수:
            app: QApplication 인스턴스
            theme_mode: 테마 모드 ("Light", "Dark", "System")
        """
        theme = "dark" if self.resolve_dark(theme_mode) else "light"
        app.setStyleSheet(self.stylesheet(theme))

    @staticmethod
    def resolve_dark(theme_mode: str) -> bool:
        """테마 모드 문자열로 다크 테마 사용 여부를 결정합니다."""
        if theme_mode == "Dark":
            return True
        if theme_mode == "Light":
            return False
        # System
        hints = QApplication.styleHints()
        return hints is not None and hints.colorScheme() == Qt.ColorScheme.Dark


def apply_modern_style(app: QApplication, theme_mode: str = "System"):
    StyleManager.instance().apply_theme(app, theme_mode)
