"""
Territory Map Editor - 메인 진입점

애플리케이션의 진입점입니다.
PyQt6 기반의 GUI 애플리케이션을 초기화하고 실행합니다.

주요 기능:
- 설정 파일(editor_settings.json) 로드, 없으면 기본값 사용
- QApplication 인스턴스 생성 및 테마 스타일 적용 (System/Light/Dark 모드 지원)
- 메인 윈도우 생성 및 표시

사용법:
    python main.py [설정 파일 경로]
"""

import sys
from PyQt6.QtWidgets import QApplication
from PyQt6.QtGui import QFont
from territory_editor.core.constants import DEFAULT_SETTINGS_FILE
from territory_editor.core.models.settings import load_settings
from territory_editor.ui.windows.main_window import MainWindow
from territory_editor.ui.styles import apply_modern_style


def main():
    settings_path = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_SETTINGS_FILE
    settings = load_settings(settings_path)

    # PyQt6 애플리케이션 인스턴스 생성
    app = QApplication(sys.argv)
    app.setFont(QFont("Segoe UI", 10))
    apply_modern_style(app, settings.theme_mode)

    # 메인 윈도우 생성 및 표시
    w = MainWindow(settings)
    w.show()

    # 이벤트 루프 실행 및 종료 코드 반환
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
