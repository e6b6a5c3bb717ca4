"""
스타일 관리 패키지

이 패키지는 편집기의 UI 테마와 스타일을 관리합니다.

내보내기:
    StyleManager: 스타일 관리 싱글톤 클래스
    apply_modern_style: 테마 적용 함수
"""

from .style_manager import StyleManager, apply_modern_style

__all__ = ['StyleManager', 'apply_modern_style']
