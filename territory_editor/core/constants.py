"""
상수 정의 모듈

이 모듈은 애플리케이션 전반에서 사용되는 상수와 설정값을 정의합니다.

주요 상수:
- APP_NAME: 애플리케이션 이름
- DEFAULT_WINDOW_SIZE: 기본 윈도우 크기
- MIN_ZOOM / MAX_ZOOM: 뷰 줌 한계
- EVENT_*: 실시간 업데이트 채널 이벤트 이름
- logger: 로깅 인스턴스
"""

import logging

# 애플리케이션 기본 정보
APP_NAME = "Territory Map Editor"  # 애플리케이션 표시 이름
DEFAULT_WINDOW_SIZE = (1600, 900)  # 기본 윈도우 크기 (너비, 높이) 픽셀
DEFAULT_SETTINGS_FILE = "editor_settings.json"  # 작업 디렉토리 기준 설정 파일

# 로깅 설정
# 로그 레벨 INFO, 타임스탬프-레벨-메시지 형식
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger("TerritoryEditor")  # 영역 편집기 전용 로거

# 뷰 변환 설정
MIN_ZOOM = 0.1  # 최소 줌 배율
MAX_ZOOM = 5.0  # 최대 줌 배율
ZOOM_IN_FACTOR = 1.1  # 한 단계 확대 배수
ZOOM_OUT_FACTOR = 0.9  # 한 단계 축소 배수

# 다각형 그리기 설정
CLOSE_THRESHOLD = 10.0  # 첫 점 근접 판정 거리 (화면 픽셀)
MIN_POLYGON_POINTS = 3  # 영역 생성 최소 꼭짓점 수
GRID_SPACING = 50.0  # 배경 격자 간격 (논리 단위)
FILL_ALPHA = 0x40  # 다각형 채우기 불투명도 (0~255)
DEFAULT_DRAW_COLOR = "#3B82F6"  # 기본 그리기 색상

# 실시간 업데이트 채널 이벤트 이름
EVENT_JOIN_MAP = "join-map"
EVENT_LEAVE_MAP = "leave-map"
EVENT_TERRITORY_UPDATE = "territory-update"
EVENT_MAP_UPDATE = "map-update"
