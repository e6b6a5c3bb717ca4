"""
그리기 명령 실행 모듈

core/render.py 가 만든 그리기 명령 목록을 QPainter로 실행합니다.

클래스:
    CommandPainter: 명령 실행기 (배경 이미지 캐시 포함)
"""

import os
from typing import Dict, Iterable

from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QBrush, QColor, QFont, QFontMetricsF, QPainter, QPen, QPixmap, QPolygonF

from territory_editor.core.constants import logger
from territory_editor.core.render import (
    ClearSurface, DrawCommand, DrawImage, DrawLine, DrawText, FillCircle, FillPolygon, FillRect,
    PopTransform, PushTransform, StrokePath
)


def _polygon(points) -> QPolygonF:
    return QPolygonF([QPointF(p.x, p.y) for p in points])


class CommandPainter:
    """
    그리기 명령을 QPainter 호출로 변환합니다.

    속성:
        _pixmaps: 경로별 배경 이미지 캐시
    """

    def __init__(self):
        self._pixmaps: Dict[str, QPixmap] = {}

    def _pixmap(self, source: str) -> QPixmap:
        if source not in self._pixmaps:
            pm = QPixmap()
            if os.path.exists(source):
                pm.load(source)
            if pm.isNull():
                logger.warning(f"Map image could not be loaded: {source}")
            self._pixmaps[source] = pm
        return self._pixmaps[source]

    def execute(self, painter: QPainter, commands: Iterable[DrawCommand]):
        """
        명령 목록을 순서대로 실행합니다.

        매개변수:
            painter: 위젯에 연결된 QPainter
            commands: build_frame 출력
        """
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        for cmd in commands:
            if isinstance(cmd, ClearSurface):
                painter.fillRect(painter.window(), QColor(cmd.color))

            elif isinstance(cmd, PushTransform):
                painter.save()
                painter.translate(cmd.offset_x, cmd.offset_y)
                painter.scale(cmd.zoom, cmd.zoom)

            elif isinstance(cmd, PopTransform):
                painter.restore()

            elif isinstance(cmd, FillRect):
                painter.fillRect(QRectF(cmd.left, cmd.top, cmd.width, cmd.height), QColor(cmd.color))

            elif isinstance(cmd, DrawImage):
                pm = self._pixmap(cmd.source)
                if not pm.isNull():
                    painter.drawPixmap(QPointF(cmd.left, cmd.top), pm)

            elif isinstance(cmd, DrawLine):
                painter.setPen(QPen(QColor(cmd.color), cmd.width))
                painter.drawLine(QPointF(cmd.start.x, cmd.start.y), QPointF(cmd.end.x, cmd.end.y))

            elif isinstance(cmd, FillPolygon):
                c = QColor(cmd.color)
                c.setAlpha(cmd.alpha)
                painter.setPen(QPen(Qt.PenStyle.NoPen))
                painter.setBrush(QBrush(c))
                painter.drawPolygon(_polygon(cmd.points))

            elif isinstance(cmd, StrokePath):
                painter.setPen(QPen(QColor(cmd.color), cmd.width))
                painter.setBrush(QBrush(Qt.BrushStyle.NoBrush))
                if cmd.closed:
                    painter.drawPolygon(_polygon(cmd.points))
                else:
                    painter.drawPolyline(_polygon(cmd.points))

            elif isinstance(cmd, FillCircle):
                painter.setPen(QPen(Qt.PenStyle.NoPen))
                painter.setBrush(QBrush(QColor(cmd.color)))
                painter.drawEllipse(QPointF(cmd.center.x, cmd.center.y), cmd.radius, cmd.radius)

            elif isinstance(cmd, DrawText):
                font = QFont("sans-serif")
                font.setPointSizeF(max(cmd.font_size, 0.1))
                painter.setFont(font)
                painter.setPen(QColor(cmd.color))
                # 가로 가운데 정렬, y는 기준선
                w = QFontMetricsF(font).horizontalAdvance(cmd.text)
                painter.drawText(QPointF(cmd.position.x - w / 2, cmd.position.y), cmd.text)
