"""
内容测量器 - 在离屏测量面上获取内容块排版高度

职责：
1. 创建一个不可见的测量面（离屏画布+样式表），全部内容块共用
2. 按固定版心宽度排版每个块（真实字体度量、自动换行）
3. 块高度 = 排版高度 + 段间距
4. 无论成功失败，返回前销毁测量面

依赖：
- reportlab: 离屏画布与Paragraph排版

测试要点：
- test_measure_heights: 高度为正且随文本增长
- test_measure_gap: 段间距计入高度
- test_measure_oversized: 超高块原样返回，不报错
- test_surface_teardown_on_failure: 测量失败时测量面仍被销毁
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from reportlab.pdfgen.canvas import Canvas

from ..config import get_config
from ..config.runtime_config import LetterheadLayoutConfig
from ..interfaces import IContentMeasurer, MeasurementError
from ..models import ContentBlock, MeasuredBlock
from .flowables import BlockStyles, block_flowables

logger = logging.getLogger(__name__)

# 测量时不限制可用高度
UNBOUNDED_HEIGHT = 1_000_000.0


class MeasurementSurface:
    """离屏测量面（单次使用，用后销毁）"""

    def __init__(self, width: float, layout: LetterheadLayoutConfig):
        self.width = width
        self.styles = BlockStyles(layout)
        self._buffer: io.BytesIO | None = io.BytesIO()
        self.canvas: Canvas | None = Canvas(self._buffer, pagesize=(width, layout.page_height))

    @property
    def closed(self) -> bool:
        return self.canvas is None

    def measure(self, block: ContentBlock) -> float:
        """单块排版高度（不含段间距）"""
        if self.canvas is None:
            raise MeasurementError("测量面已销毁")

        height = 0.0
        for flowable in block_flowables(block, self.styles):
            _, h = flowable.wrapOn(self.canvas, self.width, UNBOUNDED_HEIGHT)
            height += h
        return height

    def close(self) -> None:
        """销毁测量面（可重复调用）"""
        self.canvas = None
        if self._buffer is not None:
            self._buffer.close()
            self._buffer = None


@contextmanager
def measurement_surface(width: float, layout: LetterheadLayoutConfig) -> Iterator[MeasurementSurface]:
    """测量面作用域：创建 → 使用 → 必定销毁"""
    try:
        surface = MeasurementSurface(width, layout)
    except Exception as e:
        raise MeasurementError(f"测量环境创建失败: {e}") from e

    try:
        yield surface
    finally:
        try:
            surface.close()
        except Exception as e:
            raise MeasurementError(f"测量环境销毁失败: {e}") from e


class ContentMeasurer(IContentMeasurer):
    """内容测量器实现"""

    def __init__(self, layout: LetterheadLayoutConfig | None = None):
        self.layout = layout or get_config().letterhead

    def measure(
        self,
        blocks: Sequence[ContentBlock],
        page_width: float | None = None,
    ) -> list[MeasuredBlock]:
        """测量全部内容块（共用一个测量面）"""
        width = self.layout.content_width if page_width is None else page_width
        if width <= 0:
            raise MeasurementError(f"版心宽度无效: {width}")

        measured: list[MeasuredBlock] = []
        with measurement_surface(width, self.layout) as surface:
            for i, block in enumerate(blocks):
                try:
                    height = surface.measure(block)
                except MeasurementError:
                    raise
                except Exception as e:
                    raise MeasurementError(
                        f"内容块测量失败 (#{i + 1} {block.kind.value}): {e}"
                    ) from e

                measured.append(
                    MeasuredBlock(
                        block=block,
                        height=height + self.layout.block_gap,
                        width=width,
                    )
                )

        logger.debug(f"测量完成: {len(measured)} 块, 版心宽度 {width}")
        return measured
