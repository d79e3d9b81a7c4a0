"""
渲染面 - 单页离屏绘制面（创建 → 绘制 → 取图 → 销毁）

每页独占一个渲染面，绝不跨页复用；绘制完成通过显式事件通知，
取图方等待该事件而不是固定延时

reportlab 画布在 finish() 中同步完成绘制并立即置位事件，正常流程下
wait_painted 不会等待；超时只在渲染面未调用 finish() 时触发，
例如延迟完成绘制的渲染面子类
"""

from __future__ import annotations

import io
import threading

from reportlab.pdfgen.canvas import Canvas

from ..interfaces import RenderError, RenderTimeoutError


class RenderSurface:
    """单页离屏渲染面"""

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height
        self._buffer: io.BytesIO | None = io.BytesIO()
        self._canvas: Canvas | None = Canvas(self._buffer, pagesize=(width, height))
        self._painted = threading.Event()
        self._page: bytes | None = None

    def __enter__(self) -> RenderSurface:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def canvas(self) -> Canvas:
        if self._canvas is None:
            raise RenderError("渲染面已销毁或已完成绘制")
        return self._canvas

    @property
    def closed(self) -> bool:
        return self._buffer is None

    def finish(self) -> None:
        """结束绘制并发出完成信号"""
        canvas = self.canvas
        canvas.showPage()
        canvas.save()
        self._page = self._buffer.getvalue()
        self._canvas = None
        self._painted.set()

    def wait_painted(self, timeout: float) -> bytes:
        """等待绘制完成，返回单页PDF"""
        if not self._painted.wait(timeout):
            raise RenderTimeoutError(f"渲染面在 {timeout:.2f}s 内未完成绘制")
        return self._page

    def close(self) -> None:
        """销毁渲染面（可重复调用）"""
        self._canvas = None
        self._page = None
        if self._buffer is not None:
            self._buffer.close()
            self._buffer = None
