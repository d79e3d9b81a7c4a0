"""
栅格化器 - 单页PDF → 定倍率PNG位图

依赖：
- PyMuPDF(fitz): 打开单页PDF并按倍率出图
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import fitz  # PyMuPDF

from ..interfaces import IRasterizer, RenderError
from ..models import RasterPage

logger = logging.getLogger(__name__)


@contextmanager
def open_pdf_document(pdf_bytes: bytes) -> Iterator[fitz.Document]:
    """打开内存中的PDF，退出时必定关闭"""
    doc = None
    try:
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
        yield doc
    finally:
        if doc is not None:
            doc.close()


class Rasterizer(IRasterizer):
    """栅格化器实现"""

    def __init__(self, scale: float = 2.0):
        if scale <= 0:
            raise ValueError(f"栅格倍率必须为正: {scale}")
        self.scale = scale

    def rasterize(self, pdf_bytes: bytes, index: int) -> RasterPage:
        """取单页PDF的第一页出图"""
        if not pdf_bytes:
            raise RenderError(f"第{index}页渲染结果为空")

        try:
            with open_pdf_document(pdf_bytes) as doc:
                if doc.page_count < 1:
                    raise RenderError(f"第{index}页渲染结果不含页面")
                page = doc.load_page(0)
                pix = page.get_pixmap(matrix=fitz.Matrix(self.scale, self.scale), alpha=False)
                image = pix.tobytes("png")
                width, height = pix.width, pix.height
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(f"第{index}页栅格化失败: {e}") from e

        logger.debug(f"第{index}页栅格化完成: {width}x{height} @{self.scale}x")
        return RasterPage(
            index=index,
            image=image,
            width_px=width,
            height_px=height,
            scale=self.scale,
        )
