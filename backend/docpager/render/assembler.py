"""
文档合成器 - 按页序把位图写成多页PDF

职责：
1. 校验位图页序连续（1..N，不允许缺页/重复/乱序）
2. 每张位图一页，铺满物理纸张（A4 210×297mm）
3. 输出后用 pdfplumber 回读页数，确保与位图数一致

依赖：
- reportlab: PDF画布与图片写入
- pdfplumber: 输出页数校验
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence

import pdfplumber
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from ..config import PageFormatConfig, get_config
from ..interfaces import AssemblyError, IDocumentAssembler
from ..models import OutputDocument, RasterPage

logger = logging.getLogger(__name__)


def count_pdf_pages(data: bytes) -> int:
    """回读PDF页数"""
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        return len(pdf.pages)


class DocumentAssembler(IDocumentAssembler):
    """文档合成器实现"""

    def assemble(
        self,
        rasters: Sequence[RasterPage],
        page_format: PageFormatConfig | None = None,
        filename: str = "document.pdf",
    ) -> OutputDocument:
        """合成多页PDF"""
        page_format = page_format or get_config().page_format
        self._check_order(rasters)

        width, height = page_format.width_pt, page_format.height_pt
        buffer = io.BytesIO()
        canvas = Canvas(buffer, pagesize=(width, height))
        canvas.setTitle(filename.rsplit(".", 1)[0])

        try:
            for raster in rasters:
                canvas.drawImage(
                    ImageReader(io.BytesIO(raster.image)),
                    0,
                    0,
                    width=width,
                    height=height,
                )
                canvas.showPage()
            if not rasters:
                # 无内容时仍输出一张空白页
                canvas.showPage()
            canvas.save()
        except Exception as e:
            raise AssemblyError(f"PDF合成失败: {e}") from e

        data = buffer.getvalue()
        expected = max(1, len(rasters))
        actual = count_pdf_pages(data)
        if actual != expected:
            raise AssemblyError(f"输出页数不符: 期望{expected}页, 实际{actual}页")

        logger.info(f"合成完成: {filename} ({actual}页, {page_format.name})")
        return OutputDocument(
            data=data,
            page_count=actual,
            filename=filename,
            page_format=page_format.name,
        )

    @staticmethod
    def _check_order(rasters: Sequence[RasterPage]) -> None:
        """页序必须为 1..N"""
        for expected, raster in enumerate(rasters, start=1):
            if raster.index != expected:
                got = [r.index for r in rasters]
                raise AssemblyError(f"位图页序不连续: {got}")
