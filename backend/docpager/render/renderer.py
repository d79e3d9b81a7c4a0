"""
单页渲染器 - 页描述 → 模板绘制 → 栅格位图

职责：
1. 按文档类型与页角色选择页模板
2. 组装模板数据（签名仅末页携带）
3. 每页独占一个临时渲染面：创建 → 绘制 → 等待完成信号 → 栅格化 → 销毁
4. 任何失败都以 RenderError 抛出，渲染面照常销毁

依赖：
- reportlab: 渲染面绘制（见 surface.py / templates.py）
- PyMuPDF: 栅格化（见 rasterizer.py）

测试要点：
- test_render_first_page: 首页位图尺寸 = 渲染面尺寸 × 倍率
- test_signature_only_on_terminal: 非末页模板数据不含签名
- test_surface_destroyed_on_failure: 模板抛错时渲染面仍被销毁
- test_timeout: 渲染面未完成绘制时抛 RenderTimeoutError
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import BrandSpec, RuntimeConfig, get_config, load_brand_or_default
from ..interfaces import DocPagerError, IPageRenderer, RenderError
from ..models import FinanceDocument, LetterheadDocument, PageContext, PageDescriptor, PageRole, RasterPage
from .rasterizer import Rasterizer
from .surface import RenderSurface
from .templates import (
    FinanceDocumentTemplate,
    LetterheadContinuationTemplate,
    LetterheadFirstPageTemplate,
    PageTemplate,
)

logger = logging.getLogger(__name__)


class PageRenderer(IPageRenderer):
    """单页渲染器实现"""

    def __init__(
        self,
        config: RuntimeConfig | None = None,
        brand: BrandSpec | None = None,
        rasterizer: Rasterizer | None = None,
        surface_factory=RenderSurface,
    ):
        self.config = config or get_config()
        self.brand = brand or load_brand_or_default(self.config.brand_path)
        self.rasterizer = rasterizer
        self.surface_factory = surface_factory

        layout = self.config.letterhead
        self._templates: dict[str, PageTemplate] = {
            "letterhead_first": LetterheadFirstPageTemplate(layout, self.brand),
            "letterhead_continuation": LetterheadContinuationTemplate(layout, self.brand),
            "finance": FinanceDocumentTemplate(layout, self.brand),
        }

    def select_template(self, descriptor: PageDescriptor, document: Any) -> PageTemplate:
        """按文档类型与页角色选择模板"""
        if isinstance(document, FinanceDocument):
            return self._templates["finance"]
        if isinstance(document, LetterheadDocument) or document is None:
            if descriptor.role == PageRole.FIRST:
                return self._templates["letterhead_first"]
            return self._templates["letterhead_continuation"]
        raise RenderError(f"不支持的文档类型: {type(document).__name__}")

    def build_context(self, descriptor: PageDescriptor, document: Any) -> PageContext:
        """组装模板数据"""
        signature = None
        if descriptor.is_terminal and document is not None:
            signature = getattr(document, "signature", None)

        return PageContext(
            role=descriptor.role,
            page_index=descriptor.index,
            total_pages=descriptor.total_pages,
            is_terminal=descriptor.is_terminal,
            blocks=descriptor.blocks,
            rows=descriptor.rows,
            start_number=descriptor.start_number,
            signature=signature,
            document=document,
        )

    def render(self, descriptor: PageDescriptor, document: Any) -> RasterPage:
        """渲染单页并栅格化"""
        if descriptor.total_pages < descriptor.index:
            raise RenderError(
                f"页描述未回填总页数: 第{descriptor.index}页 / 共{descriptor.total_pages}页"
            )

        template = self.select_template(descriptor, document)
        ctx = self.build_context(descriptor, document)
        rasterizer = self.rasterizer or Rasterizer(self._scale_for(document))
        page_format = self.config.page_format

        try:
            with self.surface_factory(page_format.width_px, page_format.height_px) as surface:
                template.draw(surface.canvas, ctx)
                surface.finish()
                pdf_bytes = surface.wait_painted(self.config.render.settle_timeout_sec)
                raster = rasterizer.rasterize(pdf_bytes, descriptor.index)
        except DocPagerError:
            raise
        except Exception as e:
            raise RenderError(f"第{descriptor.index}页渲染失败: {e}") from e

        logger.debug(
            f"第{descriptor.index}/{descriptor.total_pages}页渲染完成 ({type(template).__name__})"
        )
        return raster

    def _scale_for(self, document: Any) -> float:
        if isinstance(document, FinanceDocument):
            return self.config.render.finance_scale
        return self.config.render.letterhead_scale
