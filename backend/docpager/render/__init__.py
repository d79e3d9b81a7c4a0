"""
渲染层 - 单页渲染、栅格化与多页合成

- RenderSurface: 单页离屏渲染面（显式完成信号）
- PageTemplate: 信函首页/续页与财务单据模板
- Rasterizer: 单页PDF → PNG
- PageRenderer: 页描述 → 位图
- DocumentAssembler: 位图 → 多页PDF
"""

from .assembler import DocumentAssembler, count_pdf_pages
from .rasterizer import Rasterizer, open_pdf_document
from .renderer import PageRenderer
from .surface import RenderSurface
from .templates import (
    FinanceDocumentTemplate,
    LetterheadContinuationTemplate,
    LetterheadFirstPageTemplate,
    PageTemplate,
)

__all__ = [
    "RenderSurface",
    "PageTemplate",
    "LetterheadFirstPageTemplate",
    "LetterheadContinuationTemplate",
    "FinanceDocumentTemplate",
    "Rasterizer",
    "open_pdf_document",
    "PageRenderer",
    "DocumentAssembler",
    "count_pdf_pages",
]
