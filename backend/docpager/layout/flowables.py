"""
内容块排版对象 - 测量与渲染共用同一套样式

测量器与页模板都从这里取flowable，保证测得的高度就是绘制时占用的高度

依赖：
- reportlab.platypus: Paragraph/Spacer（真实字体度量与自动换行）
"""

from __future__ import annotations

from reportlab.lib.colors import HexColor
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Flowable, Paragraph, Spacer

from ..config.runtime_config import LetterheadLayoutConfig
from ..models import BlockKind, ContentBlock

# 标题字号倍率（相对正文）
HEADING_SCALE = {1: 1.6, 2: 1.35, 3: 1.15}

BODY_COLOR = "#334155"


class BlockStyles:
    """正文样式表"""

    def __init__(self, layout: LetterheadLayoutConfig, text_color: str = BODY_COLOR):
        self.font_size = layout.font_size
        self.leading = layout.font_size * layout.line_height
        color = HexColor(text_color)

        self.body = ParagraphStyle(
            "body",
            fontName="Helvetica",
            fontSize=self.font_size,
            leading=self.leading,
            textColor=color,
        )
        self.blockquote = ParagraphStyle(
            "blockquote",
            parent=self.body,
            fontName="Helvetica-Oblique",
            leftIndent=12,
            textColor=HexColor("#64748B"),
        )
        self.list_item = ParagraphStyle(
            "list_item",
            parent=self.body,
            leftIndent=16,
            bulletIndent=4,
        )
        self._headings: dict[int, ParagraphStyle] = {}

    def heading(self, level: int) -> ParagraphStyle:
        if level not in self._headings:
            size = self.font_size * HEADING_SCALE.get(level, 1.0)
            self._headings[level] = ParagraphStyle(
                f"h{level}",
                parent=self.body,
                fontName="Helvetica-Bold",
                fontSize=size,
                leading=size * 1.3,
                textColor=HexColor("#0F172A"),
            )
        return self._headings[level]


def block_flowables(block: ContentBlock, styles: BlockStyles) -> list[Flowable]:
    """内容块 → flowable序列（列表为每项一个段落）"""
    if block.kind == BlockKind.LIST:
        flowables: list[Flowable] = []
        for n, item in enumerate(block.items, start=1):
            bullet = f"{n}." if block.ordered else "•"
            flowables.append(Paragraph(item or "&nbsp;", styles.list_item, bulletText=bullet))
        return flowables or [Spacer(1, styles.leading)]

    if block.is_blank:
        # 编辑器空行占一行高度
        return [Spacer(1, styles.leading)]

    if block.kind == BlockKind.HEADING:
        return [Paragraph(block.markup, styles.heading(block.level))]

    if block.kind == BlockKind.BLOCKQUOTE:
        return [Paragraph(block.markup, styles.blockquote)]

    return [Paragraph(block.markup, styles.body)]
