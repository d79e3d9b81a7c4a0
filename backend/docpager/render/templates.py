"""
页模板 - 按页描述数据绘制单页

模板只读取 PageContext（页角色/内容块或明细行/页码/总页数/是否末页/签名），
外观本身不参与分页计算；正文与测量器共用 layout.flowables 的样式，
保证绘制高度与测量高度一致

- LetterheadFirstPageTemplate: 品牌页眉 + 收件人前置块 + 正文 + (末页)签名 + 页脚
- LetterheadContinuationTemplate: 简化页眉(页码) + 正文 + (末页)签名 + 页脚
- FinanceDocumentTemplate: 单据头(首页) + 明细表 + (末页)合计/备注/收款账户/签名
"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor, white
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Paragraph, Table, TableStyle

from ..config import BrandSpec
from ..config.runtime_config import LetterheadLayoutConfig
from ..layout.flowables import BlockStyles, block_flowables
from ..layout.measurer import UNBOUNDED_HEIGHT
from ..models import ContentBlock, FinanceDocument, LetterheadDocument, PageContext

SIGNATURE_IMAGE_HEIGHT = 36


class PageTemplate(ABC):
    """页模板基类"""

    def __init__(self, layout: LetterheadLayoutConfig, brand: BrandSpec | None = None):
        self.layout = layout
        self.brand = brand or BrandSpec()
        self.accent = HexColor(self.brand.accent_color)
        self.text_color = HexColor(self.brand.text_color)
        self.muted = HexColor(self.brand.muted_color)

    @property
    def width(self) -> float:
        return self.layout.page_width

    @property
    def height(self) -> float:
        return self.layout.page_height

    @property
    def left(self) -> float:
        return self.layout.side_margin

    @property
    def right(self) -> float:
        return self.layout.page_width - self.layout.side_margin

    @abstractmethod
    def draw(self, canvas: Canvas, ctx: PageContext) -> None:
        """在渲染面上绘制整页"""
        ...

    # === 公共部件 ===

    def _draw_page_number(self, canvas: Canvas, ctx: PageContext, y: float) -> None:
        if not ctx.show_page_number:
            return
        canvas.setFont("Courier", 8)
        canvas.setFillColor(self.muted)
        canvas.drawRightString(self.right, y, f"pg {ctx.page_index} of {ctx.total_pages}")

    def _draw_separator(self, canvas: Canvas, y: float) -> None:
        canvas.setStrokeColor(self.accent)
        canvas.setLineWidth(0.6)
        canvas.line(self.left, y, self.right, y)
        canvas.setLineWidth(1.2)
        mid = self.width / 2
        canvas.line(mid - 36, y, mid + 36, y)

    def _draw_footer(self, canvas: Canvas) -> None:
        footer_top = self.layout.footer_height
        canvas.setStrokeColor(HexColor("#E2E8F0"))
        canvas.setLineWidth(0.5)
        canvas.line(self.left, footer_top - 12, self.right, footer_top - 12)

        canvas.setFillColor(self.muted)
        canvas.setFont("Helvetica", 7.5)
        contact = self.brand.footer_line()
        if contact:
            canvas.drawCentredString(self.width / 2, footer_top - 28, contact)
        address = self.brand.address_line()
        if address:
            canvas.drawCentredString(self.width / 2, footer_top - 40, address)

        # 底部强调条
        canvas.setFillColor(self.accent)
        canvas.rect(0, 0, self.width, 3, stroke=0, fill=1)

    def _draw_blocks(
        self,
        canvas: Canvas,
        blocks: list[ContentBlock],
        top: float,
    ) -> float:
        """自上而下绘制内容块，返回绘制后的纵坐标"""
        styles = BlockStyles(self.layout)
        width = self.layout.content_width
        y = top
        for block in blocks:
            for flowable in block_flowables(block, styles):
                _, h = flowable.wrapOn(canvas, width, UNBOUNDED_HEIGHT)
                flowable.drawOn(canvas, self.left, y - h)
                y -= h
            y -= self.layout.block_gap
        return y

    def _draw_signature(
        self,
        canvas: Canvas,
        ctx: PageContext,
        sender_name: str,
        sender_title: str,
        label: str,
        closing: str = "Yours sincerely,",
    ) -> None:
        """签名块（占据正文区底部 signature_height）"""
        bottom = self.layout.footer_height + self.layout.content_padding
        y = bottom + self.layout.signature_height - 12

        canvas.setFillColor(self.text_color)
        canvas.setFont("Helvetica", 10)
        if closing:
            canvas.drawString(self.left, y, closing)

        image_y = y - 8 - SIGNATURE_IMAGE_HEIGHT
        if ctx.signature is not None:
            canvas.drawImage(
                ImageReader(io.BytesIO(ctx.signature.image)),
                self.left,
                image_y,
                width=140,
                height=SIGNATURE_IMAGE_HEIGHT,
                preserveAspectRatio=True,
                anchor="sw",
                mask="auto",
            )
        else:
            canvas.setStrokeColor(HexColor("#CBD5E1"))
            canvas.setDash(2, 2)
            canvas.line(self.left, image_y + 2, self.left + 120, image_y + 2)
            canvas.setDash()

        canvas.setFont("Helvetica-Bold", 10)
        canvas.drawString(self.left, image_y - 12, sender_name)
        canvas.setFont("Helvetica", 9)
        canvas.setFillColor(self.muted)
        if sender_title:
            canvas.drawString(self.left, image_y - 23, sender_title)
        if label:
            canvas.setFont("Helvetica", 7)
            canvas.drawString(self.left, image_y - 33, label.upper())

    def _draw_letter_signature(
        self,
        canvas: Canvas,
        ctx: PageContext,
        document: LetterheadDocument | None,
    ) -> None:
        """信函签名块（未填写发件人时显示占位）"""
        sender = document.sender if document is not None else None
        self._draw_signature(
            canvas,
            ctx,
            (sender.name if sender else "") or "Your Name",
            (sender.title if sender else "") or "Your Title",
            document.signature_label if document is not None else "",
        )


class LetterheadFirstPageTemplate(PageTemplate):
    """信函首页模板"""

    def draw(self, canvas: Canvas, ctx: PageContext) -> None:
        document: LetterheadDocument = ctx.document
        self._draw_header(canvas, ctx)

        top = self.height - self.layout.header_height - self.layout.content_padding
        if document is not None and document.has_preamble:
            self._draw_preamble(canvas, document, top)
            top -= self.layout.preamble_height

        self._draw_blocks(canvas, ctx.blocks, top)

        if ctx.is_terminal:
            self._draw_letter_signature(canvas, ctx, document)

        self._draw_footer(canvas)

    def _draw_header(self, canvas: Canvas, ctx: PageContext) -> None:
        top = self.height - 32
        canvas.setFillColor(self.text_color)
        canvas.setFont("Helvetica-Bold", 18)
        canvas.drawString(self.left, top - 18, self.brand.company_name)
        if self.brand.tagline:
            canvas.setFont("Helvetica", 8)
            canvas.setFillColor(self.accent)
            canvas.drawString(self.left, top - 32, self.brand.tagline.upper())

        self._draw_page_number(canvas, ctx, top - 10)
        self._draw_separator(canvas, self.height - self.layout.header_height + 8)

    def _draw_preamble(self, canvas: Canvas, document: LetterheadDocument, top: float) -> None:
        recipient = document.recipient
        y = top - 10
        canvas.setFont("Helvetica-Bold", 9)
        canvas.setFillColor(self.muted)
        if recipient.date:
            canvas.drawString(self.left, y, recipient.date)
            y -= 18

        canvas.setFillColor(self.text_color)
        canvas.setFont("Helvetica-Bold", 10)
        canvas.drawString(self.left, y, recipient.name)
        y -= 12

        canvas.setFont("Helvetica", 9)
        canvas.setFillColor(self.muted)
        for line in (recipient.company, recipient.address, recipient.city):
            if line:
                canvas.drawString(self.left, y, line)
                y -= 11

        if recipient.subject:
            y -= 6
            canvas.setFillColor(self.text_color)
            canvas.setFont("Helvetica-Bold", 9.5)
            canvas.drawString(self.left, y, f"RE: {recipient.subject}".upper())
            canvas.setStrokeColor(HexColor("#E2E8F0"))
            canvas.line(self.left, y - 6, self.right, y - 6)


class LetterheadContinuationTemplate(PageTemplate):
    """信函续页模板"""

    def draw(self, canvas: Canvas, ctx: PageContext) -> None:
        document: LetterheadDocument = ctx.document

        header_mid = self.height - self.layout.continuation_header_height / 2 - 4
        canvas.setFillColor(self.muted)
        canvas.setFont("Helvetica-Bold", 9)
        canvas.drawString(self.left, header_mid, self.brand.company_name)
        self._draw_page_number(canvas, ctx, header_mid)
        self._draw_separator(canvas, self.height - self.layout.continuation_header_height + 4)

        top = self.height - self.layout.continuation_header_height - self.layout.content_padding
        self._draw_blocks(canvas, ctx.blocks, top)

        if ctx.is_terminal:
            self._draw_letter_signature(canvas, ctx, document)

        self._draw_footer(canvas)


class FinanceDocumentTemplate(PageTemplate):
    """发票/报价单模板"""

    COLUMN_WIDTHS = (0.06, 0.46, 0.1, 0.18, 0.2)

    def __init__(self, layout: LetterheadLayoutConfig, brand: BrandSpec | None = None):
        super().__init__(layout, brand)
        self.cell_style = ParagraphStyle(
            "cell", fontName="Helvetica", fontSize=8.5, leading=11, textColor=self.text_color
        )

    def draw(self, canvas: Canvas, ctx: PageContext) -> None:
        document: FinanceDocument = ctx.document

        if ctx.is_first_page:
            top = self._draw_full_header(canvas, ctx, document)
        else:
            top = self._draw_compact_header(canvas, ctx, document)

        y = self._draw_items(canvas, ctx, document, top - 12)

        if ctx.is_terminal:
            y = self._draw_totals(canvas, document, y - 14)
            self._draw_notes(canvas, document, y - 16)
            company = document.company_name or self.brand.company_name
            self._draw_signature(canvas, ctx, company, "", "Authorized Signature", closing="")

        self._draw_footer(canvas)

    def _money(self, document: FinanceDocument, value: float) -> str:
        return f"{document.currency} {value:,.2f}"

    def _draw_full_header(self, canvas: Canvas, ctx: PageContext, document: FinanceDocument) -> float:
        top = self.height - 40
        canvas.setFillColor(self.text_color)
        canvas.setFont("Helvetica-Bold", 16)
        canvas.drawString(self.left, top, document.company_name or self.brand.company_name)
        canvas.setFont("Helvetica", 8)
        canvas.setFillColor(self.muted)
        address = document.company_address or self.brand.address_line()
        if address:
            canvas.drawString(self.left, top - 13, address)
        tax_id = document.company_tax_id or self.brand.tax_id
        if tax_id:
            canvas.drawString(self.left, top - 24, f"PIN: {tax_id}")

        canvas.setFillColor(self.accent)
        canvas.setFont("Helvetica-Bold", 20)
        canvas.drawRightString(self.right, top - 2, document.title)
        canvas.setFillColor(self.muted)
        canvas.setFont("Helvetica", 8.5)
        meta = [f"No. {document.document_number or '-'}"]
        if document.issue_date:
            meta.append(f"Date: {document.issue_date}")
        if document.due_date:
            due_label = "Due" if document.title == "INVOICE" else "Valid until"
            meta.append(f"{due_label}: {document.due_date}")
        for n, line in enumerate(meta):
            canvas.drawRightString(self.right, top - 16 - n * 11, line)
        self._draw_page_number(canvas, ctx, top - 16 - len(meta) * 11)

        self._draw_separator(canvas, top - 56)

        # 客户信息
        y = top - 74
        canvas.setFillColor(self.accent)
        canvas.setFont("Helvetica-Bold", 8)
        canvas.drawString(self.left, y, "BILL TO" if document.title == "INVOICE" else "PREPARED FOR")
        y -= 13
        canvas.setFillColor(self.text_color)
        canvas.setFont("Helvetica-Bold", 10)
        canvas.drawString(self.left, y, document.client.name or "-")
        canvas.setFont("Helvetica", 8.5)
        canvas.setFillColor(self.muted)
        for line in (document.client.address, document.client.city, document.client.email):
            if line:
                y -= 11
                canvas.drawString(self.left, y, line)
        return y - 10

    def _draw_compact_header(self, canvas: Canvas, ctx: PageContext, document: FinanceDocument) -> float:
        top = self.height - 34
        canvas.setFillColor(self.text_color)
        canvas.setFont("Helvetica-Bold", 10)
        canvas.drawString(self.left, top, f"{document.title} {document.document_number or ''}".strip())
        self._draw_page_number(canvas, ctx, top)
        self._draw_separator(canvas, top - 10)
        return top - 16

    def _draw_items(self, canvas: Canvas, ctx: PageContext, document: FinanceDocument, top: float) -> float:
        width = self.layout.content_width
        data = [["#", "Description", "Qty", "Rate", "Amount"]]
        for n, item in enumerate(ctx.rows, start=ctx.start_number):
            data.append([
                str(n),
                Paragraph(escape(item.description or "-"), self.cell_style),
                f"{item.quantity:g}",
                self._money(document, item.unit_price),
                self._money(document, item.total),
            ])

        commands = [
            ("BACKGROUND", (0, 0), (-1, 0), self.text_color),
            ("TEXTCOLOR", (0, 0), (-1, 0), white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 8.5),
            ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("TOPPADDING", (0, 0), (-1, -1), 6),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
        ]
        if len(data) > 1:
            commands.append(("LINEBELOW", (0, 1), (-1, -1), 0.4, HexColor("#E2E8F0")))

        table = Table(data, colWidths=[width * w for w in self.COLUMN_WIDTHS], repeatRows=1)
        table.setStyle(TableStyle(commands))
        _, h = table.wrapOn(canvas, width, UNBOUNDED_HEIGHT)
        table.drawOn(canvas, self.left, top - h)
        return top - h

    def _draw_totals(self, canvas: Canvas, document: FinanceDocument, top: float) -> float:
        label_x = self.right - 180
        rows = [
            ("Subtotal", self._money(document, document.subtotal)),
            (f"Tax ({document.tax_rate:g}%)", self._money(document, document.tax_amount)),
        ]
        y = top
        canvas.setFont("Helvetica", 9)
        canvas.setFillColor(self.muted)
        for label, value in rows:
            canvas.drawString(label_x, y, label)
            canvas.drawRightString(self.right, y, value)
            y -= 14

        canvas.setStrokeColor(self.accent)
        canvas.line(label_x, y + 8, self.right, y + 8)
        canvas.setFillColor(self.text_color)
        canvas.setFont("Helvetica-Bold", 10.5)
        canvas.drawString(label_x, y - 6, "Total")
        canvas.drawRightString(self.right, y - 6, self._money(document, document.total))
        return y - 6

    def _draw_notes(self, canvas: Canvas, document: FinanceDocument, top: float) -> None:
        y = top
        sections = [("NOTES", document.notes), ("TERMS", document.terms)]
        bank_name = document.bank_name or self.brand.bank.bank_name
        bank_account = document.bank_account or self.brand.bank.account_no
        if document.title == "INVOICE" and (bank_name or bank_account):
            sections.append(("PAYMENT DETAILS", f"{bank_name or ''} {bank_account or ''}".strip()))

        for title, text in sections:
            if not text:
                continue
            canvas.setFillColor(self.accent)
            canvas.setFont("Helvetica-Bold", 7.5)
            canvas.drawString(self.left, y, title)
            para = Paragraph(escape(text), self.cell_style)
            _, h = para.wrapOn(canvas, self.layout.content_width * 0.6, UNBOUNDED_HEIGHT)
            para.drawOn(canvas, self.left, y - 4 - h)
            y -= h + 18
