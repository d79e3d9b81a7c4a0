"""
信函模型 - 信函编辑器提交的只读输入

正文以HTML给出（或已解析的内容块），收件人信息构成首页固定前置块，
发件人与签名只出现在末页
"""

from __future__ import annotations

import base64
import binascii
import re
from datetime import date

from pydantic import BaseModel, Field

from .blocks import ContentBlock

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[\w-]+=[^;,]*)*;base64,(?P<data>.*)$", re.S)


class SignatureAsset(BaseModel):
    """签名图片"""
    image: bytes = Field(..., repr=False)
    mime_type: str = "image/png"

    @classmethod
    def from_data_url(cls, data_url: str) -> SignatureAsset:
        """解析编辑器签名板输出的 data:image/png;base64,... 串"""
        match = _DATA_URL_RE.match(data_url.strip())
        if not match:
            raise ValueError("签名不是base64 data URL")
        try:
            image = base64.b64decode(match.group("data"), validate=True)
        except binascii.Error as e:
            raise ValueError(f"签名base64解码失败: {e}") from e
        return cls(image=image, mime_type=match.group("mime") or "image/png")


class RecipientInfo(BaseModel):
    """收件人信息（首页前置块）"""
    name: str = ""
    company: str | None = None
    address: str | None = None
    city: str | None = None
    date: str | None = None
    subject: str | None = None


class SenderInfo(BaseModel):
    """发件人（末页签名块）"""
    name: str = ""
    title: str = ""


class LetterheadDocument(BaseModel):
    """信函文档"""
    content_html: str = ""
    blocks: list[ContentBlock] | None = Field(None, description="已解析内容块，优先于content_html")

    recipient: RecipientInfo | None = None
    sender: SenderInfo = Field(default_factory=SenderInfo)
    signature: SignatureAsset | None = None
    signature_label: str = "Authorized Signature"

    @property
    def has_preamble(self) -> bool:
        """有收件人姓名时首页带前置块"""
        return bool(self.recipient and self.recipient.name.strip())

    def suggested_filename(self, today: date | None = None) -> str:
        """下载文件名：Letterhead-<收件人>.pdf，无收件人时用日期"""
        if self.has_preamble:
            name = re.sub(r"\s+", "_", self.recipient.name.strip())
            return f"Letterhead-{name}.pdf"
        day = today or date.today()
        return f"Letterhead-{day.isoformat()}.pdf"
