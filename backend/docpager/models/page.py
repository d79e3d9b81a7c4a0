"""
页模型 - 页描述/模板数据契约/位图页/输出文档

页描述由装箱器（或明细分页器）按页序产出；total_pages 需在全部页产出后回填
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from .blocks import ContentBlock
from .finance import LineItem
from .letterhead import SignatureAsset


class PageRole(str, Enum):
    """页角色"""
    FIRST = "first"
    CONTINUATION = "continuation"


class PageDescriptor(BaseModel):
    """页描述"""
    index: int = Field(..., ge=1, description="页码(1起)")
    role: PageRole
    blocks: list[ContentBlock] = Field(default_factory=list)
    rows: list[LineItem] = Field(default_factory=list)
    is_terminal: bool = False
    total_pages: int = Field(0, description="装箱完成后回填")

    # 诊断信息
    content_height: float = 0.0
    overflow: bool = Field(False, description="内容超出本页名义预算(超高块)")
    start_number: int = Field(1, description="本页首个行/块的全局序号")

    @property
    def is_first(self) -> bool:
        return self.role == PageRole.FIRST

    @property
    def is_signature_only(self) -> bool:
        """仅承载签名的终页"""
        return self.is_terminal and not self.blocks and not self.rows and self.index > 1


class PageContext(BaseModel):
    """页模板数据契约（模板只读取这些字段）"""
    role: PageRole
    page_index: int
    total_pages: int
    is_terminal: bool
    blocks: list[ContentBlock] = Field(default_factory=list)
    rows: list[LineItem] = Field(default_factory=list)
    start_number: int = 1
    signature: SignatureAsset | None = Field(None, description="仅末页携带")

    # 来源文档（只读：收件人/发件人/单据头等固定字段）
    document: Any = None

    @property
    def is_first_page(self) -> bool:
        return self.role == PageRole.FIRST

    @property
    def show_page_number(self) -> bool:
        return self.total_pages > 1


class RasterPage(BaseModel):
    """单页位图（与页描述按index一一对应）"""
    index: int = Field(..., ge=1)
    image: bytes = Field(..., repr=False, description="PNG")
    width_px: int
    height_px: int
    scale: float = 1.0


class OutputDocument(BaseModel):
    """多页输出文档（交付给下载/打印/发送方）"""
    data: bytes = Field(..., repr=False, description="PDF")
    page_count: int
    filename: str = "document.pdf"
    page_format: str = "A4"

    def save(self, target: str | Path) -> Path:
        """写出PDF；target为目录时使用filename"""
        path = Path(target)
        if path.is_dir():
            path = path / self.filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.data)
        return path
