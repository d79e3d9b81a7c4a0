"""
内容块模型 - 流式正文的最小不可分单元

内容块只在测量后才有高度；装箱器从不拆分内容块
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class BlockKind(str, Enum):
    """内容块类型"""
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    LIST = "list"
    BLOCKQUOTE = "blockquote"


class ContentBlock(BaseModel):
    """不可变内容块（段落/标题/列表/引用）"""
    kind: BlockKind = BlockKind.PARAGRAPH
    markup: str = Field("", description="行内标记(b/i/u/strike/br子集，已转义)")
    items: list[str] = Field(default_factory=list, description="列表项行内标记(仅LIST)")
    level: int = Field(0, description="标题级别(1-6，仅HEADING)")
    ordered: bool = Field(False, description="有序列表(仅LIST)")
    html: str = Field("", description="来源HTML片段")

    model_config = {"frozen": True}

    @property
    def is_blank(self) -> bool:
        """空段落（编辑器中的空行）"""
        if self.kind == BlockKind.LIST:
            return not any(item.strip() for item in self.items)
        return not self.markup.strip()


class MeasuredBlock(BaseModel):
    """已测量内容块（高度含段间距）"""
    block: ContentBlock
    height: float = Field(..., ge=0)
    width: float = Field(..., gt=0)

    model_config = {"frozen": True}
