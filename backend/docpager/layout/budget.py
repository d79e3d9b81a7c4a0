"""
页面预算模型 - 各页角色可用于流式正文的纵向空间

预算 = 角色基准高度
       - 收件人前置块高度（仅首页，且有收件人）
       - 签名块高度（仅末页）

纯函数，无副作用；装箱时每页只查询一次
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..config.runtime_config import LetterheadLayoutConfig
from ..models import PageRole


class PageBudgetModel(BaseModel):
    """页面预算"""
    first_page_height: float = Field(..., ge=0, description="首页正文基准高度")
    continuation_page_height: float = Field(..., ge=0, description="续页正文基准高度")
    preamble_height: float = Field(0, ge=0, description="首页前置块预留")
    signature_height: float = Field(0, ge=0, description="末页签名块预留")

    model_config = {"frozen": True}

    @classmethod
    def from_layout(cls, layout: LetterheadLayoutConfig) -> PageBudgetModel:
        """由信函版式配置构建"""
        return cls(
            first_page_height=layout.first_page_height,
            continuation_page_height=layout.continuation_page_height,
            preamble_height=layout.preamble_height,
            signature_height=layout.signature_height,
        )

    def budget_for(
        self,
        role: PageRole,
        has_preamble: bool = False,
        is_terminal: bool = False,
    ) -> float:
        """可用高度（不小于0）"""
        if role == PageRole.FIRST:
            available = self.first_page_height
            if has_preamble:
                available -= self.preamble_height
        else:
            available = self.continuation_page_height

        if is_terminal:
            available -= self.signature_height

        return max(0.0, available)
