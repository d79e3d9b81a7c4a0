"""
流式装箱器 - 贪心首次适配分页

职责：
1. 按顺序把已测量内容块放入当前页，放不下则另起续页（不回溯、不拆块）
2. 页预算在开页时查询一次（首页扣前置块，续页不扣）
3. 装箱结束后标记末页并回填总页数
4. 末页签名修正：末页内容+签名超出末页预算时，
   尾块移到新的终页；尾块也放不下（或末页只有一块）时追加仅含签名的终页

边界：
- 超高块独占一页，允许超出名义预算（overflow=True）
- 空输入返回一个空首页（仍是完整的带页眉页面）
- 装箱本身从不因排版原因抛错

测试要点：
- test_pack_single_page: 示例1
- test_pack_three_pages: 示例2
- test_pack_empty: 示例4
- test_completeness: 拼接各页内容块等于输入
- test_oversized_isolation: 超高块独占一页
- test_signature_overflow: 末页签名修正
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..interfaces import IPageFlowPacker
from ..models import MeasuredBlock, PageDescriptor, PageRole
from .budget import PageBudgetModel

logger = logging.getLogger(__name__)


@dataclass
class _PageDraft:
    """装箱中的页"""
    role: PageRole
    budget: float
    blocks: list[MeasuredBlock] = field(default_factory=list)
    height: float = 0.0

    def add(self, block: MeasuredBlock) -> None:
        self.blocks.append(block)
        self.height += block.height

    def pop(self) -> MeasuredBlock:
        block = self.blocks.pop()
        self.height -= block.height
        return block

    def fits(self, block: MeasuredBlock) -> bool:
        return self.height + block.height <= self.budget


class PageFlowPacker(IPageFlowPacker):
    """流式装箱器实现"""

    def __init__(self, budget: PageBudgetModel):
        self.budget = budget

    def pack(
        self,
        measured: Sequence[MeasuredBlock],
        has_preamble: bool = False,
        reserve_signature: bool = True,
    ) -> list[PageDescriptor]:
        """装箱并返回页描述（页序即输入顺序）"""
        drafts: list[_PageDraft] = []
        current = self._open_page(PageRole.FIRST, has_preamble)

        for block in measured:
            if current.blocks and not current.fits(block):
                drafts.append(current)
                current = self._open_page(PageRole.CONTINUATION, has_preamble)
            current.add(block)

        drafts.append(current)

        if reserve_signature:
            self._settle_terminal(drafts, has_preamble)

        return self._finalize(drafts)

    def _open_page(self, role: PageRole, has_preamble: bool) -> _PageDraft:
        """开新页（此时查询一次非末页预算）"""
        return _PageDraft(
            role=role,
            budget=self.budget.budget_for(role, has_preamble, is_terminal=False),
        )

    def _settle_terminal(self, drafts: list[_PageDraft], has_preamble: bool) -> None:
        """末页签名修正（原地修改drafts）"""
        last = drafts[-1]
        if not last.blocks:
            return

        terminal_budget = self.budget.budget_for(last.role, has_preamble, is_terminal=True)
        if last.height <= terminal_budget:
            return

        continuation_terminal = self.budget.budget_for(
            PageRole.CONTINUATION, has_preamble, is_terminal=True
        )
        tail = last.blocks[-1]
        signature_page = self._open_page(PageRole.CONTINUATION, has_preamble)

        if len(last.blocks) > 1 and tail.height <= continuation_terminal:
            signature_page.add(last.pop())
            logger.info(
                f"末页放不下签名块，尾块移至第{len(drafts) + 1}页"
            )
        else:
            logger.info(f"末页放不下签名块，追加仅含签名的第{len(drafts) + 1}页")

        drafts.append(signature_page)

    def _finalize(self, drafts: list[_PageDraft]) -> list[PageDescriptor]:
        """生成页描述，标记末页并回填总页数"""
        total = len(drafts)
        pages: list[PageDescriptor] = []
        start_number = 1

        for i, draft in enumerate(drafts, start=1):
            is_terminal = i == total
            overflow = draft.height > draft.budget
            if overflow:
                logger.warning(
                    f"第{i}页内容高度 {draft.height:.1f} 超出预算 {draft.budget:.1f}（超高块独占一页）"
                )

            pages.append(
                PageDescriptor(
                    index=i,
                    role=draft.role,
                    blocks=[mb.block for mb in draft.blocks],
                    is_terminal=is_terminal,
                    content_height=draft.height,
                    overflow=overflow,
                    start_number=start_number,
                )
            )
            start_number += len(draft.blocks)

        for page in pages:
            page.total_pages = total

        return pages
