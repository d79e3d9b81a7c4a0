"""
流式装箱器单元测试（合成高度，无需渲染环境）
"""

import pytest

from docpager.layout import PageBudgetModel, PageFlowPacker
from docpager.models import PageRole


class TestPackExamples:
    """基本装箱场景"""

    def test_pack_single_page(self, bare_budget: PageBudgetModel, measured):
        """示例1：三段共150，首页预算600 → 1页"""
        pages = PageFlowPacker(bare_budget).pack(measured([50, 50, 50]))
        assert len(pages) == 1
        assert pages[0].role == PageRole.FIRST
        assert pages[0].is_terminal
        assert pages[0].total_pages == 1
        assert len(pages[0].blocks) == 3

    def test_pack_three_pages(self, bare_budget: PageBudgetModel, measured):
        """示例2：共1400，首页600/续页800 → 3页"""
        pages = PageFlowPacker(bare_budget).pack(measured([250, 250, 250, 250, 250, 150]))
        assert len(pages) == 3
        assert [p.role for p in pages] == [PageRole.FIRST, PageRole.CONTINUATION, PageRole.CONTINUATION]
        assert pages[0].content_height <= 600
        assert pages[1].content_height <= 800
        assert [len(p.blocks) for p in pages] == [2, 3, 1]
        assert [p.is_terminal for p in pages] == [False, False, True]
        assert all(p.total_pages == 3 for p in pages)
        assert [p.index for p in pages] == [1, 2, 3]

    def test_pack_empty(self, budget: PageBudgetModel):
        """示例4：零块 → 一个空首页（末页）"""
        pages = PageFlowPacker(budget).pack([])
        assert len(pages) == 1
        assert pages[0].blocks == []
        assert pages[0].role == PageRole.FIRST
        assert pages[0].is_terminal
        assert pages[0].total_pages == 1

    def test_preamble_reduces_first_page(self, budget: PageBudgetModel, measured):
        """测试首页前置块扣减（600-120=480）"""
        blocks = measured([200, 200, 200])
        without = PageFlowPacker(budget).pack(blocks, reserve_signature=False)
        with_preamble = PageFlowPacker(budget).pack(blocks, has_preamble=True, reserve_signature=False)
        assert len(without[0].blocks) == 3
        assert len(with_preamble[0].blocks) == 2
        assert len(with_preamble) == 2


class TestPackInvariants:
    """装箱不变量"""

    @pytest.mark.parametrize(
        "heights",
        [
            [120] * 20,
            [30, 700, 45, 45, 900, 10, 300, 300, 300],
            [599, 1, 799, 1, 800, 600],
            [5] * 300,
        ],
    )
    def test_completeness(self, budget: PageBudgetModel, measured, heights):
        """测试各页内容块拼接等于输入（不丢、不重、不乱序）"""
        blocks = measured(heights)
        pages = PageFlowPacker(budget).pack(blocks, has_preamble=True)
        flat = [block for page in pages for block in page.blocks]
        assert flat == [m.block for m in blocks]

    @pytest.mark.parametrize("heights", [[120] * 20, [30, 700, 45, 45, 900, 10], [5] * 300])
    def test_terminal_uniqueness(self, budget: PageBudgetModel, measured, heights):
        """测试恰有一个末页且为最后一页"""
        pages = PageFlowPacker(budget).pack(measured(heights))
        assert [p.is_terminal for p in pages].count(True) == 1
        assert pages[-1].is_terminal
        assert all(p.total_pages == len(pages) for p in pages)

    def test_page_count_monotonic(self, budget: PageBudgetModel, measured):
        """测试追加内容块不会减少页数"""
        heights = [90, 140, 60, 300, 220, 80, 410, 30, 150, 500, 70]
        counts = [len(PageFlowPacker(budget).pack(measured(heights[:n]))) for n in range(len(heights) + 1)]
        assert counts == sorted(counts)

    def test_budget_respected(self, budget: PageBudgetModel, measured):
        """测试非超高页内容不超过本页预算"""
        pages = PageFlowPacker(budget).pack(measured([130] * 30), has_preamble=True)
        for page in pages:
            role_budget = budget.budget_for(page.role, has_preamble=True, is_terminal=page.is_terminal)
            assert not page.overflow
            assert page.content_height <= role_budget

    def test_start_numbers(self, bare_budget: PageBudgetModel, measured):
        pages = PageFlowPacker(bare_budget).pack(measured([250, 250, 250, 250, 250, 150]))
        assert [p.start_number for p in pages] == [1, 3, 6]


class TestOversizedBlocks:
    """超高块"""

    def test_oversized_isolation(self, bare_budget: PageBudgetModel, measured):
        """测试超高块独占一页并标记overflow"""
        pages = PageFlowPacker(bare_budget).pack(measured([300, 1000, 100]))
        assert [len(p.blocks) for p in pages] == [1, 1, 1]
        assert not pages[0].overflow
        assert pages[1].overflow
        assert pages[1].content_height == 1000
        assert not pages[2].overflow

    def test_oversized_first_block(self, bare_budget: PageBudgetModel, measured):
        """测试首块即超高时仍放在首页"""
        pages = PageFlowPacker(bare_budget).pack(measured([2000, 50]))
        assert pages[0].role == PageRole.FIRST
        assert pages[0].overflow
        assert len(pages) == 2


class TestSignatureCorrection:
    """末页签名修正"""

    def test_fits_with_signature(self, budget: PageBudgetModel, measured):
        """测试末页放得下签名时不修正"""
        pages = PageFlowPacker(budget).pack(measured([200, 250]))
        assert len(pages) == 1

    def test_tail_block_moves(self, budget: PageBudgetModel, measured):
        """测试尾块移到新的终页"""
        pages = PageFlowPacker(budget).pack(measured([300, 250]))
        assert len(pages) == 2
        assert [len(p.blocks) for p in pages] == [1, 1]
        assert not pages[0].is_terminal
        assert pages[1].is_terminal
        assert pages[1].role == PageRole.CONTINUATION
        assert all(p.total_pages == 2 for p in pages)

    def test_signature_only_page(self, budget: PageBudgetModel, measured):
        """测试单块末页放不下签名时追加仅签名页"""
        pages = PageFlowPacker(budget).pack(measured([550]))
        assert len(pages) == 2
        assert pages[0].blocks and not pages[0].is_terminal
        assert pages[1].is_signature_only

    def test_signature_only_when_tail_too_tall(self, budget: PageBudgetModel, measured):
        """测试尾块在续页终页也放不下时追加仅签名页"""
        pages = PageFlowPacker(budget).pack(measured([100, 750]))
        # 100+750超出首页600，750单独成续页；续页终页预算700放不下
        assert len(pages) == 3
        assert [len(p.blocks) for p in pages] == [1, 1, 0]
        assert pages[2].is_signature_only

    def test_no_reservation(self, budget: PageBudgetModel, measured):
        """测试不预留签名时不修正"""
        pages = PageFlowPacker(budget).pack(measured([550]), reserve_signature=False)
        assert len(pages) == 1
