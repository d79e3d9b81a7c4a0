"""
明细分页器单元测试
"""

import pytest

from docpager.layout import ItemPaginator
from docpager.models import LineItem, PageRole


def _rows(n: int) -> list[LineItem]:
    return [LineItem(description=f"item {i}", quantity=1, unit_price=i) for i in range(1, n + 1)]


class TestItemPaginator:
    """定长切分测试"""

    def test_paginate_17_rows(self):
        """示例3：17行、每页8行 → [8, 8, 1]"""
        chunks = ItemPaginator(8).paginate(_rows(17))
        assert [len(c) for c in chunks] == [8, 8, 1]

    def test_paginate_exact_multiple(self):
        chunks = ItemPaginator(8).paginate(_rows(16))
        assert [len(c) for c in chunks] == [8, 8]

    def test_paginate_empty(self):
        """测试零行返回一个空页"""
        assert ItemPaginator().paginate([]) == [[]]

    def test_paginate_override_size(self):
        chunks = ItemPaginator(8).paginate(_rows(10), rows_per_page=3)
        assert [len(c) for c in chunks] == [3, 3, 3, 1]

    def test_paginate_preserves_order(self):
        rows = _rows(17)
        chunks = ItemPaginator(8).paginate(rows)
        assert [r for c in chunks for r in c] == rows

    @pytest.mark.parametrize("n,expected", [(0, 1), (1, 1), (8, 1), (9, 2), (17, 3)])
    def test_page_count(self, n, expected):
        """测试 ceil(n/k)，零行为1页"""
        assert ItemPaginator(8).page_count(n) == expected

    def test_invalid_rows_per_page(self):
        with pytest.raises(ValueError):
            ItemPaginator(0)
        with pytest.raises(ValueError):
            ItemPaginator(8).paginate(_rows(3), rows_per_page=0)


class TestDescribe:
    """页描述生成测试"""

    def test_describe_17_rows(self):
        """测试角色/末页/总页数/起始序号"""
        pages = ItemPaginator(8).describe(_rows(17))
        assert [p.role for p in pages] == [PageRole.FIRST, PageRole.CONTINUATION, PageRole.CONTINUATION]
        assert [p.is_terminal for p in pages] == [False, False, True]
        assert all(p.total_pages == 3 for p in pages)
        assert [p.start_number for p in pages] == [1, 9, 17]
        assert pages[2].rows[0].description == "item 17"

    def test_describe_empty(self):
        pages = ItemPaginator(8).describe([])
        assert len(pages) == 1
        assert pages[0].is_terminal
        assert pages[0].rows == []
