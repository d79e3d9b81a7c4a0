"""
明细分页器 - 发票/报价单明细定长切分

行高统一，不依赖渲染高度：每页固定行数，末页为终页
零行时返回一个空页（仍渲染完整单据头与合计）
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from ..interfaces import IItemPaginator
from ..models import LineItem, PageDescriptor, PageRole


class ItemPaginator(IItemPaginator):
    """明细分页器实现"""

    def __init__(self, rows_per_page: int = 8):
        self.rows_per_page = self._check(rows_per_page)

    def paginate(self, rows: Sequence[Any], rows_per_page: int | None = None) -> list[list[Any]]:
        """按每页行数切分"""
        size = self._check(rows_per_page) if rows_per_page is not None else self.rows_per_page
        if not rows:
            return [[]]
        return [list(rows[i:i + size]) for i in range(0, len(rows), size)]

    def page_count(self, row_count: int, rows_per_page: int | None = None) -> int:
        """ceil(n / k)，零行为1页"""
        size = self._check(rows_per_page) if rows_per_page is not None else self.rows_per_page
        return max(1, math.ceil(row_count / size))

    def describe(
        self,
        rows: Sequence[LineItem],
        rows_per_page: int | None = None,
    ) -> list[PageDescriptor]:
        """切分并生成页描述"""
        chunks = self.paginate(rows, rows_per_page)
        total = self.page_count(len(rows), rows_per_page)

        pages: list[PageDescriptor] = []
        start_number = 1
        for i, chunk in enumerate(chunks, start=1):
            pages.append(
                PageDescriptor(
                    index=i,
                    role=PageRole.FIRST if i == 1 else PageRole.CONTINUATION,
                    rows=chunk,
                    is_terminal=i == total,
                    total_pages=total,
                    start_number=start_number,
                )
            )
            start_number += len(chunk)
        return pages

    @staticmethod
    def _check(rows_per_page: int) -> int:
        if rows_per_page < 1:
            raise ValueError(f"每页行数必须≥1: {rows_per_page}")
        return rows_per_page
