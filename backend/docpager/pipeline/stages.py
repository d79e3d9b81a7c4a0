"""
流水线阶段定义

职责：
1. 定义信函/财务单据导出的阶段名称
2. 为各阶段划定进度区间

测试要点：
- test_stage_ranges_cover_full_progress: 阶段进度区间首尾相接，覆盖0-100
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StageEnum(str, Enum):
    """流水线阶段枚举"""
    PARSE_CONTENT = "PARSE_CONTENT"
    MEASURE_BLOCKS = "MEASURE_BLOCKS"
    PACK_PAGES = "PACK_PAGES"
    PAGINATE_ITEMS = "PAGINATE_ITEMS"
    RENDER_PAGES = "RENDER_PAGES"
    ASSEMBLE_DOCUMENT = "ASSEMBLE_DOCUMENT"


@dataclass(frozen=True)
class PipelineStage:
    """流水线阶段"""
    name: str
    progress_start: int  # 进度起点（0-100）
    progress_end: int    # 进度终点

    def progress_at(self, done: int, total: int) -> int:
        """阶段内按完成比例插值"""
        if total <= 0:
            return self.progress_end
        span = self.progress_end - self.progress_start
        return self.progress_start + span * done // total


# 信函：解析 → 测量 → 装箱 → 逐页渲染 → 合成
LETTERHEAD_STAGES: list[PipelineStage] = [
    PipelineStage(StageEnum.PARSE_CONTENT.value, 0, 5),
    PipelineStage(StageEnum.MEASURE_BLOCKS.value, 5, 20),
    PipelineStage(StageEnum.PACK_PAGES.value, 20, 25),
    PipelineStage(StageEnum.RENDER_PAGES.value, 25, 90),
    PipelineStage(StageEnum.ASSEMBLE_DOCUMENT.value, 90, 100),
]

# 发票/报价单：定长分页 → 逐页渲染 → 合成
FINANCE_STAGES: list[PipelineStage] = [
    PipelineStage(StageEnum.PAGINATE_ITEMS.value, 0, 10),
    PipelineStage(StageEnum.RENDER_PAGES.value, 10, 90),
    PipelineStage(StageEnum.ASSEMBLE_DOCUMENT.value, 90, 100),
]
