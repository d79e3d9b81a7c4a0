"""
流水线层 - 编排分页与导出

- ExportExecutor: 信函/发票/报价单的分页预览与导出
- stages: 阶段定义与进度区间
"""

from .executor import ExportExecutor
from .stages import FINANCE_STAGES, LETTERHEAD_STAGES, PipelineStage, StageEnum

__all__ = [
    "ExportExecutor",
    "PipelineStage",
    "StageEnum",
    "LETTERHEAD_STAGES",
    "FINANCE_STAGES",
]
