"""
分页模块 - 页面预算/正文解析/内容测量/流式装箱/明细分页

子模块：
- budget: 页面预算模型
- html_blocks: 编辑器HTML → 内容块
- flowables: 内容块排版对象（测量与渲染共用）
- measurer: 离屏内容测量
- packer: 贪心流式装箱
- paginator: 明细定长分页
"""

from .budget import PageBudgetModel
from .html_blocks import parse_html_blocks
from .measurer import ContentMeasurer, measurement_surface
from .packer import PageFlowPacker
from .paginator import ItemPaginator

__all__ = [
    "PageBudgetModel",
    "parse_html_blocks",
    "ContentMeasurer",
    "measurement_surface",
    "PageFlowPacker",
    "ItemPaginator",
]
