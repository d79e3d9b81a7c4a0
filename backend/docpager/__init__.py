"""
docpager 文档分页导出 - 后端核心模块

模块结构：
- config/     运行期配置与品牌规范加载
- models/     数据模型定义（内容块/页描述/信函/财务单据/导出任务）
- layout/     分页计算（页面预算/内容测量/流式装箱/明细分页）
- render/     单页渲染、栅格化与多页PDF合成
- pipeline/   导出流水线编排
"""

__version__ = "0.1.0"
