"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- ContentBlock/MeasuredBlock: 正文内容块与测量结果
- PageDescriptor/PageContext: 页描述与模板数据契约
- RasterPage/OutputDocument: 单页位图与多页输出
- LetterheadDocument/FinanceDocument: 编辑器输入
- ExportJob: 导出任务状态
"""

from .blocks import BlockKind, ContentBlock, MeasuredBlock
from .finance import ClientInfo, DocumentType, FinanceDocument, LineItem
from .job import ExportJob, ExportKind, ExportProgress, ExportStatus
from .letterhead import LetterheadDocument, RecipientInfo, SenderInfo, SignatureAsset
from .page import OutputDocument, PageContext, PageDescriptor, PageRole, RasterPage

__all__ = [
    "BlockKind",
    "ContentBlock",
    "MeasuredBlock",
    "PageRole",
    "PageDescriptor",
    "PageContext",
    "RasterPage",
    "OutputDocument",
    "SignatureAsset",
    "RecipientInfo",
    "SenderInfo",
    "LetterheadDocument",
    "DocumentType",
    "LineItem",
    "ClientInfo",
    "FinanceDocument",
    "ExportJob",
    "ExportKind",
    "ExportProgress",
    "ExportStatus",
]
