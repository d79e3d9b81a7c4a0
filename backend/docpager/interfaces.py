"""
模块接口契约 - 定义各模块的抽象接口

设计原则：
1. 模块间通过接口通信，不直接依赖具体实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换（装箱算法可注入合成高度，无需真实渲染环境）

使用方式：
    from docpager.interfaces import IContentMeasurer

    class MyMeasurer(IContentMeasurer):
        def measure(self, blocks, page_width=None) -> list[MeasuredBlock]:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config.runtime_config import PageFormatConfig
    from .models import (
        ContentBlock,
        MeasuredBlock,
        OutputDocument,
        PageDescriptor,
        RasterPage,
    )


# ============================================================================
# 分页模块接口
# ============================================================================

class IContentMeasurer(ABC):
    """内容测量器接口 - 在离屏测量面上获取每个内容块的排版高度"""

    @abstractmethod
    def measure(
        self,
        blocks: Sequence[ContentBlock],
        page_width: float | None = None,
    ) -> list[MeasuredBlock]:
        """
        按固定版心宽度测量内容块

        Args:
            blocks: 有序内容块
            page_width: 版心宽度（缺省取配置）

        Returns:
            与输入一一对应的测量结果

        Raises:
            MeasurementError: 测量环境创建/使用/销毁失败
        """
        ...


class IPageFlowPacker(ABC):
    """流式装箱器接口 - 将已测量内容块分配到各页"""

    @abstractmethod
    def pack(
        self,
        measured: Sequence[MeasuredBlock],
        has_preamble: bool = False,
        reserve_signature: bool = True,
    ) -> list[PageDescriptor]:
        """
        贪心装箱

        Returns:
            按页码排序的页描述（total_pages已回填，末页is_terminal=True）
        """
        ...


class IItemPaginator(ABC):
    """明细分页器接口 - 定长切分表格行"""

    @abstractmethod
    def paginate(self, rows: Sequence[Any], rows_per_page: int | None = None) -> list[list[Any]]:
        """按每页行数切分，空输入返回单个空页"""
        ...


# ============================================================================
# 渲染与合成模块接口
# ============================================================================

class IRasterizer(ABC):
    """栅格化器接口"""

    @abstractmethod
    def rasterize(self, pdf_bytes: bytes, index: int) -> RasterPage:
        """将单页渲染结果转为定分辨率位图"""
        ...


class IPageRenderer(ABC):
    """单页渲染器接口"""

    @abstractmethod
    def render(self, descriptor: PageDescriptor, document: Any) -> RasterPage:
        """
        渲染单页并栅格化

        每次调用独占一个临时渲染面，返回前必须销毁（成功或失败）

        Raises:
            RenderError: 模板绘制或栅格化失败
            RenderTimeoutError: 渲染面未在等待时间内完成绘制
        """
        ...


class IDocumentAssembler(ABC):
    """文档合成器接口"""

    @abstractmethod
    def assemble(
        self,
        rasters: Sequence[RasterPage],
        page_format: PageFormatConfig | None = None,
        filename: str = "document.pdf",
    ) -> OutputDocument:
        """
        按页序合成多页PDF（每张位图一页，铺满版面）

        Raises:
            AssemblyError: 页序不连续或输出校验失败
        """
        ...


# ============================================================================
# 异常定义
# ============================================================================

class DocPagerError(Exception):
    """基础异常"""
    pass


class MeasurementError(DocPagerError):
    """测量环境错误（创建/销毁失败或测量过程异常）"""
    pass


class RenderError(DocPagerError):
    """单页渲染错误"""
    pass


class RenderTimeoutError(RenderError):
    """渲染面未在等待时间内完成绘制"""
    pass


class AssemblyError(DocPagerError):
    """多页文档合成错误"""
    pass


class ExportError(DocPagerError):
    """导出流水线错误"""
    pass
