"""
导出执行器 - 编排分页与导出各阶段

职责：
1. 信函：解析HTML → 测量 → 装箱 → 逐页渲染 → 合成
2. 发票/报价单：定长分页 → 逐页渲染 → 合成
3. 更新任务进度，记录超高页/仅签名页告警
4. 任一阶段失败即中止：丢弃已渲染位图，任务标记失败并向上抛出

逐页渲染严格串行：第k页渲染面销毁后才创建第k+1页

测试要点：
- test_export_letterhead: 完整信函导出，页数与装箱结果一致
- test_export_finance: 17行明细导出3页
- test_failure_discards_pages: 某页渲染失败时不产出文档，任务失败
- test_sequential_rendering: 页序严格递增
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from ..config import RuntimeConfig, get_config
from ..interfaces import DocPagerError, ExportError
from ..layout import ContentMeasurer, ItemPaginator, PageBudgetModel, PageFlowPacker, parse_html_blocks
from ..models import (
    ContentBlock,
    DocumentType,
    ExportJob,
    ExportKind,
    FinanceDocument,
    LetterheadDocument,
    OutputDocument,
    PageDescriptor,
    RasterPage,
)
from ..render import DocumentAssembler, PageRenderer
from .stages import FINANCE_STAGES, LETTERHEAD_STAGES, PipelineStage, StageEnum

logger = logging.getLogger(__name__)


class ExportExecutor:
    """导出执行器"""

    def __init__(
        self,
        config: RuntimeConfig | None = None,
        measurer: ContentMeasurer | None = None,
        packer: PageFlowPacker | None = None,
        paginator: ItemPaginator | None = None,
        renderer: PageRenderer | None = None,
        assembler: DocumentAssembler | None = None,
    ):
        self.config = config or get_config()
        layout = self.config.letterhead

        self.measurer = measurer or ContentMeasurer(layout)
        self.packer = packer or PageFlowPacker(PageBudgetModel.from_layout(layout))
        self.paginator = paginator or ItemPaginator(self.config.finance.rows_per_page)
        self._renderer = renderer
        self.assembler = assembler or DocumentAssembler()

    @property
    def renderer(self) -> PageRenderer:
        # 预览分页不需要渲染环境，首次导出时再创建
        if self._renderer is None:
            self._renderer = PageRenderer(self.config)
        return self._renderer

    # === 分页预览 ===

    def paginate_letterhead(self, document: LetterheadDocument) -> list[PageDescriptor]:
        """信函分页（不渲染）"""
        blocks = self._parse(document)
        measured = self.measurer.measure(blocks)
        return self.packer.pack(measured, has_preamble=document.has_preamble)

    def paginate_finance(self, document: FinanceDocument) -> list[PageDescriptor]:
        """明细分页（不渲染）"""
        return self.paginator.describe(document.items)

    # === 导出 ===

    def export_letterhead(
        self,
        document: LetterheadDocument,
        job: ExportJob | None = None,
    ) -> OutputDocument:
        """导出信函PDF"""
        job = job or self._new_job(ExportKind.LETTERHEAD)
        context: dict[str, Any] = {"document": document, "rasters": []}
        return self._run(job, LETTERHEAD_STAGES, context)

    def export_finance(
        self,
        document: FinanceDocument,
        job: ExportJob | None = None,
    ) -> OutputDocument:
        """导出发票/报价单PDF"""
        kind = ExportKind.INVOICE if document.doc_type == DocumentType.INVOICE else ExportKind.QUOTATION
        job = job or self._new_job(kind)
        context: dict[str, Any] = {"document": document, "rasters": []}
        return self._run(job, FINANCE_STAGES, context)

    # === 内部实现 ===

    def _run(self, job: ExportJob, stages: list[PipelineStage], context: dict[str, Any]) -> OutputDocument:
        job.mark_running(stages[0].name)
        logger.info(f"[{job.job_id}] 导出开始: {job.kind.value}")

        try:
            for stage in stages:
                self._execute_stage(job, stage, context)
        except Exception as e:
            # 已渲染的页一律丢弃，不产出部分文档
            context["rasters"].clear()
            logger.exception(f"导出失败: {job.job_id}")
            job.mark_failed(str(e))
            job.progress.message = f"导出失败: {e}"
            if isinstance(e, DocPagerError):
                raise
            raise ExportError(f"导出失败: {e}") from e

        output: OutputDocument = context["output"]
        job.filename = output.filename
        job.mark_succeeded(output.page_count)
        job.progress.message = "导出完成"
        logger.info(f"[{job.job_id}] 导出完成: {output.filename} ({output.page_count}页)")
        return output

    def _execute_stage(self, job: ExportJob, stage: PipelineStage, context: dict[str, Any]) -> None:
        """执行单个阶段"""
        job.progress.stage = stage.name
        job.progress.percent = stage.progress_start
        logger.info(f"[{job.job_id}] 开始阶段: {stage.name}")

        try:
            if stage.name == StageEnum.PARSE_CONTENT.value:
                context["blocks"] = self._parse(context["document"])

            elif stage.name == StageEnum.MEASURE_BLOCKS.value:
                context["measured"] = self.measurer.measure(context["blocks"])

            elif stage.name == StageEnum.PACK_PAGES.value:
                document: LetterheadDocument = context["document"]
                context["pages"] = self.packer.pack(
                    context["measured"], has_preamble=document.has_preamble
                )

            elif stage.name == StageEnum.PAGINATE_ITEMS.value:
                context["pages"] = self.paginate_finance(context["document"])

            elif stage.name == StageEnum.RENDER_PAGES.value:
                self._stage_render(job, stage, context)

            elif stage.name == StageEnum.ASSEMBLE_DOCUMENT.value:
                self._stage_assemble(context)

        except Exception as e:
            logger.error(f"[{job.job_id}] 阶段失败 {stage.name}: {e}")
            job.add_flag(f"阶段失败:{stage.name}")
            raise

        job.progress.percent = stage.progress_end

    def _stage_render(self, job: ExportJob, stage: PipelineStage, context: dict[str, Any]) -> None:
        """逐页渲染（严格串行）"""
        pages: list[PageDescriptor] = context["pages"]
        rasters: list[RasterPage] = context["rasters"]
        total = len(pages)
        job.progress.total_pages = total

        for page in pages:
            if page.overflow:
                job.add_flag(f"超高页:{page.index}")
            if page.is_signature_only:
                job.add_flag(f"仅签名页:{page.index}")

            job.progress.current_page = page.index
            job.progress.message = f"渲染第{page.index}/{total}页"
            rasters.append(self.renderer.render(page, context["document"]))
            job.progress.percent = stage.progress_at(page.index, total)

    def _stage_assemble(self, context: dict[str, Any]) -> None:
        document = context["document"]
        context["output"] = self.assembler.assemble(
            context["rasters"],
            page_format=self.config.page_format,
            filename=document.suggested_filename(),
        )

    @staticmethod
    def _parse(document: LetterheadDocument) -> list[ContentBlock]:
        if document.blocks is not None:
            return list(document.blocks)
        return parse_html_blocks(document.content_html)

    @staticmethod
    def _new_job(kind: ExportKind) -> ExportJob:
        return ExportJob(job_id=str(uuid.uuid4()), kind=kind)
