"""
导出任务模型 - 单次导出的状态与进度
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ExportStatus(str, Enum):
    """任务状态枚举"""
    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ExportKind(str, Enum):
    """导出类型"""
    LETTERHEAD = "letterhead"   # 富文本流式分页
    INVOICE = "invoice"         # 明细定长分页
    QUOTATION = "quotation"


class ExportProgress(BaseModel):
    """任务进度"""
    stage: str = "INIT"
    percent: int = 0
    current_page: int | None = None
    total_pages: int | None = None
    message: str = ""


class ExportJob(BaseModel):
    """导出任务"""
    job_id: str = Field(..., description="UUID")
    kind: ExportKind

    status: ExportStatus = ExportStatus.QUEUED
    progress: ExportProgress = Field(default_factory=ExportProgress)

    # 结果
    page_count: int | None = None
    filename: str | None = None
    flags: list[str] = Field(default_factory=list, description="告警标记")
    errors: list[str] = Field(default_factory=list, description="错误信息")

    # 时间戳
    created_at: datetime = Field(default_factory=datetime.now)
    started_at: datetime | None = None
    finished_at: datetime | None = None

    def mark_running(self, stage: str = "PARSE_CONTENT") -> None:
        """标记为运行中"""
        self.status = ExportStatus.RUNNING
        self.started_at = datetime.now()
        self.progress.stage = stage

    def mark_succeeded(self, page_count: int) -> None:
        """标记为成功"""
        self.status = ExportStatus.SUCCEEDED
        self.finished_at = datetime.now()
        self.page_count = page_count
        self.progress.percent = 100

    def mark_failed(self, error: str) -> None:
        """标记为失败"""
        self.status = ExportStatus.FAILED
        self.finished_at = datetime.now()
        self.errors.append(error)

    def add_flag(self, flag: str) -> None:
        """添加告警标记（不中断）"""
        if flag not in self.flags:
            self.flags.append(flag)
