"""
财务单据模型 - 发票/报价单

明细行高度统一，按定长行数分页；合计只在末页出现
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from ..config import get_config
from .letterhead import SignatureAsset


class DocumentType(str, Enum):
    """单据类型"""
    INVOICE = "invoice"
    QUOTATION = "quotation"


class LineItem(BaseModel):
    """明细行"""
    description: str = ""
    quantity: float = 0.0
    unit_price: float = 0.0
    unit: str = "Unit"

    @field_validator("quantity", "unit_price", mode="before")
    @classmethod
    def _parse_number(cls, v):
        """表单输入可能为空串或非数字，按0处理"""
        if v is None or v == "":
            return 0.0
        try:
            return float(v)
        except (TypeError, ValueError):
            return 0.0

    @property
    def total(self) -> float:
        return self.quantity * self.unit_price


class ClientInfo(BaseModel):
    """客户信息"""
    name: str = ""
    address: str | None = None
    city: str | None = None
    email: str | None = None


class FinanceDocument(BaseModel):
    """发票/报价单"""
    doc_type: DocumentType = DocumentType.INVOICE
    document_number: str | None = None
    issue_date: str | None = None
    due_date: str | None = Field(None, description="发票到期日/报价有效期")

    client: ClientInfo = Field(default_factory=ClientInfo)
    items: list[LineItem] = Field(default_factory=list)

    # 未显式给出时取 runtime.yaml 的 finance 段
    tax_rate: float = Field(default_factory=lambda: get_config().finance.tax_rate, description="税率(%)")
    currency: str = Field(default_factory=lambda: get_config().finance.currency)

    notes: str | None = None
    terms: str | None = None
    bank_name: str | None = None
    bank_account: str | None = None

    company_name: str | None = None
    company_address: str | None = None
    company_tax_id: str | None = None

    signature: SignatureAsset | None = None

    @property
    def subtotal(self) -> float:
        return sum(item.total for item in self.items)

    @property
    def tax_amount(self) -> float:
        return self.subtotal * (self.tax_rate / 100)

    @property
    def total(self) -> float:
        return self.subtotal + self.tax_amount

    @property
    def title(self) -> str:
        return "INVOICE" if self.doc_type == DocumentType.INVOICE else "QUOTATION"

    def suggested_filename(self) -> str:
        return f"{self.document_number or 'Document'}.pdf"
