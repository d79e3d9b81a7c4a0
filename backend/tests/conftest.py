"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(budget, measured):
        pages = PageFlowPacker(budget).pack(measured([100, 200]))
"""

from __future__ import annotations

import io
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import pytest
from PIL import Image, ImageDraw

from docpager.config import BrandSpec, LetterheadLayoutConfig, RuntimeConfig, load_brand
from docpager.layout import PageBudgetModel
from docpager.models import (
    BlockKind,
    ClientInfo,
    ContentBlock,
    DocumentType,
    FinanceDocument,
    LetterheadDocument,
    LineItem,
    MeasuredBlock,
    RecipientInfo,
    SenderInfo,
    SignatureAsset,
)


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture(scope="session")
def brand() -> BrandSpec:
    """加载品牌规范（会话级别缓存）"""
    # 尝试加载真实规范，失败则使用mock
    try:
        return load_brand("documents/brand.yaml")
    except FileNotFoundError:
        return _create_mock_brand()


@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """运行期配置（默认值）"""
    return RuntimeConfig()


@pytest.fixture
def layout(runtime_config: RuntimeConfig) -> LetterheadLayoutConfig:
    return runtime_config.letterhead


def _create_mock_brand() -> BrandSpec:
    """创建mock品牌规范"""
    return BrandSpec(
        company_name="Test Company",
        tagline="Testing & Verification",
        website="www.test.example",
        email="info@test.example",
        address_lines=["1 Test Road", "Nairobi"],
    )


# ============================================================================
# 分页 Fixtures
# ============================================================================

@pytest.fixture
def budget() -> PageBudgetModel:
    """首页600/续页800，签名100，无前置块"""
    return PageBudgetModel(
        first_page_height=600,
        continuation_page_height=800,
        preamble_height=120,
        signature_height=100,
    )


@pytest.fixture
def bare_budget() -> PageBudgetModel:
    """不预留签名的预算（直接对应示例1/2）"""
    return PageBudgetModel(first_page_height=600, continuation_page_height=800)


@pytest.fixture
def measured() -> Callable[[list[float]], list[MeasuredBlock]]:
    """按合成高度构造已测量内容块（无需真实渲染环境）"""

    def _make(heights: list[float]) -> list[MeasuredBlock]:
        return [
            MeasuredBlock(
                block=ContentBlock(kind=BlockKind.PARAGRAPH, markup=f"block {i}"),
                height=h,
                width=499,
            )
            for i, h in enumerate(heights, start=1)
        ]

    return _make


# ============================================================================
# 文档 Fixtures
# ============================================================================

@pytest.fixture(scope="session")
def signature_png() -> bytes:
    """透明底签名图"""
    image = Image.new("RGBA", (160, 48), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    draw.line([(8, 36), (60, 10), (100, 38), (150, 12)], fill=(15, 23, 42, 255), width=3)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def letterhead_document(signature_png: bytes) -> LetterheadDocument:
    paragraphs = "".join(
        f"<p>Paragraph {i}: we are pleased to confirm the <strong>scope</strong> "
        f"and schedule agreed during our meeting. Deliverables follow the plan.</p>"
        for i in range(1, 6)
    )
    return LetterheadDocument(
        content_html=f"<h2>Project Update</h2>{paragraphs}<ul><li>Design</li><li>Build</li></ul>",
        recipient=RecipientInfo(
            name="Jane Wanjiru",
            company="Acme Ltd",
            address="P.O. Box 100",
            city="Nairobi",
            date="18 October 2026",
            subject="Project update",
        ),
        sender=SenderInfo(name="John Otieno", title="Director"),
        signature=SignatureAsset(image=signature_png),
    )


@pytest.fixture
def finance_document() -> FinanceDocument:
    """17行明细的发票"""
    return FinanceDocument(
        doc_type=DocumentType.INVOICE,
        document_number="INV-001",
        issue_date="2026-10-18",
        due_date="2026-11-18",
        client=ClientInfo(name="Acme Ltd", city="Nairobi"),
        items=[
            LineItem(description=f"Service item {i}", quantity=i, unit_price=1000)
            for i in range(1, 18)
        ],
        notes="Payment within 30 days.",
    )


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
