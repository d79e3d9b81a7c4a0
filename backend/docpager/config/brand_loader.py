"""
品牌规范加载器 - 读取 documents/brand.yaml

职责：
- 解析YAML并提供类型安全访问（公司名/联系方式/强调色/页脚）
- 缓存加载结果（避免重复解析）

使用方式：
    brand = BrandLoader.load("documents/brand.yaml")
    brand.company_name
    brand.footer_line()
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field


class BankDetails(BaseModel):
    """收款账户（发票末页）"""
    bank_name: str | None = None
    account_name: str | None = None
    account_no: str | None = None


class BrandSpec(BaseModel):
    """品牌规范（brand.yaml 的结构化表示）"""
    company_name: str = "Your Company"
    tagline: str = ""
    website: str = ""
    email: str = ""
    phone: str = ""
    address_lines: list[str] = Field(default_factory=list)
    tax_id: str | None = None

    # 视觉
    accent_color: str = "#F97316"
    text_color: str = "#1E293B"
    muted_color: str = "#64748B"

    # 页脚
    footer_note: str = ""

    bank: BankDetails = Field(default_factory=BankDetails)

    # === 便捷访问方法 ===

    def footer_line(self) -> str:
        """页脚联系方式（空项跳过）"""
        parts = [p for p in (self.website, self.email, self.phone) if p]
        return "  |  ".join(parts)

    def address_line(self) -> str:
        return ", ".join(self.address_lines)


class BrandLoader:
    """品牌规范加载器（缓存）"""

    @classmethod
    @lru_cache(maxsize=4)
    def load(cls, brand_path: str | Path = "documents/brand.yaml") -> BrandSpec:
        """加载并缓存品牌规范"""
        path = Path(brand_path)
        if not path.exists():
            raise FileNotFoundError(f"品牌规范文件不存在: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return BrandSpec(**data.get("brand", data))

    @classmethod
    def reload(cls, brand_path: str | Path = "documents/brand.yaml") -> BrandSpec:
        """强制重新加载（清除缓存）"""
        cls.load.cache_clear()
        return cls.load(brand_path)


def load_brand(brand_path: str | Path = "documents/brand.yaml") -> BrandSpec:
    """加载品牌规范"""
    return BrandLoader.load(brand_path)


def load_brand_or_default(brand_path: str | Path = "documents/brand.yaml") -> BrandSpec:
    """加载品牌规范，文件缺失时使用默认值"""
    try:
        return BrandLoader.load(brand_path)
    except FileNotFoundError:
        return BrandSpec()
