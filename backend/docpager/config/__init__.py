"""
配置层 - 加载运行期配置与品牌规范

职责：
- 加载 documents/runtime.yaml（版面尺寸/页面预算/渲染参数）
- 加载 documents/brand.yaml（页眉页脚品牌信息）
- 提供类型安全的配置访问接口
"""

from .brand_loader import BrandLoader, BrandSpec, load_brand, load_brand_or_default
from .runtime_config import (
    FinanceLayoutConfig,
    LetterheadLayoutConfig,
    PageFormatConfig,
    RenderConfig,
    RuntimeConfig,
    get_config,
    reload_config,
)

__all__ = [
    "BrandLoader",
    "BrandSpec",
    "load_brand",
    "load_brand_or_default",
    "RuntimeConfig",
    "PageFormatConfig",
    "LetterheadLayoutConfig",
    "FinanceLayoutConfig",
    "RenderConfig",
    "get_config",
    "reload_config",
]
