"""
运行期配置 - 读取 documents/runtime.yaml

职责：
- 加载版面尺寸/页面预算/栅格倍率/等待时间等运行参数
- 提供环境变量覆盖机制（DOCPAGER_<SECTION>__<FIELD>，优先于YAML取值）
- 类型安全的配置访问
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from reportlab.lib.units import mm


class PageFormatConfig(BaseModel):
    """物理纸张与渲染面尺寸"""

    name: str = "A4"
    width_mm: float = 210.0
    height_mm: float = 297.0

    # 渲染面尺寸（与测量高度同一单位）
    width_px: int = 595
    height_px: int = 842

    @property
    def width_pt(self) -> float:
        return self.width_mm * mm

    @property
    def height_pt(self) -> float:
        return self.height_mm * mm


class LetterheadLayoutConfig(BaseModel):
    """信函版式配置"""

    header_height: float = 100
    continuation_header_height: float = 40
    footer_height: float = 70
    side_margin: float = 48
    content_padding: float = 24

    # 正文排版
    font_size: float = 11
    line_height: float = 1.6
    block_gap: float = 10

    # 动态扣减
    preamble_height: float = 120   # 收件人信息块（仅首页）
    signature_height: float = 100  # 签名块（仅末页）

    # 渲染面尺寸（由RuntimeConfig同步）
    page_width: float = 595
    page_height: float = 842

    @property
    def content_width(self) -> float:
        return self.page_width - self.side_margin * 2

    @property
    def first_page_height(self) -> float:
        """首页正文基准高度"""
        return (
            self.page_height
            - self.header_height
            - self.footer_height
            - self.content_padding * 2
        )

    @property
    def continuation_page_height(self) -> float:
        """续页正文基准高度"""
        return (
            self.page_height
            - self.continuation_header_height
            - self.footer_height
            - self.content_padding * 2
        )


class FinanceLayoutConfig(BaseModel):
    """发票/报价单配置"""

    rows_per_page: int = 8
    tax_rate: float = 16.0
    currency: str = "KES"


class RenderConfig(BaseModel):
    """渲染与栅格化配置"""

    letterhead_scale: float = 2.5
    finance_scale: float = 2.0
    settle_timeout_sec: float = 1.0


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    runtime_spec_path: Path = Path("documents/runtime.yaml")
    brand_path: Path = Path("documents/brand.yaml")

    page_format: PageFormatConfig = Field(default_factory=PageFormatConfig)
    letterhead: LetterheadLayoutConfig = Field(default_factory=LetterheadLayoutConfig)
    finance: FinanceLayoutConfig = Field(default_factory=FinanceLayoutConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "DOCPAGER_",
        "env_nested_delimiter": "__",
        "arbitrary_types_allowed": True,
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # 环境变量优先于YAML传入的初始值，按字段逐项合并
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    def model_post_init(self, __context: Any) -> None:
        self._sync_page_size()

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})

        config = cls(
            runtime_spec_path=path,
            page_format=cls._extract(runtime_opts, "page_format"),
            letterhead=cls._extract(runtime_opts, "letterhead"),
            finance=cls._extract(runtime_opts, "finance"),
            render=cls._extract(runtime_opts, "render"),
            logging=cls._extract(runtime_opts, "logging"),
        )

        config._resolve_paths(base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_paths(self, base_dir: Path) -> None:
        """品牌规范相对路径按配置文件所在目录解析"""
        if not self.brand_path.is_absolute() and not self.brand_path.exists():
            candidate = base_dir / self.brand_path.name
            if candidate.exists():
                self.brand_path = candidate.resolve()

    def _sync_page_size(self) -> None:
        """信函版式的渲染面尺寸与page_format保持一致"""
        self.letterhead.page_width = self.page_format.width_px
        self.letterhead.page_height = self.page_format.height_px


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        default_path = Path("documents/runtime.yaml")
        if not default_path.exists():
            fallback_path = Path("config/runtime.yaml")
            if fallback_path.exists():
                default_path = fallback_path
        _config = RuntimeConfig.from_yaml(default_path)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or "documents/runtime.yaml"
    _config = RuntimeConfig.from_yaml(path)
    return _config
