"""
配置加载单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_config.py -v
"""

import pytest

from docpager.config import BrandLoader, BrandSpec, RuntimeConfig, load_brand_or_default


class TestRuntimeConfig:
    """运行期配置测试"""

    def test_default_config(self, runtime_config: RuntimeConfig):
        """测试默认配置"""
        assert runtime_config.page_format.width_px == 595
        assert runtime_config.page_format.height_px == 842
        assert runtime_config.finance.rows_per_page == 8
        assert runtime_config.render.letterhead_scale == 2.5
        assert runtime_config.render.finance_scale == 2.0

    def test_letterhead_budgets(self, runtime_config: RuntimeConfig):
        """测试首页/续页正文高度与版心宽度"""
        layout = runtime_config.letterhead
        assert layout.first_page_height == 624
        assert layout.continuation_page_height == 684
        assert layout.content_width == 499

    def test_page_format_points(self, runtime_config: RuntimeConfig):
        """测试A4物理尺寸换算为pt"""
        assert runtime_config.page_format.width_pt == pytest.approx(595.27, abs=0.01)
        assert runtime_config.page_format.height_pt == pytest.approx(841.89, abs=0.01)

    def test_from_yaml(self):
        """测试从YAML加载（{default: x} 与标量两种写法）"""
        config = RuntimeConfig.from_yaml("documents/runtime.yaml")
        assert config.letterhead.header_height == 100
        assert config.letterhead.footer_height == 70
        assert config.finance.currency == "KES"
        assert config.render.settle_timeout_sec == 1.0

    def test_from_yaml_missing_file(self, temp_dir):
        """测试文件缺失时使用默认值"""
        config = RuntimeConfig.from_yaml(temp_dir / "missing.yaml")
        assert config.letterhead.signature_height == 100

    def test_from_yaml_syncs_page_size(self, temp_dir):
        """测试渲染面尺寸同步到信函版式"""
        path = temp_dir / "runtime.yaml"
        path.write_text(
            "runtime_options:\n  page_format:\n    width_px: 600\n    height_px: {default: 900}\n",
            encoding="utf-8",
        )
        config = RuntimeConfig.from_yaml(path)
        assert config.letterhead.page_width == 600
        assert config.letterhead.page_height == 900

    def test_env_override(self, monkeypatch):
        """测试环境变量覆盖"""
        monkeypatch.setenv("DOCPAGER_FINANCE__ROWS_PER_PAGE", "10")
        config = RuntimeConfig()
        assert config.finance.rows_per_page == 10

    def test_env_override_wins_over_yaml(self, monkeypatch):
        """测试环境变量覆盖YAML取值，同段其余字段仍取YAML"""
        monkeypatch.setenv("DOCPAGER_FINANCE__TAX_RATE", "5")
        monkeypatch.setenv("DOCPAGER_LETTERHEAD__SIGNATURE_HEIGHT", "80")
        config = RuntimeConfig.from_yaml("documents/runtime.yaml")
        assert config.finance.tax_rate == 5
        assert config.finance.currency == "KES"
        assert config.finance.rows_per_page == 8
        assert config.letterhead.signature_height == 80
        assert config.letterhead.header_height == 100


class TestBrandLoader:
    """品牌规范加载测试"""

    def test_load_brand(self, brand: BrandSpec):
        """测试加载品牌规范"""
        assert brand.company_name
        assert brand.accent_color.startswith("#")

    def test_footer_line_skips_empty(self):
        """测试页脚空项跳过"""
        spec = BrandSpec(website="www.a.example", phone="123")
        assert spec.footer_line() == "www.a.example  |  123"

    def test_load_or_default(self, temp_dir):
        """测试文件缺失时返回默认品牌"""
        spec = load_brand_or_default(temp_dir / "missing.yaml")
        assert spec.company_name == "Your Company"

    def test_load_missing_raises(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            BrandLoader.load(temp_dir / "missing.yaml")

    def test_load_without_brand_section(self, temp_dir):
        """测试YAML顶层直接为品牌字段"""
        path = temp_dir / "brand.yaml"
        path.write_text("company_name: Flat Co\naddress_lines: [A, B]\n", encoding="utf-8")
        spec = BrandLoader.reload(path)
        assert spec.company_name == "Flat Co"
        assert spec.address_line() == "A, B"
