"""
正文HTML解析单元测试
"""

from docpager.layout import parse_html_blocks
from docpager.models import BlockKind


class TestParseHtmlBlocks:
    """编辑器HTML → 内容块"""

    def test_parse_top_level_blocks(self):
        """测试顶层元素逐个成块且保持顺序"""
        blocks = parse_html_blocks(
            "<p>Hello <strong>world</strong></p><h2>Title</h2><ul><li>a</li><li>b</li></ul>"
        )
        assert [b.kind for b in blocks] == [BlockKind.PARAGRAPH, BlockKind.HEADING, BlockKind.LIST]
        assert blocks[0].markup == "Hello <b>world</b>"
        assert blocks[1].level == 2
        assert blocks[2].items == ["a", "b"]
        assert not blocks[2].ordered

    def test_parse_inline_markup(self):
        """测试行内格式映射"""
        blocks = parse_html_blocks("<p><em>x</em> <u>y</u> <s>z</s> H<sub>2</sub>O</p>")
        assert blocks[0].markup == "<i>x</i> <u>y</u> <strike>z</strike> H<sub>2</sub>O"

    def test_parse_escapes_text(self):
        blocks = parse_html_blocks("<p>A &amp; B &lt;C&gt;</p>")
        assert blocks[0].markup == "A &amp; B &lt;C&gt;"

    def test_parse_list_items(self):
        """测试有序列表与Quill无序列表"""
        ordered = parse_html_blocks('<ol><li data-list="ordered">one</li><li>two</li></ol>')
        bullet = parse_html_blocks('<ol><li data-list="bullet">one</li><li data-list="bullet">two</li></ol>')
        assert ordered[0].ordered
        assert not bullet[0].ordered
        assert bullet[0].items == ["one", "two"]

    def test_parse_blockquote(self):
        blocks = parse_html_blocks("<blockquote>quoted</blockquote>")
        assert blocks[0].kind == BlockKind.BLOCKQUOTE
        assert blocks[0].markup == "quoted"

    def test_parse_empty_editor(self):
        """测试空编辑器内容返回空列表"""
        assert parse_html_blocks("") == []
        assert parse_html_blocks("<p><br></p>") == []
        assert parse_html_blocks("<p><br></p><p> </p>") == []

    def test_blank_line_kept_between_paragraphs(self):
        """测试正文中的空行保留为空段落"""
        blocks = parse_html_blocks("<p>a</p><p><br></p><p>b</p>")
        assert len(blocks) == 3
        assert blocks[1].is_blank

    def test_line_breaks(self):
        blocks = parse_html_blocks("<p>line 1<br>line 2<br></p>")
        assert blocks[0].markup == "line 1<br/>line 2"

    def test_loose_text(self):
        """测试顶层游离文本成段"""
        blocks = parse_html_blocks("intro<p>body</p>outro")
        assert [b.markup for b in blocks] == ["intro", "body", "outro"]

    def test_container_children_split(self):
        """测试容器内标题与段落分别成块"""
        blocks = parse_html_blocks("<div><h1>Title</h1><p>Body text</p></div>")
        assert [b.kind for b in blocks] == [BlockKind.HEADING, BlockKind.PARAGRAPH]
        assert [b.markup for b in blocks] == ["Title", "Body text"]
        assert blocks[0].level == 1

    def test_container_inline_runs(self):
        """测试容器内块级元素前后的行内内容各自成段"""
        blocks = parse_html_blocks("<section>lead <b>x</b><p>y</p>tail</section>")
        assert [b.markup for b in blocks] == ["lead <b>x</b>", "y", "tail"]

    def test_nested_containers(self):
        blocks = parse_html_blocks("<div><div><p>a</p><ul><li>b</li></ul></div><p>c</p></div>")
        assert [b.kind for b in blocks] == [BlockKind.PARAGRAPH, BlockKind.LIST, BlockKind.PARAGRAPH]
        assert blocks[1].items == ["b"]

    def test_plain_container_single_block(self):
        """测试只含行内内容的容器仍为一个段落"""
        blocks = parse_html_blocks("<div>plain <em>text</em></div>")
        assert [b.markup for b in blocks] == ["plain <i>text</i>"]

    def test_block_children_of_blockquote_break(self):
        """测试引用内多段以换行隔开"""
        blocks = parse_html_blocks("<blockquote><p>a</p><p>b</p></blockquote>")
        assert blocks[0].markup == "a<br/>b"
