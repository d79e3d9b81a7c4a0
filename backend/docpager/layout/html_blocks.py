"""
正文HTML解析 - 将编辑器HTML拆分为有序内容块

职责：
1. 每个顶层元素对应一个内容块（段落/标题/列表/引用）；
   div/section/article 内含块级子元素时逐个展开
2. 行内格式映射到渲染器支持的标记子集（b/i/u/strike/super/sub/br）
3. 文本转义，其余行内标签只保留文字

依赖：
- lxml: HTML片段解析

测试要点：
- test_parse_top_level_blocks: 顶层元素逐个成块
- test_container_children_split: 容器内标题与段落分别成块
- test_parse_inline_markup: strong/em映射
- test_parse_list_items: 列表项
- test_parse_empty_editor: 空编辑器内容返回空列表
"""

from __future__ import annotations

import re
from xml.sax.saxutils import escape

from lxml import etree
from lxml import html as lxml_html

from ..models import BlockKind, ContentBlock

_INLINE_TAGS = {
    "b": "b",
    "strong": "b",
    "i": "i",
    "em": "i",
    "u": "u",
    "s": "strike",
    "strike": "strike",
    "del": "strike",
    "sup": "super",
    "sub": "sub",
}

_HEADING_RE = re.compile(r"^h([1-6])$")
_TRAILING_BR_RE = re.compile(r"(\s*<br/>\s*)+$")

# 容器内出现这些子元素时按块展开；段内出现时以换行隔开
_BLOCK_TAGS = {"p", "div", "section", "article", "blockquote", "ul", "ol", "hr", "pre"}
_CONTAINER_TAGS = {"div", "section", "article"}


def parse_html_blocks(content_html: str) -> list[ContentBlock]:
    """解析正文HTML为内容块列表（全空内容返回[]）"""
    if not content_html or not content_html.strip():
        return []

    fragments = lxml_html.fragments_fromstring(content_html)

    blocks: list[ContentBlock] = []
    for fragment in fragments:
        # 顶层游离文本
        if isinstance(fragment, str):
            if fragment.strip():
                blocks.append(_text_block(fragment))
            continue

        if not isinstance(fragment.tag, str):
            # 注释/处理指令
            continue

        blocks.extend(_element_blocks(fragment))

        if fragment.tail and fragment.tail.strip():
            blocks.append(_text_block(fragment.tail))

    if all(block.is_blank for block in blocks):
        return []
    return blocks


def _text_block(text: str) -> ContentBlock:
    return ContentBlock(
        kind=BlockKind.PARAGRAPH,
        markup=escape(text.strip()),
        html=escape(text.strip()),
    )


def _element_blocks(el) -> list[ContentBlock]:
    """顶层元素 → 内容块；容器含块级子元素时逐个展开"""
    if el.tag.lower() not in _CONTAINER_TAGS or not any(_is_block(child) for child in el):
        return [_element_block(el)]

    blocks: list[ContentBlock] = []
    pending: list[str] = [escape(el.text)] if el.text else []
    for child in el:
        if _is_block(child):
            _flush_inline(pending, blocks)
            blocks.extend(_element_blocks(child))
        elif isinstance(child.tag, str):
            pending.append(_child_markup(child))
        if child.tail:
            pending.append(escape(child.tail))
    _flush_inline(pending, blocks)
    return blocks


def _flush_inline(pending: list[str], blocks: list[ContentBlock]) -> None:
    """块级元素之间的行内内容合成一个段落"""
    markup = _clean("".join(pending))
    pending.clear()
    if markup:
        blocks.append(ContentBlock(kind=BlockKind.PARAGRAPH, markup=markup, html=markup))


def _is_block(el) -> bool:
    if not isinstance(el.tag, str):
        return False
    tag = el.tag.lower()
    return tag in _BLOCK_TAGS or bool(_HEADING_RE.match(tag))


def _element_block(el) -> ContentBlock:
    """单个顶层元素 → 内容块"""
    tag = el.tag.lower()
    source = etree.tostring(el, encoding="unicode", method="html", with_tail=False)

    heading = _HEADING_RE.match(tag)
    if heading:
        return ContentBlock(
            kind=BlockKind.HEADING,
            markup=_clean(_inline_markup(el)),
            level=int(heading.group(1)),
            html=source,
        )

    if tag in ("ul", "ol"):
        items = [li for li in el if isinstance(li.tag, str) and li.tag.lower() == "li"]
        # Quill 2 用 <ol><li data-list="bullet"> 表示无序列表
        ordered = tag == "ol" and not all(li.get("data-list") == "bullet" for li in items)
        return ContentBlock(
            kind=BlockKind.LIST,
            items=[_clean(_inline_markup(li)) for li in items],
            ordered=ordered,
            html=source,
        )

    if tag == "blockquote":
        return ContentBlock(
            kind=BlockKind.BLOCKQUOTE,
            markup=_clean(_inline_markup(el)),
            html=source,
        )

    if tag == "hr":
        return ContentBlock(kind=BlockKind.PARAGRAPH, markup="", html=source)

    markup = _inline_markup(el)
    if tag in _INLINE_TAGS and markup:
        mapped = _INLINE_TAGS[tag]
        markup = f"<{mapped}>{markup}</{mapped}>"
    return ContentBlock(kind=BlockKind.PARAGRAPH, markup=_clean(markup), html=source)


def _inline_markup(el) -> str:
    """递归提取行内标记"""
    parts: list[str] = []
    if el.text:
        parts.append(escape(el.text))

    for child in el:
        if isinstance(child.tag, str):
            # 列表项自带换行前缀
            if _is_block(child) and child.tag.lower() not in ("ul", "ol") and "".join(parts).strip():
                parts.append("<br/>")
            parts.append(_child_markup(child))
        if child.tail:
            parts.append(escape(child.tail))

    return "".join(parts)


def _child_markup(child) -> str:
    tag = child.tag.lower()
    if tag == "br":
        return "<br/>"

    inner = _inline_markup(child)
    mapped = _INLINE_TAGS.get(tag)
    if mapped and inner.strip():
        return f"<{mapped}>{inner}</{mapped}>"
    if tag == "li":
        # 嵌套列表压平为换行
        return f"<br/>{inner}"
    return inner


def _clean(markup: str) -> str:
    """去掉尾部换行；只有换行的段落视为空行"""
    markup = _TRAILING_BR_RE.sub("", markup)
    if not markup.replace("<br/>", "").strip():
        return ""
    return markup.strip()
