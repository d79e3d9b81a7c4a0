"""
信函分页模拟：读取编辑器HTML，测量并装箱，打印每页的块数与占用高度。
可选 --out 直接导出PDF，用于对照预览页数与实际导出页数。

示例：
  python tools/simulate_letterhead_pagination.py --html samples/letter.html
  python tools/simulate_letterhead_pagination.py --html samples/letter.html --recipient "Jane Doe" --out out/
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from docpager.config import get_config, reload_config
from docpager.models import LetterheadDocument, RecipientInfo
from docpager.pipeline import ExportExecutor


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--html", required=True, help="编辑器导出的HTML文件")
    ap.add_argument("--recipient", default="", help="收件人姓名（非空时首页带前置块）")
    ap.add_argument("--subject", default="")
    ap.add_argument("--config", default=None, help="runtime.yaml 路径")
    ap.add_argument("--out", default=None, help="导出PDF的目录或文件路径")
    args = ap.parse_args()

    config = reload_config(args.config) if args.config else get_config()
    logging.basicConfig(
        level=config.logging.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    html = Path(args.html).read_text(encoding="utf-8")
    recipient = RecipientInfo(name=args.recipient, subject=args.subject or None) if args.recipient else None
    document = LetterheadDocument(content_html=html, recipient=recipient)

    executor = ExportExecutor(config)
    pages = executor.paginate_letterhead(document)
    print(f"pages={len(pages)} preamble={document.has_preamble}")
    for page in pages:
        marks = []
        if page.is_terminal:
            marks.append("terminal")
        if page.overflow:
            marks.append("overflow")
        if page.is_signature_only:
            marks.append("signature-only")
        print(
            f"  #{page.index} {page.role.value:<12} blocks={len(page.blocks):<3} "
            f"height={page.content_height:7.1f} {' '.join(marks)}"
        )

    if args.out:
        output = executor.export_letterhead(document)
        path = output.save(args.out)
        print(f"exported {path} ({output.page_count} pages)")


if __name__ == "__main__":
    main()
