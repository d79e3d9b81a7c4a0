"""
PDF页数统计（pdfplumber回读），用于核对导出结果页数。
"""

from __future__ import annotations

import argparse
from pathlib import Path

from docpager.render import count_pdf_pages


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--pdf", required=True)
    args = ap.parse_args()
    n = count_pdf_pages(Path(args.pdf).read_bytes())
    print(n)


if __name__ == "__main__":
    main()
