import argparse
import json
import logging
import sys
from pathlib import Path

if __package__ in {None, ""}:
    project_root = Path(__file__).resolve().parent.parent
    sys.path.insert(0, str(project_root))

from pagegist.services.document import SoupDocument
from pagegist.services.exceptions import ExtractionFailure
from pagegist.services.extraction import extract
from pagegist.utils.logging_config import setup_logging


def extract_file(path, url: str, last_modified: str | None = None) -> dict:
    """Run extraction against a saved, rendered HTML page."""
    html = Path(path).read_text(encoding="utf-8")
    document = SoupDocument.from_html(html, url, last_modified)
    return extract(document).to_dict()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract article data from a saved HTML page."
    )
    parser.add_argument("path", help="Path to the rendered HTML file")
    parser.add_argument("url", help="URL the page was loaded from")
    parser.add_argument("--last-modified", default=None)
    args = parser.parse_args(argv)

    # stdout carries the JSON result; logs go to stderr.
    setup_logging(force=True, stream=sys.stderr)

    try:
        result = extract_file(args.path, args.url, args.last_modified)
    except (OSError, ExtractionFailure) as exc:
        logging.error(f"Extraction failed for {args.path}: {exc}")
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
