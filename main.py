"""CLI entry point for reading the week and weekday menus from a lunch page."""

import json
import logging
import sys
from pathlib import Path

from src.menu_html import fetch_menu_page, parse_menu_html

logger = logging.getLogger(__name__)

MIN_ARGV_LENGTH = 2


def load_menu_source(source: str) -> str | None:
    """Read HTML from a URL or a local file."""
    if source.startswith(("http://", "https://")):
        return fetch_menu_page(source)

    path = Path(source)
    if not path.exists():
        error_msg = f"File not found: {path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    with open(path, encoding="utf-8") as f:
        return f.read()


def main():
    """Main CLI function."""
    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.FileHandler("lunch_menu.log", encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )

    if len(sys.argv) < MIN_ARGV_LENGTH:
        logger.error("Usage: python main.py <html_file|url> [--output <output_file>]")
        sys.exit(1)

    source = sys.argv[1]
    output_file = None

    # Check for --output flag
    if len(sys.argv) >= 4 and sys.argv[2] == "--output":
        output_file = sys.argv[3]

    html = load_menu_source(source)
    if html is None:
        logger.error("Could not load menu page: %s", source)
        sys.exit(1)

    result = parse_menu_html(html).to_dict()

    # Output results
    if output_file:
        Path(output_file).parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(result, f, indent=2, ensure_ascii=False)
        logger.info("Wrote week %d menu to %s", result["week"], output_file)
    else:
        logger.info(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
