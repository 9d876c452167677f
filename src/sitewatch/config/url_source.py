"""
Loading of URL lists from files.

A URL file holds one URL per line. Blank lines and lines starting with '#'
are ignored; surrounding whitespace is stripped.
"""

import logging
from typing import List

from sitewatch.errors import ConfigurationError

# Module logger
logger = logging.getLogger(__name__)


def parse_url_lines(text: str) -> List[str]:
    """
    Extracts the URLs from the content of a URL file.

    Args:
        text: The file content.

    Returns:
        List[str]: The URLs in file order.
    """
    urls: List[str] = []
    for line in text.splitlines():
        url = line.strip()
        if url and not url.startswith("#"):
            urls.append(url)
    return urls


def load_urls_from_file(path: str) -> List[str]:
    """
    Reads the URLs listed in a file.

    Args:
        path: Path to the URL file.

    Returns:
        List[str]: The URLs in file order.

    Raises:
        ConfigurationError: If the file cannot be read.
    """
    try:
        with open(path, encoding="utf-8") as f:
            urls = parse_url_lines(f.read())
    except (OSError, UnicodeDecodeError) as err:
        raise ConfigurationError(f"failed to read {path}: {err}") from err

    logger.debug(f"Loaded {len(urls)} URLs from {path}.")
    return urls
