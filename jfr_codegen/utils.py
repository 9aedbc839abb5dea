"""Utility functions for loading the events document.

This module provides functions for loading JSON from files and URLs with
proper error handling, and for turning it into a document model.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests

from .codegen.core.errors import ParseError
from .codegen.core.schema import Document
from .logging_config import get_logger

logger = get_logger(__name__)


def load_json_from_file(file_path: str | Path) -> Any:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Parsed JSON data.

    Raises:
        ParseError: If the file is missing, unreadable or not valid JSON.
    """
    file_path = Path(file_path)
    logger.debug("Attempting to load JSON from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise ParseError(f"File not found: {file_path}")

    try:
        with file_path.open("rb") as f:
            data = json.load(f)
        logger.debug("Loaded JSON from %s", file_path)
        return data
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in file %s: %s", file_path, e)
        raise ParseError(f"Invalid JSON in file {file_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise ParseError(f"Error reading file {file_path}: {e}") from e


def load_json_from_url(url: str, timeout: int = 30) -> Any:
    """Load JSON data from an http(s) URL.

    Args:
        url: URL to fetch JSON from.
        timeout: Request timeout in seconds.

    Returns:
        Parsed JSON data.

    Raises:
        ParseError: If the request fails or the response isn't valid JSON.
    """
    logger.debug("Attempting to load JSON from URL: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        raise ParseError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = json.loads(response.content)
        logger.debug("Loaded JSON from %s", url)
        return data

    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise ParseError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise ParseError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error("HTTP error %s for URL: %s", e.response.status_code, url)
        raise ParseError(f"HTTP error {e.response.status_code} for URL: {url}") from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e)
        raise ParseError(f"Request error for URL {url}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error("Invalid JSON response from URL %s: %s", url, e)
        raise ParseError(f"Invalid JSON response from URL {url}: {e}") from e


def load_json(locator: str, timeout: int = 30) -> Any:
    """Load JSON data from a path, a ``file://`` URL or an http(s) URL.

    Args:
        locator: Where to read the document from.
        timeout: Request timeout in seconds (only used for http(s)).

    Returns:
        Parsed JSON data.

    Raises:
        ParseError: If the locator is unsupported or loading fails.
    """
    scheme = urlparse(locator).scheme.lower()

    if scheme in ("http", "https"):
        return load_json_from_url(locator, timeout)
    if scheme == "file":
        return load_json_from_file(url2pathname(urlparse(locator).path))
    if len(scheme) > 1:
        raise ParseError(f"Unsupported document location: {locator}")
    # no scheme, or a windows drive letter
    return load_json_from_file(locator)


def load_document(locator: str, timeout: int = 30) -> Document:
    """Load and parse the events document.

    Unknown fields anywhere in the document are ignored.

    Args:
        locator: Path or URL of the document.
        timeout: Request timeout in seconds (only used for http(s)).

    Returns:
        Parsed document.

    Raises:
        ParseError: If the document cannot be read or has an invalid shape.
    """
    return Document.from_dict(load_json(locator, timeout))
