"""Offline scanning of saved or fetched HTML (no layout, no scripts)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

import requests
from bs4 import BeautifulSoup


logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_TIMEOUT = 15


def fetch_html(url: str, *, timeout: int = DEFAULT_TIMEOUT) -> str:
    """Downloads a page; raises ``requests.RequestException`` on failure."""

    response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
    response.raise_for_status()
    return response.text


def page_title(soup: BeautifulSoup) -> str:
    if soup.title is None:
        return ""
    return " ".join(soup.title.get_text(" ").split())


def load_soup(source: str) -> Tuple[BeautifulSoup, str]:
    """Parses a local file path or an http(s) URL; returns the soup and its base URL."""

    if source.startswith(("http://", "https://")):
        logger.debug("Fetching %s for a static scan", source)
        return BeautifulSoup(fetch_html(source), "html.parser"), source

    path = Path(source)
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser"), path.resolve().as_uri()
