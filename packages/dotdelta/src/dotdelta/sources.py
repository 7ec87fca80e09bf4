"""Load DOT text (or canonical JSON) from a path, stdin or an HTTP URL."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

import httpx

from dotdelta.canonical import CanonicalGraph, parse_graph
from dotdelta.config import Settings
from dotdelta.errors import SourceError
from dotdelta.interchange import loads_graph

logger = logging.getLogger(__name__)

STDIN = "-"


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def load_source(
    location: str,
    *,
    settings: Settings | None = None,
    http_client: httpx.Client | None = None,
    stdin: TextIO | None = None,
) -> str:
    """Return the text found at ``location``.

    A caller-supplied ``http_client`` is used as is and left open.
    """
    if location == STDIN:
        return (stdin or sys.stdin).read()
    if is_url(location):
        return _fetch(location, settings or Settings(), http_client)
    return _read_file(location)


def load_graph(
    location: str,
    *,
    settings: Settings | None = None,
    http_client: httpx.Client | None = None,
    stdin: TextIO | None = None,
) -> CanonicalGraph:
    text = load_source(location, settings=settings, http_client=http_client, stdin=stdin)
    return graph_parser_for(location)(text)


def graph_parser_for(location: str) -> Callable[[str], CanonicalGraph]:
    """Canonical JSON reader for ``.json`` locations, DOT parser otherwise."""
    if _path_part(location).endswith(".json"):
        return loads_graph
    return parse_graph


def _fetch(url: str, settings: Settings, http_client: httpx.Client | None) -> str:
    logger.debug("fetching %s", url)
    client = http_client or httpx.Client(timeout=settings.http_timeout, follow_redirects=True)
    try:
        response = client.get(url, headers={"Cache-Control": "no-store"})
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SourceError(
            f"failed to fetch {url}: HTTP {exc.response.status_code}", location=url, cause=exc
        ) from exc
    except httpx.HTTPError as exc:
        raise SourceError(f"failed to fetch {url}: {exc}", location=url, cause=exc) from exc
    finally:
        if http_client is None:
            client.close()
    return response.text


def _read_file(location: str) -> str:
    try:
        return Path(location).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(f"failed to read {location}: {exc}", location=location, cause=exc) from exc


def _path_part(location: str) -> str:
    if is_url(location):
        return httpx.URL(location).path
    return location
