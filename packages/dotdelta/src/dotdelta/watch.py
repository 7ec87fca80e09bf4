from __future__ import annotations

import logging
import time
from collections.abc import Callable

from dotdelta.canonical import CanonicalGraph, parse_graph
from dotdelta.delta import GraphDelta, compute_delta
from dotdelta.errors import DotDeltaError

logger = logging.getLogger(__name__)


class GraphWatcher:
    """Poll a source and report a delta whenever its text changes.

    ``parse`` turns the loaded text into a graph (DOT by default). The first
    successful poll is diffed against an empty graph.
    """

    def __init__(
        self,
        location: str,
        *,
        loader: Callable[[str], str],
        interval: float,
        parse: Callable[[str], CanonicalGraph] = parse_graph,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.location = location
        self.interval = interval
        self._loader = loader
        self._parse = parse
        self._sleep = sleep
        self._last_text: str | None = None
        self.graph = CanonicalGraph()

    def poll(self) -> GraphDelta | None:
        text = self._loader(self.location)
        if text == self._last_text:
            return None

        graph = self._parse(text)
        delta = compute_delta(self.graph, graph)
        self._last_text = text
        self.graph = graph
        return delta

    def run(
        self,
        on_delta: Callable[[GraphDelta], None],
        max_polls: int | None = None,
    ) -> None:
        polls = 0
        while max_polls is None or polls < max_polls:
            try:
                delta = self.poll()
            except DotDeltaError as exc:
                logger.error("failed to load or parse %s: %s", self.location, exc)
            else:
                if delta is not None:
                    logger.info("%s changed", self.location)
                    on_delta(delta)
            polls += 1
            if max_polls is None or polls < max_polls:
                self._sleep(self.interval)
