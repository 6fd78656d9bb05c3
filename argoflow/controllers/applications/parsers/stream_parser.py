"""Stream parser - decodes line-framed application watch events.

The stream body is a sequence of text chunks. Events are carried on lines
that start with ``data:`` followed by a JSON document shaped like
``{"result": {"type": "ADDED"|"MODIFIED"|"DELETED", "application": {...}}}``.
Anything else (comments, keep-alives, broken JSON, payloads without an
application name) is dropped without interrupting the stream.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from argoflow.constants.enums import StreamEventType
from argoflow.constants.values import STREAM_DATA_PREFIX
from argoflow.controllers.applications.parsers.application_parser import (
    ApplicationParseError,
    ApplicationParser,
)
from argoflow.models.core.application_info import ApplicationInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreamEvent:
    """A decoded watch event."""

    type: StreamEventType
    application: ApplicationInfo

    @property
    def is_delete(self) -> bool:
        return self.type == StreamEventType.DELETED


def decode_frame(line: str, parser: ApplicationParser) -> StreamEvent | None:
    """Decode one complete line into an event, or None when it is not one."""
    text = line.strip()
    if not text.startswith(STREAM_DATA_PREFIX):
        return None
    body = text[len(STREAM_DATA_PREFIX):].strip()

    try:
        payload: Any = json.loads(body)
    except json.JSONDecodeError:
        logger.debug("Dropping stream frame with malformed JSON")
        return None

    result = payload.get("result") if isinstance(payload, dict) else None
    if not isinstance(result, dict):
        logger.debug("Dropping stream frame without a result object")
        return None

    try:
        event_type = StreamEventType(result.get("type"))
    except (ValueError, TypeError):
        logger.debug("Dropping stream frame with event type %r", result.get("type"))
        return None

    try:
        application = parser.parse_application(result.get("application"))
    except ApplicationParseError as exc:
        logger.debug("Dropping stream frame: %s", exc)
        return None

    return StreamEvent(type=event_type, application=application)


class LineFrameDecoder:
    """Reassembles lines across chunk boundaries and decodes complete ones.

    One decoder belongs to one connection. The trailing partial line of each
    chunk is kept and prefixed to the next chunk.
    """

    def __init__(self, parser: ApplicationParser) -> None:
        self._parser = parser
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Text received after the last newline."""
        return self._buffer

    def feed(self, chunk: str) -> list[StreamEvent]:
        """Consume one chunk and return the events completed by it."""
        self._buffer += chunk
        *lines, self._buffer = self._buffer.split("\n")
        events: list[StreamEvent] = []
        for line in lines:
            event = decode_frame(line, self._parser)
            if event is not None:
                events.append(event)
        return events

    def reset(self) -> None:
        self._buffer = ""
