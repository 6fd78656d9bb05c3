"""Parsers for application payloads and stream frames."""

from argoflow.controllers.applications.parsers.application_parser import (
    ApplicationParseError,
    ApplicationParser,
)
from argoflow.controllers.applications.parsers.stream_parser import (
    LineFrameDecoder,
    StreamEvent,
    decode_frame,
)

__all__ = [
    "ApplicationParseError",
    "ApplicationParser",
    "LineFrameDecoder",
    "StreamEvent",
    "decode_frame",
]
