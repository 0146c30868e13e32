"""Intent classification for incoming chat lines.

A line is matched against three patterns in a fixed order (dictionary,
air pollution, how-to). The first match becomes a typed request; when none
matches the line is rejected with `CannotParseRequest`.
"""

from __future__ import annotations

import logging
import re

from core.domain.errors import CannotParseRequest
from core.domain.models import AirPollutionRequest, DictionaryRequest, HowToRequest, Request

logger = logging.getLogger(__name__)

# The historical command list carried `so2` twice; only one mapping is kept.
AIR_COMMANDS: tuple[str, ...] = ("air", "pm", "pm10", "pm25", "o3", "so2", "no2", "co")

_DICTIONARY_RE = re.compile(r"[dD](?:ic)? (.+)")
_AIR_RE = re.compile(r"({}) (.+)".format("|".join(AIR_COMMANDS)))
_HOWTO_RE = re.compile(r"[hH](?:owto)? (.+)")


def parse_request(text: str) -> Request:
    """Classify `text` into a `Request`.

    Matching is anchored at both ends and case-sensitive apart from the
    alternate first letters `D` and `H`. The captured remainder is kept
    verbatim.
    """

    request: Request | None = None

    match = _DICTIONARY_RE.fullmatch(text)
    if match:
        request = DictionaryRequest(query=match.group(1))

    if request is None:
        match = _AIR_RE.fullmatch(text)
        if match:
            request = AirPollutionRequest(command=match.group(1), query=match.group(2))

    if request is None:
        match = _HOWTO_RE.fullmatch(text)
        if match:
            request = HowToRequest(query=match.group(1))

    if request is None:
        raise CannotParseRequest(text)

    logger.debug("parsed %r as %s", text, request.kind)
    return request
