"""Marker grammar for request descriptions.

A marker is an HTML comment naming a section to insert, optionally with a
`:collapsed` suffix::

    <!-- request:headers -->
    <!-- response:body:collapsed -->

One padding character is allowed after `<!--` and before `-->`.
"""

import re
from dataclasses import dataclass
from enum import Enum


class Section(str, Enum):
    REQUEST_HEADERS = "request:headers"
    REQUEST_PARAMS = "request:urlparams"
    REQUEST_BODY = "request:body"
    RESPONSE_HEADERS = "response:headers"
    RESPONSE_BODY = "response:body"


MARKER_PATTERN = re.compile(
    r"<!--.?"
    r"(?:request:(?P<request>headers|urlparameters|urlparams|body)"
    r"|response:(?P<response>headers|body))"
    r"(?P<collapsed>:collapsed)?"
    r".?-->"
)

_SECTIONS = {
    ("request", "headers"): Section.REQUEST_HEADERS,
    ("request", "urlparams"): Section.REQUEST_PARAMS,
    ("request", "urlparameters"): Section.REQUEST_PARAMS,
    ("request", "body"): Section.REQUEST_BODY,
    ("response", "headers"): Section.RESPONSE_HEADERS,
    ("response", "body"): Section.RESPONSE_BODY,
}


@dataclass(frozen=True)
class Marker:
    section: Section
    collapsed: bool


def classify(match: re.Match) -> Marker:
    if match.group("request"):
        key = ("request", match.group("request"))
    else:
        key = ("response", match.group("response"))
    return Marker(_SECTIONS[key], bool(match.group("collapsed")))


def has_markers(text: str) -> bool:
    return MARKER_PATTERN.search(text) is not None
