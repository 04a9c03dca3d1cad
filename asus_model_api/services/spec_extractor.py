"""Keyword-gated spec detection over the flattened text of a tech-spec page.

The extractor never copies values from the page. Once the required signals are all
present, each field trigger that matches substitutes its canned description.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from bs4 import BeautifulSoup

logger = logging.getLogger("asus-model-api")

_WHITESPACE_RE = re.compile(r"\s+")
_INVISIBLE_TAGS = ("script", "style", "noscript", "template")
_BLOCK_TAGS = (
    "address", "article", "aside", "blockquote", "br", "caption", "dd", "div", "dl", "dt",
    "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6", "header",
    "hr", "li", "main", "nav", "ol", "option", "p", "pre", "section", "table", "tbody",
    "td", "tfoot", "th", "thead", "tr", "ul",
)


@dataclass(frozen=True)
class Signal:
    """A page-layout anchor: every ``all_of`` keyword and at least one ``any_of`` keyword."""

    name: str
    all_of: tuple[str, ...] = ()
    any_of: tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        if not all(keyword in text for keyword in self.all_of):
            return False
        if self.any_of and not any(keyword in text for keyword in self.any_of):
            return False
        return True


@dataclass(frozen=True)
class FieldTrigger:
    """Set ``field`` (dotted for nested records) to ``value`` when any keyword is present."""

    field: str
    keywords: tuple[str, ...]
    value: Any

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


@dataclass(frozen=True)
class ExtractionRules:
    required_signals: tuple[Signal, ...] = ()
    field_triggers: tuple[FieldTrigger, ...] = field(default_factory=tuple)


def flatten_text(html: str) -> str:
    """Return the visible body text, lowercased, with whitespace collapsed.

    Inline markup is joined without a separator (``Wi-<b>Fi</b>`` reads ``wi-fi``);
    block elements are separated by a space.
    """

    if not html:
        return ""
    soup = BeautifulSoup(html, "lxml")
    for tag in soup(list(_INVISIBLE_TAGS)):
        tag.decompose()
    root = soup.body or soup
    for tag in root.find_all(list(_BLOCK_TAGS)):
        tag.insert_before(" ")
        tag.insert_after(" ")
    text = root.get_text()
    return _WHITESPACE_RE.sub(" ", text).strip().lower()


def missing_signals(text: str, signals: Iterable[Signal]) -> list[str]:
    return [signal.name for signal in signals if not signal.matches(text)]


def _assign(target: dict[str, Any], dotted: str, value: Any) -> None:
    head, _, rest = dotted.partition(".")
    if not rest:
        target[head] = value
        return
    nested = target.setdefault(head, {})
    _assign(nested, rest, value)


def apply_triggers(text: str, triggers: Sequence[FieldTrigger]) -> dict[str, Any]:
    specs: dict[str, Any] = {}
    for trigger in triggers:
        if trigger.matches(text):
            value = list(trigger.value) if isinstance(trigger.value, (list, tuple)) else trigger.value
            _assign(specs, trigger.field, value)
    return specs


def extract_specs(html: str, rules: ExtractionRules) -> Optional[dict[str, Any]]:
    """Detect spec fields in ``html``.

    Returns ``None`` when any required signal is missing; otherwise a (possibly
    empty) mapping of field name to canned value. Nested fields come back as dicts.
    """

    text = flatten_text(html)
    missing = missing_signals(text, rules.required_signals)
    if missing:
        logger.info(
            "spec signal gate failed",
            extra={"missing_signals": missing, "text_len": len(text)},
        )
        return None
    return apply_triggers(text, rules.field_triggers)


__all__ = [
    "ExtractionRules",
    "FieldTrigger",
    "Signal",
    "apply_triggers",
    "extract_specs",
    "flatten_text",
    "missing_signals",
]
