"""Normalize the pseudo-HTML markup embedded in MySword module text.

The vocabulary is closed. Only these constructs are interpreted:

- Title spans, removed from the text and collected as the title:
  ``<h1>``..``<h6>``, ``<title>``, ``<b>``, ``<s>``, ``<h>`` (bare opening tag
  and matching closing tag, case-insensitive) and MySword's ``<TS>..<Ts>``.
- Footnote spans, dropped entirely: ``<f>..</f>`` and MySword's ``<RF>..<Rf>``.
- Any other ``<...>`` tag is stripped and its text kept.
- ``&nbsp;`` and ``&quot;`` entity references.

Spans never cross a line break and close at the first matching end tag.
An opening tag without its end tag falls through to plain tag stripping, so
its text stays in the body. A ``<`` that is never followed by ``>`` is kept
as a literal character.
"""

import re
from dataclasses import dataclass

# One alternation, so a <b> nested in a <TS> span is never matched twice
TITLE_SPAN = re.compile(
    r"(?i:<(h[1-6]|title|b|s|h)>(?P<body>.*?)</\1>)"
    r"|<TS>(?P<ts_body>.*?)<Ts>"
)

FOOTNOTE_SPANS = (
    re.compile(r"<f>.*?</f>"),
    re.compile(r"<RF(?:\s[^>]*)?>.*?<Rf>"),
)

TAG = re.compile(r"<[^>]+>")
WIKI_LINK = re.compile(r"\[\[(.*?)\]\]")
WHITESPACE = re.compile(r"\s+")

ENTITIES = {
    "&nbsp;": " ",
    "&quot;": '"',
}


@dataclass(frozen=True)
class NormalizedText:
    """Plain body text plus the section title pulled out of it."""

    text: str
    title: str | None = None


def normalize(raw: str | None) -> NormalizedText:
    """
    Split raw module markup into plain text and an optional title.

    Title and text are produced by independent passes over ``raw``: a title
    span contributes to ``title`` and is excluded from ``text``.
    """
    if not raw:
        return NormalizedText(text="")

    return NormalizedText(text=_clean_text(raw), title=extract_title(raw))


def extract_title(raw: str) -> str | None:
    """Join every title span in document order, or None if there are none."""
    parts: list[str] = []
    for match in TITLE_SPAN.finditer(_drop_footnotes(raw)):
        body = match.group("body") if match.group("body") is not None else match.group("ts_body")
        part = _finish(TAG.sub("", body))
        if part:
            parts.append(part)

    return " ".join(parts) if parts else None


def strip_markup(raw: str | None) -> str:
    """
    Produce body text only, for annotation content.

    ``[[target]]`` links are unwrapped before the usual text rules apply.
    Title-class spans are dropped whole here too, so a bolded phrase in a
    commentary (``<b>Note</b>``) does not appear in the result.
    """
    if not raw:
        return ""
    return _clean_text(WIKI_LINK.sub(r"\1", raw))


def _clean_text(raw: str) -> str:
    text = TITLE_SPAN.sub("", raw)
    text = _drop_footnotes(text)
    text = TAG.sub("", text)
    return _finish(text)


def _drop_footnotes(text: str) -> str:
    for pattern in FOOTNOTE_SPANS:
        text = pattern.sub("", text)
    return text


def _finish(text: str) -> str:
    """Decode entities, collapse whitespace and trim."""
    for entity, replacement in ENTITIES.items():
        text = text.replace(entity, replacement)
    return WHITESPACE.sub(" ", text).strip()
