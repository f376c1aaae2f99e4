"""
Keyword annotation renderer.

Scans text for glossary terms and splits it into literal and annotated
segments. One pattern is built from every dictionary key, longest key
first, so "counters" wins over "counter". Word keys must sit on word
boundaries; symbol keys such as "{T}" match anywhere.

Every match gets an occurrence id built from the term, the line index and
the segment index. Annotating the same text again yields the same ids, so
an open tooltip survives re-renders.

TooltipState holds at most one open occurrence id. Opening another
occurrence replaces it; an outside click or the cancel key clears it.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass

from explainmycard.services.term_dictionary import TERMS

LINE_BREAK = "\n"
CANCEL_KEYS = frozenset({"Escape", "Esc"})

_WORDY_KEY = re.compile(r"[a-z '\-]+")


@dataclass(frozen=True, slots=True)
class LiteralSegment:
    """Plain text between annotated terms. Line breaks are literal segments."""

    text: str


@dataclass(frozen=True, slots=True)
class AnnotatedTerm:
    """
    One occurrence of a dictionary term.

    Attributes:
        text: The text as written (original casing)
        term: The dictionary key it matched
        definition: One-sentence definition
        occurrence_id: Unique per occurrence, stable across re-annotation
    """

    text: str
    term: str
    definition: str
    occurrence_id: str


Segment = LiteralSegment | AnnotatedTerm


def _key_pattern(key: str) -> str:
    if _WORDY_KEY.fullmatch(key):
        return rf"\b{re.escape(key)}\b"
    return re.escape(key)


def build_pattern(terms: Mapping[str, str]) -> tuple[re.Pattern[str], dict[str, str]]:
    """
    Compile one alternation over all keys, longest key first.

    Each key gets its own named group, so a match maps back to the key it
    came from even when case folding lets a letter like "ſ" stand in for "s".

    Returns:
        The pattern and a mapping of group name to dictionary key
    """
    keys = sorted(terms, key=lambda k: (-len(k), k))
    groups = {f"k{index}": key for index, key in enumerate(keys)}
    alternation = "|".join(f"(?P<{name}>{_key_pattern(key)})" for name, key in groups.items())
    return re.compile(alternation, re.IGNORECASE), groups


class KeywordAnnotator:
    """Annotates text against a fixed term dictionary."""

    def __init__(self, terms: Mapping[str, str] = TERMS) -> None:
        self._terms = terms
        self._pattern, self._groups = build_pattern(terms) if terms else (None, {})

    def annotate_line(self, line: str, line_index: int) -> list[Segment]:
        if self._pattern is None or not line:
            return [LiteralSegment(line)] if line else []

        segments: list[Segment] = []
        position = 0
        for match in self._pattern.finditer(line):
            if match.start() > position:
                segments.append(LiteralSegment(line[position : match.start()]))
            term = self._groups[match.lastgroup]
            segments.append(
                AnnotatedTerm(
                    text=match.group(0),
                    term=term,
                    definition=self._terms[term],
                    occurrence_id=f"{term}:{line_index}:{len(segments)}",
                )
            )
            position = match.end()
        if position < len(line):
            segments.append(LiteralSegment(line[position:]))
        return segments

    def annotate(self, text: str) -> list[Segment]:
        """
        Split text into literal and annotated segments.

        Args:
            text: Any text, e.g. oracle text or a rendered document

        Returns:
            Segments in order; joining their text reproduces the input
        """
        segments: list[Segment] = []
        for line_index, line in enumerate(text.split(LINE_BREAK)):
            if line_index:
                segments.append(LiteralSegment(LINE_BREAK))
            segments.extend(self.annotate_line(line, line_index))
        return segments


_default_annotator = KeywordAnnotator()


def annotate(text: str) -> list[Segment]:
    """Annotate text with the built-in term dictionary."""
    return _default_annotator.annotate(text)


def occurrence_ids(segments: list[Segment]) -> list[str]:
    return [s.occurrence_id for s in segments if isinstance(s, AnnotatedTerm)]


@dataclass(frozen=True, slots=True)
class TooltipState:
    """
    Which annotated occurrence currently shows its definition.

    A single optional id: never more than one occurrence is open, even when
    the same term appears several times.
    """

    open_id: str | None = None

    def open(self, occurrence_id: str) -> "TooltipState":
        return TooltipState(open_id=occurrence_id)

    def toggle(self, occurrence_id: str) -> "TooltipState":
        """Clicking an occurrence opens it, or closes it if already open."""
        if self.open_id == occurrence_id:
            return TooltipState()
        return TooltipState(open_id=occurrence_id)

    def close(self) -> "TooltipState":
        return TooltipState()

    def outside_click(self) -> "TooltipState":
        return self.close()

    def key_pressed(self, key: str) -> "TooltipState":
        if key in CANCEL_KEYS:
            return self.close()
        return self

    def is_open(self, occurrence_id: str) -> bool:
        return self.open_id is not None and self.open_id == occurrence_id


def render_text(segments: list[Segment], state: TooltipState | None = None) -> str:
    """
    Render segments as plain text.

    The open occurrence, if any, is followed by its definition in brackets.
    """
    state = state or TooltipState()
    parts: list[str] = []
    for segment in segments:
        parts.append(segment.text)
        if isinstance(segment, AnnotatedTerm) and state.is_open(segment.occurrence_id):
            parts.append(f" [{segment.definition}]")
    return "".join(parts)
