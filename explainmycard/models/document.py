"""
Sectioned documents produced by the explanation and synergy synthesizers.

A document has a fixed number of sections in a fixed order, and every
section holds at least one bullet. Builders guarantee this by adding a
fallback bullet to any section no rule contributed to.
"""

from dataclasses import dataclass

BULLET = "•"


@dataclass(frozen=True, slots=True)
class DocumentSection:
    """A titled, ordered list of bullet strings."""

    title: str
    bullets: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ExplainDocument:
    """
    Ordered sections of human-readable bullets.

    Attributes:
        kind: "explanation" or "synergies"
        sections: Sections in display order
    """

    kind: str
    sections: tuple[DocumentSection, ...]

    def section(self, title: str) -> DocumentSection:
        """Get a section by title."""
        for section in self.sections:
            if section.title == title:
                return section
        raise KeyError(title)

    @property
    def titles(self) -> list[str]:
        return [s.title for s in self.sections]

    def to_text(self) -> str:
        """Render as plain text with one bullet per line."""
        blocks = []
        for section in self.sections:
            lines = [section.title]
            lines.extend(f"{BULLET} {bullet}" for bullet in section.bullets)
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "kind": self.kind,
            "sections": [
                {"title": s.title, "bullets": list(s.bullets)} for s in self.sections
            ],
        }


class SectionCollector:
    """
    Accumulates bullets per section while rules fire.

    Bullets already present in a section are not added twice, and the
    first-seen order is preserved.
    """

    def __init__(self, titles: tuple[str, ...]) -> None:
        self._titles = titles
        self._bullets: dict[str, list[str]] = {title: [] for title in titles}

    def add(self, title: str, *bullets: str) -> None:
        target = self._bullets[title]
        for bullet in bullets:
            if bullet and bullet not in target:
                target.append(bullet)

    def get(self, title: str) -> list[str]:
        return list(self._bullets[title])

    def replace(self, title: str, bullets: list[str]) -> None:
        self._bullets[title] = list(bullets)

    def build(self, kind: str, fallbacks: dict[str, str]) -> ExplainDocument:
        """Freeze into a document, filling empty sections from fallbacks."""
        sections = []
        for title in self._titles:
            bullets = self._bullets[title] or [fallbacks[title]]
            sections.append(DocumentSection(title=title, bullets=tuple(bullets)))
        return ExplainDocument(kind=kind, sections=tuple(sections))
