from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple


# "1) text", "  3)" ... only digits 1-4 open a section.
SECTION_HEADER = re.compile(r"^\s*([1-4])\)\s*(.*)$")
BULLET_LINE = re.compile(r"^-(\s|$)")


@dataclass(frozen=True)
class VacancyRecord:
    description: str = ""
    skills: Tuple[str, ...] = ()
    salary: str = ""
    questions: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "skills": list(self.skills),
            "salary": self.salary,
            "questions": list(self.questions),
        }


def _bullets(lines: List[str]) -> Tuple[str, ...]:
    return tuple(line for line in lines if BULLET_LINE.match(line))


def parse_vacancy_reply(reply: Any) -> VacancyRecord:
    """
    Split a vacancy-generation reply into its four numbered sections.

    Best effort: never raises. Sections the model left out stay empty, so an
    empty description/salary or an empty list means "not provided".
    Bullet lines keep their leading "- "; use strip_bullet() when rendering.
    """
    fields: Dict[str, Any] = {}
    if not isinstance(reply, str):
        return VacancyRecord()

    def finalize(section: int, lines: List[str]) -> None:
        text = "\n".join(lines).strip()
        if section == 1:
            fields["description"] = text
        elif section == 2:
            fields["skills"] = _bullets(lines)
        elif section == 3:
            fields["salary"] = text
        elif section == 4:
            fields["questions"] = _bullets(lines)

    current = 0
    section_lines: List[str] = []

    for raw in reply.split("\n"):
        line = raw.strip()
        m = SECTION_HEADER.match(line)
        if m:
            if current > 0 and section_lines:
                finalize(current, section_lines)
            current = int(m.group(1))
            section_lines = []
            rest = m.group(2).strip()
            if rest:
                section_lines.append(rest)
        elif current > 0 and line:
            section_lines.append(line)

    if current > 0 and section_lines:
        finalize(current, section_lines)

    return VacancyRecord(**fields)


def strip_bullet(line: str) -> str:
    """'- Python' -> 'Python'."""
    return re.sub(r"^-\s*", "", line or "")
