"""Structural checks for SKILL.md documents."""

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable, List

from spawner.skills.document import COLLABORATION_HEADING, FOOTER_HEADING, METADATA_LINE, parse_header

logger = logging.getLogger(__name__)

ERROR = "error"
WARNING = "warning"


@dataclass
class LintIssue:
    path: str
    rule: str
    severity: str
    message: str

    def to_dict(self) -> dict:
        return asdict(self)


def _has_heading(text: str, heading: str) -> bool:
    return any(line.rstrip() == heading for line in text.split("\n"))


def _metadata_follows_summary(text: str) -> bool:
    """True when the first line after the title and blockquote is the Category/Version line."""
    lines = text.split("\n")[1:]
    i = 0
    while i < len(lines) and not lines[i].strip():
        i += 1
    while i < len(lines) and lines[i].startswith(">"):
        i += 1
    while i < len(lines) and not lines[i].strip():
        i += 1
    return i < len(lines) and METADATA_LINE.match(lines[i].strip()) is not None


def lint_document(text: str, path: str = "<string>") -> List[LintIssue]:
    """Check one document's heading structure."""
    issues: List[LintIssue] = []

    def issue(rule, severity, message):
        issues.append(LintIssue(path=path, rule=rule, severity=severity, message=message))

    header = parse_header(text)
    if header is None:
        issue("missing-title", ERROR, "document must begin with an H1 title")
    else:
        if not header.description.strip():
            issue("missing-summary", ERROR, "no blockquote summary below the title")
        if not header.category or not header.version or not _metadata_follows_summary(text):
            issue(
                "missing-metadata", ERROR,
                "no '**Category:** ... | **Version:** ...' line directly below the summary",
            )
        if not header.tags:
            issue("missing-tags", WARNING, "no '**Tags:**' line")

    if not _has_heading(text, COLLABORATION_HEADING):
        issue("missing-collaboration", WARNING, "no Collaboration section")
    if not _has_heading(text, FOOTER_HEADING):
        issue("missing-footer", ERROR, "no 'Get the Full Version' footer")
    return issues


def iter_documents(paths: Iterable) -> Iterable[Path]:
    """Expand files and directories into markdown document paths."""
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            yield from sorted(p for p in path.rglob("*.md") if p.is_file())
        elif path.is_file():
            yield path
        else:
            logger.warning("Skipping missing path: %s", path)


def lint_paths(paths: Iterable) -> List[LintIssue]:
    """Lint every markdown document under *paths*."""
    issues: List[LintIssue] = []
    for doc in iter_documents(paths):
        try:
            text = doc.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            issues.append(LintIssue(str(doc), "unreadable", ERROR, str(e)))
            continue
        issues.extend(lint_document(text, str(doc)))
    return issues
