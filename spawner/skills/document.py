"""
SKILL.md documents — single-file renditions of deep-format skills.

A document opens with a fixed header block:

    # <name>

    > <description>

    **Category:** <category> | **Version:** <version>

    **Tags:** a, b

    ---

followed by Identity, Expertise Areas, Patterns, Anti-Patterns, Sharp Edges,
Decision Framework and Collaboration sections and a "Get the Full Version"
footer. Rendering is deterministic: the same sources always produce the
same bytes.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from spawner.skills.skill_loader import read_markdown, read_yaml

logger = logging.getLogger(__name__)

DEFAULT_VERSION = "1.0.0"
INSTALL_COMMAND = "npx vibeship-spawner-skills install"
PROJECT_URL = "https://github.com/vibeforge1111/vibeship-spawner-skills"

MAX_SHARP_EDGES = 10
MAX_DELEGATION_TRIGGERS = 8
MAX_RECEIVES_FROM = 5

FOOTER_HEADING = "## Get the Full Version"
COLLABORATION_HEADING = "## Collaboration"


# ------------------------------------------------------------------
# Header
# ------------------------------------------------------------------

@dataclass
class SkillHeader:
    """Title block of a SKILL.md document.

    Fields are normalised on construction to what the rendered block can
    carry: title, category and version are stripped single lines, each
    description line loses trailing whitespace, and tags are stripped,
    non-empty and free of commas.
    """

    title: str
    description: str = ""
    category: str = ""
    version: str = DEFAULT_VERSION
    tags: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.title = self.title.strip()
        self.category = self.category.strip()
        self.version = self.version.strip()
        for name in ("title", "category", "version"):
            if "\n" in getattr(self, name):
                raise ValueError(f"Header {name} must be a single line: {getattr(self, name)!r}")
        if _VERSION_SEPARATOR.search(self.category):
            raise ValueError(f"Header category may not contain '| **Version:**': {self.category!r}")
        self.description = "\n".join(line.rstrip() for line in self.description.split("\n"))

        tags = [tag.strip() for tag in self.tags]
        for tag in tags:
            if "," in tag or "\n" in tag:
                raise ValueError(f"Tag may not contain a comma or line break: {tag!r}")
        self.tags = [tag for tag in tags if tag]


METADATA_LINE = re.compile(r"^\*\*Category:\*\*\s*(.*?)\s*\|\s*\*\*Version:\*\*\s*(.*?)\s*$")
_VERSION_SEPARATOR = re.compile(r"\|\s*\*\*Version:\*\*")
_TAGS_LINE = re.compile(r"^\*\*Tags:\*\*\s*(.*?)\s*$")


def render_header(header: SkillHeader) -> str:
    """Render the header block, ending with the --- rule and a blank line."""
    md = f"# {header.title}\n\n"
    quoted = [f"> {line}".rstrip() for line in header.description.split("\n")]
    md += "\n".join(quoted) + "\n\n"
    md += f"**Category:** {header.category} | **Version:** {header.version}\n\n"
    if header.tags:
        md += f"**Tags:** {', '.join(header.tags)}\n\n"
    md += "---\n\n"
    return md


def parse_header(text: str) -> Optional[SkillHeader]:
    """Parse the header block of a document.

    Returns None when the text does not start with an H1 title.
    """
    lines = text.split("\n")
    if not lines or not lines[0].startswith("# "):
        return None

    i = 1
    while i < len(lines) and not lines[i].strip():
        i += 1

    quoted = []
    while i < len(lines) and lines[i].startswith(">"):
        quoted.append(re.sub(r"^> ?", "", lines[i]))
        i += 1

    category, version, tags = "", "", []
    for line in lines[i:]:
        stripped = line.strip()
        if stripped == "---" or stripped.startswith("## "):
            break
        match = METADATA_LINE.match(stripped)
        if match:
            category, version = match.group(1), match.group(2)
            continue
        match = _TAGS_LINE.match(stripped)
        if match:
            tags = match.group(1).split(",")
    return SkillHeader(
        title=lines[0][2:],
        description="\n".join(quoted),
        category=category,
        version=version,
        tags=tags,
    )


# ------------------------------------------------------------------
# Section formatters
# ------------------------------------------------------------------

def _strip_heading(content: str, label: str) -> str:
    """Drop a leading '# <label>: ...' heading from a companion markdown file."""
    return re.sub(rf"^#\s+{re.escape(label)}:.*\n+", "", content, count=1, flags=re.MULTILINE).strip()


def format_sharp_edges(data) -> str:
    if not isinstance(data, dict) or not data.get("sharp_edges"):
        return ""

    md = ""
    for edge in data["sharp_edges"][:MAX_SHARP_EDGES]:
        if not isinstance(edge, dict):
            continue
        severity = f"[{str(edge['severity']).upper()}]" if edge.get("severity") else ""
        md += f"### {severity} {edge.get('summary', '')}\n\n"
        if edge.get("situation"):
            md += f"**Situation:** {edge['situation']}\n\n"
        if edge.get("why"):
            md += f"**Why it happens:**\n{edge['why']}\n\n"
        if edge.get("solution"):
            md += f"**Solution:**\n```\n{edge['solution']}\n```\n\n"
        symptoms = edge.get("symptoms") or []
        if symptoms:
            md += "**Symptoms:**\n" + "\n".join(f"- {s}" for s in symptoms) + "\n\n"
        md += "---\n\n"
    return md


def format_collaboration(data) -> str:
    if not isinstance(data, dict):
        return ""

    md = ""
    triggers = data.get("delegation_triggers") or []
    if triggers:
        md += "### When to Hand Off\n\n"
        md += "| Trigger | Delegate To | Context |\n"
        md += "|---------|-------------|--------|\n"
        for trigger in triggers[:MAX_DELEGATION_TRIGGERS]:
            if not isinstance(trigger, dict):
                trigger = {}
            md += (
                f"| `{trigger.get('trigger', '')}` | {trigger.get('delegate_to', '')} "
                f"| {trigger.get('context', '')} |\n"
            )
        md += "\n"

    sources = data.get("receives_from") or []
    if sources:
        md += "### Receives Work From\n\n"
        for source in sources[:MAX_RECEIVES_FROM]:
            if not isinstance(source, dict):
                source = {}
            md += f"- **{source.get('skill', '')}**: {source.get('context', '')}\n"
        md += "\n"
    return md


def format_patterns(patterns) -> str:
    if not isinstance(patterns, list):
        return ""

    md = ""
    for pattern in patterns:
        if isinstance(pattern, str):
            md += f"- {pattern}\n"
        elif isinstance(pattern, dict) and pattern.get("name"):
            md += f"### {pattern['name']}\n"
            if pattern.get("description"):
                md += f"{pattern['description']}\n"
            if pattern.get("when"):
                md += f"**When:** {pattern['when']}\n"
            if pattern.get("implementation"):
                md += f"```\n{pattern['implementation']}\n```\n"
            md += "\n"
    return md


def format_anti_patterns(anti_patterns) -> str:
    if not isinstance(anti_patterns, list):
        return ""

    md = ""
    for anti in anti_patterns:
        if isinstance(anti, str):
            md += f"- {anti}\n"
        elif isinstance(anti, dict) and anti.get("name"):
            md += f"### {anti['name']}\n"
            if anti.get("description"):
                md += f"{anti['description']}\n"
            if anti.get("why_bad"):
                md += f"**Why it's bad:** {anti['why_bad']}\n"
            if anti.get("instead"):
                md += f"**Instead:** {anti['instead']}\n"
            md += "\n"
    return md


def render_footer(category: str, skill_name: str, deep_files: List[str]) -> str:
    md = "---\n\n"
    md += f"{FOOTER_HEADING}\n\n"
    md += (
        "This skill has **automated validations**, **detection patterns**, and "
        "**structured handoff triggers** that work with the Spawner orchestrator.\n\n"
    )
    md += f"```bash\n{INSTALL_COMMAND}\n```\n\n"
    md += f"Full skill path: `~/.spawner/skills/{category}/{skill_name}/`\n\n"
    md += "**Includes:**\n"
    md += "- `skill.yaml` - Structured skill definition\n"
    md += "- `sharp-edges.yaml` - Machine-parseable gotchas with detection patterns\n"
    md += "- `validations.yaml` - Automated code checks\n"
    md += "- `collaboration.yaml` - Handoff triggers for skill orchestration\n"

    descriptions = {
        "patterns.md": "Comprehensive pattern library",
        "anti-patterns.md": "What to avoid and why",
        "sharp-edges.md": "Detailed gotcha documentation",
        "decisions.md": "Decision frameworks",
    }
    listed = [name for name in descriptions if name in deep_files]
    # decisions.md alone does not earn a Deep content block
    if set(listed) - {"decisions.md"}:
        md += "\n**Deep content:**\n"
        for name in listed:
            md += f"- `{name}` - {descriptions[name]}\n"

    md += "\n---\n\n"
    md += f"*Generated by [VibeShip Spawner]({PROJECT_URL})*\n"
    return md


# ------------------------------------------------------------------
# Whole document
# ------------------------------------------------------------------

def _single_line(value) -> str:
    return " ".join(str(value).splitlines())


def render_skill_document(skill_path, category: str, skill_name: str) -> Optional[str]:
    """Render SKILL.md for one deep-format skill directory.

    Returns None when the directory has no usable skill.yaml.
    """
    skill_path = Path(skill_path)
    skill = read_yaml(skill_path / "skill.yaml")
    if not isinstance(skill, dict) or not skill:
        logger.warning("Skipping %s: no skill.yaml found", skill_name)
        return None

    sharp_edges_yaml = read_yaml(skill_path / "sharp-edges.yaml")
    collaboration_yaml = read_yaml(skill_path / "collaboration.yaml")

    patterns_md = read_markdown(skill_path / "patterns.md")
    anti_patterns_md = read_markdown(skill_path / "anti-patterns.md")
    sharp_edges_md = read_markdown(skill_path / "sharp-edges.md")
    decisions_md = read_markdown(skill_path / "decisions.md")

    tags = skill.get("tags") or []
    if not isinstance(tags, list):
        tags = []
    header = SkillHeader(
        title=_single_line(skill.get("name") or skill_name),
        description=str(skill.get("description") or "").strip(),
        category=category,
        version=_single_line(skill.get("version") or DEFAULT_VERSION),
        # a YAML tag such as "auth, oauth" renders as two tags
        tags=[part for tag in tags for part in _single_line(tag).split(",")],
    )
    md = render_header(header)

    identity = skill.get("identity")
    if identity:
        if isinstance(identity, dict):
            identity = "\n".join(f"**{k}:** {v}" for k, v in identity.items())
        md += f"## Identity\n\n{str(identity).strip()}\n\n"

    owns = skill.get("owns") or []
    if owns:
        md += "## Expertise Areas\n\n"
        md += "\n".join(f"- {o}" for o in owns)
        md += "\n\n"

    md += "## Patterns\n\n"
    if patterns_md:
        md += f"{_strip_heading(patterns_md, 'Patterns')}\n\n"
    elif skill.get("patterns"):
        md += format_patterns(skill["patterns"]) + "\n"
    else:
        md += "*Patterns documented in full version.*\n\n"

    if anti_patterns_md or skill.get("anti_patterns"):
        md += "## Anti-Patterns\n\n"
        if anti_patterns_md:
            md += f"{_strip_heading(anti_patterns_md, 'Anti-Patterns')}\n\n"
        else:
            md += format_anti_patterns(skill["anti_patterns"]) + "\n"

    md += "## Sharp Edges (Gotchas)\n\n"
    md += "*Real production issues that cause outages and bugs.*\n\n"
    if sharp_edges_md:
        md += f"{_strip_heading(sharp_edges_md, 'Sharp Edges')}\n\n"
    elif sharp_edges_yaml:
        md += format_sharp_edges(sharp_edges_yaml)
    else:
        md += "*Sharp edges documented in full version.*\n\n"

    if decisions_md:
        md += f"## Decision Framework\n\n{_strip_heading(decisions_md, 'Decisions')}\n\n"

    if collaboration_yaml:
        md += f"{COLLABORATION_HEADING}\n\n"
        md += format_collaboration(collaboration_yaml)

    pairs_with = skill.get("pairs_with") or []
    if pairs_with:
        md += "### Works Well With\n\n"
        md += "\n".join(f"- {p}" for p in pairs_with)
        md += "\n\n"

    deep_files = [
        name for name, content in (
            ("patterns.md", patterns_md),
            ("anti-patterns.md", anti_patterns_md),
            ("sharp-edges.md", sharp_edges_md),
            ("decisions.md", decisions_md),
        ) if content
    ]
    md += render_footer(category, skill_name, deep_files)
    return md
