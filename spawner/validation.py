"""
Spawner Validation — regex guardrails loaded from validations.yaml files.
"""

import fnmatch
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

from spawner.skills.skill_loader import iter_skill_files, read_yaml

logger = logging.getLogger(__name__)

# Representative file extensions per language, matched against file_patterns
LANGUAGE_EXTENSIONS: Dict[str, List[str]] = {
    "python": [".py", ".pyi"],
    "typescript": [".ts", ".tsx", ".mts", ".cts"],
    "javascript": [".js", ".jsx", ".mjs", ".cjs"],
    "go": [".go"],
    "rust": [".rs"],
    "java": [".java"],
    "kotlin": [".kt", ".kts"],
    "ruby": [".rb"],
    "php": [".php"],
    "csharp": [".cs"],
    "swift": [".swift"],
    "solidity": [".sol"],
    "sql": [".sql"],
    "yaml": [".yaml", ".yml"],
    "shell": [".sh", ".bash"],
    "svelte": [".svelte"],
    "vue": [".vue"],
}
LANGUAGE_ALIASES = {
    "py": "python",
    "ts": "typescript",
    "tsx": "typescript",
    "js": "javascript",
    "jsx": "javascript",
    "node": "javascript",
    "golang": "go",
    "rs": "rust",
    "c#": "csharp",
    "cs": "csharp",
    "bash": "shell",
    "sh": "shell",
    "yml": "yaml",
}


def _language_extensions(language: Optional[str]) -> Optional[List[str]]:
    if not language:
        return None
    key = language.strip().lower()
    key = LANGUAGE_ALIASES.get(key, key)
    return LANGUAGE_EXTENSIONS.get(key)


def expand_braces(pattern: str) -> List[str]:
    """Expand shell-style ``{a,b}`` groups, which fnmatch does not understand.

    ``"**/*.{ts,tsx}"`` becomes ``["**/*.ts", "**/*.tsx"]``; groups may nest.
    An unbalanced brace is kept literally.
    """
    start = pattern.find("{")
    if start == -1:
        return [pattern]

    depth = 0
    parts, part_start = [], start + 1
    for i in range(start, len(pattern)):
        ch = pattern[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                parts.append(pattern[part_start:i])
                head, tail = pattern[:start], pattern[i + 1:]
                return [
                    expanded
                    for part in parts
                    for expanded in expand_braces(head + part + tail)
                ]
        elif ch == "," and depth == 1:
            parts.append(pattern[part_start:i])
            part_start = i + 1

    head, rest = pattern[:start + 1], pattern[start + 1:]
    return [head + expanded for expanded in expand_braces(rest)]


class ValidationManager:
    """Loads validation rules from a skills root and applies them to code."""

    def __init__(self, root):
        self.root = Path(root).expanduser().resolve()
        self.rules: List[dict] = []
        self._loaded = False

    def load_rules(self):
        """Collect the `validations:` list from every validations.yaml."""
        self.rules = []
        for path in iter_skill_files(self.root, "validations.yaml"):
            try:
                data = read_yaml(path, fallback=False)
            except Exception as e:
                logger.error("Error loading validations from %s: %s", path, e)
                continue
            if not isinstance(data, dict) or not isinstance(data.get("validations"), list):
                continue
            skill_id = path.parent.name
            for rule in data["validations"]:
                if isinstance(rule, dict):
                    self.rules.append({**rule, "skill_id": rule.get("skill_id", skill_id)})

        self._loaded = True
        logger.info("Loaded %d validation rules", len(self.rules))

    def refresh(self):
        self.load_rules()

    def _applies(self, rule: dict, extensions: Optional[List[str]], context: Optional[str]) -> bool:
        if rule.get("type") != "regex" or not rule.get("pattern"):
            return False
        if context and rule.get("skill_id") != context:
            return False
        file_patterns = rule.get("file_patterns")
        if isinstance(file_patterns, str):
            file_patterns = [file_patterns]
        if extensions and file_patterns:
            samples = [f"file{ext}" for ext in extensions]
            return any(
                fnmatch.fnmatch(sample, expanded.split("/")[-1])
                for pattern in file_patterns
                for expanded in expand_braces(str(pattern))
                for sample in samples
            )
        return True

    def validate(
        self,
        code: str,
        language: Optional[str] = None,
        context: Optional[str] = None,
    ) -> List[dict]:
        """Run every applicable regex rule against *code*.

        Args:
            code: Source text to check.
            language: Optional language name; rules whose file_patterns
                cannot match that language are skipped.
            context: Optional skill id; only that skill's rules are applied.

        Returns:
            List of {rule_id, name, severity, message, fix_action} dicts.
        """
        if not self._loaded:
            self.load_rules()

        extensions = _language_extensions(language)
        results = []
        for rule in self.rules:
            if not self._applies(rule, extensions, context):
                continue
            try:
                matched = re.search(rule["pattern"], code) is not None
            except re.error as e:
                logger.error("Invalid regex for rule %s: %s (%s)", rule.get("id"), rule["pattern"], e)
                continue
            if matched:
                results.append({
                    "rule_id": rule.get("id"),
                    "name": rule.get("name"),
                    "severity": rule.get("severity"),
                    "message": rule.get("message"),
                    "fix_action": rule.get("fix_action"),
                })
        return results
