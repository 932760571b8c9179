"""
Spawner Skills — tooling for the skill corpus.

Loads deep-format skills (skill.yaml + companions), renders them into
SKILL.md documents, and serves them to assistants over MCP.
"""

__version__ = "1.0.0"
