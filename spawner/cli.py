"""
Spawner command line — install, inspect and maintain a skills checkout,
and run the MCP server.

Usage:
    spawner install [--mcp]       Clone skills into ~/.spawner/skills
    spawner update                git pull the skills checkout
    spawner setup-mcp             Register the MCP server with Claude
    spawner status                Installation and MCP status
    spawner list [category] [-a]  Categories, one category, or every skill
    spawner build-dist [skill]    Generate dist/<category>/<skill>.md
    spawner sync-count            Update skill counts in README files
    spawner validate-yaml         Parse every YAML file in the skills tree
    spawner lint [paths...]       Check generated SKILL.md structure
    spawner serve [--stdio]       Run the MCP server
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from spawner import __version__, installer, mcp_config
from spawner.config import Settings
from spawner.dist import build
from spawner.errors import SpawnerError
from spawner.maintenance import sync_skill_count, validate_yaml_tree
from spawner.skills.catalog import (
    count_skills,
    describe_skill,
    get_categories,
    get_skills_in_category,
)
from spawner.skills.lint import ERROR, lint_paths

logger = logging.getLogger(__name__)

RULE = "─" * 50

COMMAND_ALIASES = {
    "install": ["i"],
    "update": ["u", "upgrade"],
    "setup-mcp": ["mcp"],
    "status": ["s"],
    "list": ["ls", "l"],
    "help": ["h"],
    "build-dist": [],
    "sync-count": [],
    "validate-yaml": [],
    "lint": [],
    "serve": [],
}


def _ok(msg: str):
    print(f"✓ {msg}")


def _fail(msg: str):
    print(f"✗ {msg}")


def _info(msg: str):
    print(f"ℹ {msg}")


def _warn(msg: str):
    print(f"⚠ {msg}")


def _step(step: str, msg: str):
    print(f"\n[{step}] {msg}")


# ---------------------------------------------------------------------------
# Install / update / status
# ---------------------------------------------------------------------------

def cmd_install(args, settings: Settings) -> int:
    total_steps = 4 if args.mcp else 3
    _step(f"1/{total_steps}", "Checking prerequisites...")
    if not installer.git_installed():
        _fail("Git is not installed. Please install Git first.")
        _info("Download: https://git-scm.com/downloads")
        return 1
    _ok("Git is installed")

    if installer.skills_exist(settings.skills_dir):
        _info(f"Skills already installed at {settings.skills_dir}")
        _info('Run "update" command to get the latest version')
        total, _ = count_skills(settings.skills_dir)
        _ok(f"{total} skills available")
    else:
        _step(f"2/{total_steps}", "Creating directory structure...")
        settings.home.mkdir(parents=True, exist_ok=True)

        _step(f"3/{total_steps}", "Cloning skills repository...")
        _info("This may take a moment...")
        try:
            installer.clone(settings.repo_url, settings.skills_dir)
        except SpawnerError as e:
            _fail(str(e))
            _info("Check your internet connection and try again")
            return 1
        total, _ = count_skills(settings.skills_dir)
        _ok(f"Installation complete! {total} skills installed.")

    if args.mcp:
        _step(f"{total_steps}/{total_steps}", "Configuring MCP server...")
        cmd_setup_mcp(args, settings)

    print(f"\nSkills Location: {settings.skills_dir}")
    print(f"Full Guide: {settings.skills_dir / 'GETTING_STARTED.md'}")
    if not args.mcp:
        print("\nWant MCP features? (project memory, validation, sharp edges)")
        print("  Run: spawner setup-mcp")
    return 0


def cmd_update(args, settings: Settings) -> int:
    _step("1/2", "Checking installation...")
    if not installer.skills_exist(settings.skills_dir):
        _fail("Skills not installed. Run install command first.")
        return 1
    _ok("Skills directory found")

    _step("2/2", "Pulling latest changes...")
    try:
        installer.pull(settings.skills_dir)
    except SpawnerError as e:
        _fail(str(e))
        return 1
    total, _ = count_skills(settings.skills_dir)
    _ok(f"Update complete! {total} skills available.")
    return 0


def _print_mcp_status():
    print("\nMCP Server Status")
    print(RULE)
    any_configured = False
    for env in mcp_config.detect_environments():
        configured = mcp_config.is_configured(env.path)
        any_configured = any_configured or configured
        print(f"{env.name}: {'✓ Configured' if configured else '○ Not configured'}")
        print(f"  {env.path}")
    print(RULE)
    if not any_configured:
        _info("Run: spawner setup-mcp")


def cmd_status(args, settings: Settings) -> int:
    print("\nSpawner Skills Status")
    print(RULE)
    if installer.skills_exist(settings.skills_dir):
        _ok(f"Installed at: {settings.skills_dir}")
        total, _ = count_skills(settings.skills_dir)
        _ok(f"Skills count: {total}")
        info = installer.git_info(settings.skills_dir)
        if info["branch"]:
            _info(f"Branch: {info['branch']}")
        if info["last_commit"]:
            _info(f"Last update: {info['last_commit']}")
    else:
        _fail("Skills not installed")
        _info("Run: spawner install")

    _print_mcp_status()
    return 0


def cmd_setup_mcp(args, settings: Settings) -> int:
    _step("1/3", "Detecting Claude environments...")
    environments = mcp_config.detect_environments()

    print("\nDetected Claude environments:")
    for i, env in enumerate(environments, 1):
        if mcp_config.is_configured(env.path):
            state = "(MCP configured)"
        elif not env.exists:
            state = "(will create)"
        else:
            state = "(MCP not configured)"
        print(f"  {i}. {env.name} {state}")
        print(f"     {env.path}")

    _step("2/3", "Configuring MCP server...")
    configured = 0
    for env in environments:
        try:
            if mcp_config.configure(env.path, settings.mcp_endpoint):
                _ok(f"{env.name}: MCP configured")
                configured += 1
            else:
                _info(f"{env.name}: Already configured, skipping")
        except OSError as e:
            _fail(f"{env.name}: Failed to configure - {e}")

    _step("3/3", "Verifying configuration...")
    if configured:
        _ok(f"MCP server configured for {configured} environment(s)")
        print(f"\nMCP Endpoint: {settings.mcp_endpoint}")
        print("Restart Claude Desktop (if configured) to pick up the new server.")
    else:
        _info("No new configurations needed - MCP already set up")
    return 0


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

def cmd_list(args, settings: Settings) -> int:
    root = settings.skills_dir
    if not root.is_dir():
        _fail("Skills not installed. Run install command first.")
        return 1

    categories = get_categories(root)
    print(f"\nLocation: {root}\n")

    if args.category:
        if args.category not in categories:
            _fail(f'Category "{args.category}" not found.')
            print("\nAvailable categories:")
            for category in categories:
                print(f"  {category}")
            return 1

        skills = get_skills_in_category(root, args.category)
        print(f"{args.category} ({len(skills)} skills)")
        print(RULE)
        for skill in skills:
            description = describe_skill(root / args.category / skill)
            print(f"  {skill} - {description}" if description else f"  {skill}")
        print()
        _info(f"Load with: Read {root / args.category}/<skill>/skill.yaml")
        return 0

    total = 0
    if args.all:
        print("All Skills")
        print(RULE)
        for category in categories:
            skills = get_skills_in_category(root, category)
            total += len(skills)
            print(f"\n{category} ({len(skills)})")
            for skill in skills:
                print(f"  {skill}")
        print()
    else:
        print("Installed Skill Categories")
        print(RULE)
        for category in categories:
            n = len(get_skills_in_category(root, category))
            total += n
            print(f"{category} ({n} skills)")

    print(RULE)
    _ok(f"Total: {total} skills across {len(categories)} categories")
    if not args.all:
        _info("List skills in a category: spawner list <category>")
        _info("List all skills: spawner list --all")
    return 0


# ---------------------------------------------------------------------------
# Maintenance
# ---------------------------------------------------------------------------

def _root(args, settings: Settings) -> Path:
    return Path(args.root).expanduser() if args.root else settings.skills_dir


def cmd_build_dist(args, settings: Settings) -> int:
    root = _root(args, settings)
    report = build(root, only=args.skill)
    print(RULE)
    _ok(f"Generated: {report.generated} skills")
    if report.skipped:
        _warn(f"Skipped: {report.skipped} skills")
    print(f"Output: {root / 'dist'}")
    return 0


def cmd_sync_count(args, settings: Settings) -> int:
    report = sync_skill_count(_root(args, settings))
    print("Skill Count by Category:")
    for category, n in sorted(report.categories.items()):
        print(f"  {category}: {n}")
    print(f"\nTotal: {report.total} skills\n")
    for rel in report.updated:
        _ok(f"Updated: {rel}")
    for rel in report.unchanged:
        print(f"  - No change: {rel}")
    for rel in report.missing:
        _warn(f"File not found: {rel}")
    return 0


def cmd_validate_yaml(args, settings: Settings) -> int:
    checked, errors = validate_yaml_tree(_root(args, settings))
    print(f"Found {checked} YAML files. Validating...")
    if not errors:
        print("\nAll YAML files are valid!")
        return 0

    print(f"\nFound {len(errors)} invalid YAML files:\n")
    for err in errors:
        print(f"File: {err.file}")
        print(f"Error: {err.reason} at line {err.line}:{err.column}")
        print("Snippet:")
        print(err.snippet)
        print("-" * 40)
    return 1


def cmd_lint(args, settings: Settings) -> int:
    paths = args.paths or [_root(args, settings) / "dist"]
    issues = lint_paths(paths)
    for issue in issues:
        marker = "✗" if issue.severity == ERROR else "⚠"
        print(f"{marker} {issue.path}: [{issue.rule}] {issue.message}")

    errors = sum(1 for issue in issues if issue.severity == ERROR)
    print(f"\n{errors} error(s), {len(issues) - errors} warning(s)")
    return 1 if errors else 0


def cmd_serve(args, settings: Settings) -> int:
    from spawner.server import run

    if args.port:
        settings.port = args.port
    run(settings, transport="stdio" if args.stdio else "streamable-http")
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spawner",
        description="Specialist skills for AI-powered product building",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("install", aliases=COMMAND_ALIASES["install"], help="Install skills")
    p.add_argument("--mcp", action="store_true", help="Also configure the MCP server")
    p.set_defaults(func=cmd_install)

    p = sub.add_parser("update", aliases=COMMAND_ALIASES["update"], help="Update skills to latest version")
    p.set_defaults(func=cmd_update)

    p = sub.add_parser("setup-mcp", aliases=COMMAND_ALIASES["setup-mcp"], help="Configure Spawner MCP server for Claude")
    p.set_defaults(func=cmd_setup_mcp)

    p = sub.add_parser("status", aliases=COMMAND_ALIASES["status"], help="Check installation and MCP status")
    p.set_defaults(func=cmd_status)

    p = sub.add_parser("list", aliases=COMMAND_ALIASES["list"], help="List skill categories or skills")
    p.add_argument("category", nargs="?", help="List all skills in a category")
    p.add_argument("--all", "-a", action="store_true", help="List all skills")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("help", aliases=COMMAND_ALIASES["help"], help="Show this help message")
    p.set_defaults(func=None)

    p = sub.add_parser("build-dist", help="Generate SKILL.md files into dist/")
    p.add_argument("skill", nargs="?", help="Only build this skill")
    p.add_argument("--root", help="Skills repository root (default: skills dir)")
    p.set_defaults(func=cmd_build_dist)

    p = sub.add_parser("sync-count", help="Update skill counts in documentation")
    p.add_argument("--root", help="Skills repository root (default: skills dir)")
    p.set_defaults(func=cmd_sync_count)

    p = sub.add_parser("validate-yaml", help="Check every YAML file parses")
    p.add_argument("--root", help="Skills repository root (default: skills dir)")
    p.set_defaults(func=cmd_validate_yaml)

    p = sub.add_parser("lint", help="Check SKILL.md document structure")
    p.add_argument("paths", nargs="*", help="Files or directories (default: <root>/dist)")
    p.add_argument("--root", help="Skills repository root (default: skills dir)")
    p.set_defaults(func=cmd_lint)

    p = sub.add_parser("serve", help="Run the MCP server")
    p.add_argument("--stdio", action="store_true", help="Serve over stdio instead of HTTP")
    p.add_argument("--port", type=int, help="HTTP port (default: $PORT or 3000)")
    p.set_defaults(func=cmd_serve)

    return parser


def _known_commands() -> set:
    known = set()
    for name, aliases in COMMAND_ALIASES.items():
        known.add(name)
        known.update(aliases)
    return known


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    settings = Settings.from_env()

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, settings.log_level, logging.INFO),
        stream=sys.stderr,
    )

    if argv and not argv[0].startswith("-") and argv[0] not in _known_commands():
        _fail(f"Unknown command: {argv[0]}")
        parser.print_help()
        return 1

    args = parser.parse_args(argv)
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 0

    try:
        return func(args, settings)
    except SpawnerError as e:
        _fail(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
