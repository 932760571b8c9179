"""
Spawner Tool Registry

Every ``*_tools`` module in this package contributes two module-level names:

  TOOLS     list of {"name", "description", "input_schema"} definitions
  HANDLERS  {tool_name: handler(ctx, **arguments) -> str}

Both are collected once at import. Handlers receive the SpawnerContext as
their first argument and raise on failure; callers decide how errors are
surfaced (the MCP server adds per-tool prefixes, tests inspect the raw
exception).
"""

import importlib
import logging
import pkgutil
from typing import Callable, Dict, List, Optional

from spawner.errors import UnknownToolError

logger = logging.getLogger(__name__)

_REGISTRY: Dict[str, Dict] = {}          # tool_name -> definition, discovery order
_HANDLERS: Dict[str, Callable] = {}      # tool_name -> handler


def _register_module(mod) -> int:
    tools = getattr(mod, "TOOLS", [])
    handlers = getattr(mod, "HANDLERS", {})

    for tool in tools:
        name = tool["name"]
        if name not in handlers:
            logger.warning("Tool '%s' in %s has no handler, skipping", name, mod.__name__)
            continue
        if name in _REGISTRY:
            logger.warning("Duplicate tool name '%s' from %s, overwriting", name, mod.__name__)
        _REGISTRY[name] = tool
        _HANDLERS[name] = handlers[name]

    orphans = set(handlers) - {t["name"] for t in tools}
    for name in sorted(orphans):
        logger.warning("Handler '%s' in %s has no tool definition", name, mod.__name__)
    return len(tools)


def _discover_tools():
    """Import each *_tools module in this package and register what it exports."""
    for _, module_name, _ in pkgutil.iter_modules(__path__):
        if not module_name.endswith("_tools"):
            continue
        fqn = f"{__name__}.{module_name}"
        try:
            mod = importlib.import_module(fqn)
        except Exception as e:
            logger.warning("Failed to import %s: %s", fqn, e)
            continue
        logger.debug("Loaded %d tools from %s", _register_module(mod), module_name)


_discover_tools()


def get_all_tools() -> List[Dict]:
    """Tool definitions in discovery order (a fresh list each call)."""
    return list(_REGISTRY.values())


def get_tool(name: str) -> Optional[Dict]:
    return _REGISTRY.get(name)


def execute_tool(name: str, args: dict, ctx) -> str:
    """
    Run the handler registered under *name*.

    Args:
        name: Tool name as advertised by get_all_tools()
        args: Keyword arguments for the handler
        ctx: SpawnerContext providing the managers

    Returns:
        Result text (JSON or markdown) from the handler

    Raises:
        UnknownToolError: no handler is registered under *name*
    """
    handler = _HANDLERS.get(name)
    if handler is None:
        raise UnknownToolError(name)
    return handler(ctx, **args)
