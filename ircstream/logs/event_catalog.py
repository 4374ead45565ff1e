"""Human-readable texts for ``log_event`` calls.

``event_templates.json`` sits next to this module and maps
``domain -> action -> template``. It is flattened into
:data:`EVENT_TEMPLATES`, keyed by ``(domain, action)``, with ``str.format``
placeholders filled from the event's keyword context. A missing or broken
file never stops the client: the catalog then holds a single
``("app", "load_error")`` entry and every other event falls back to text
derived from its domain and action names.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}
TEMPLATES_PATH = Path(__file__).with_name("event_templates.json")


def _flatten(raw: Any) -> dict[tuple[str, str], str]:
    templates: dict[tuple[str, str], str] = {}
    if not isinstance(raw, Mapping):
        return templates
    for domain, actions in raw.items():
        if not (isinstance(domain, str) and isinstance(actions, Mapping)):
            continue
        for action, template in actions.items():
            if isinstance(action, str) and isinstance(template, str):
                templates[(domain, action)] = template
    return templates


def _load_event_templates(path: Path) -> dict[tuple[str, str], str]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return _flatten(json.load(f))
    except FileNotFoundError:
        return {("app", "load_error"): f"Event templates file missing: {path.name}"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Failed to load event templates: {e}"[:200]}


def reload_event_templates(path: Path | None = None) -> None:
    """Re-read the catalog, from ``path`` or the bundled JSON file.

    The dict is updated in place rather than rebound. ``ClientLogger`` and
    any caller that did ``from ircstream.logs import EVENT_TEMPLATES`` keep
    a reference to the same object, so they pick up edited templates (or a
    test's temporary catalog) without re-importing.
    """
    EVENT_TEMPLATES.clear()
    EVENT_TEMPLATES.update(_load_event_templates(path or TEMPLATES_PATH))


reload_event_templates()

__all__ = ["EVENT_TEMPLATES", "TEMPLATES_PATH", "reload_event_templates"]
