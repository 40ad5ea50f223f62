"""TOML loader for event bootstrap configuration.

Loads and validates a bootstrap TOML file so that accounts and events can be
created programmatically::

    [[accounts]]
    username = "admin"
    password = "change-me"
    name = "Site Admin"
    admin = true

    [[events]]
    name = "Fall Fest"
    description = "Annual autumn gathering."
"""

import tomllib
from pathlib import Path
from typing import Any

from django_event_admin.events.utils import is_reserved_slug, slugify_name

_REQUIRED_EVENT_FIELDS: set[str] = {"name"}
_REQUIRED_ACCOUNT_FIELDS: set[str] = {"username", "password"}


def _ensure_slugs(items: list[dict[str, Any]], label: str) -> None:
    """Derive each event's slug from its name and check any explicit slug.

    Args:
        items: List of event mappings to process.
        label: Human-readable context for error messages.

    Raises:
        ValueError: If a name cannot be slugified, maps to a reserved slug,
            or disagrees with an explicit ``slug`` key.
    """
    for idx, item in enumerate(items):
        name = item["name"]
        if not isinstance(name, str):
            msg = f"{label}[{idx}].name must be a string"
            raise TypeError(msg)
        try:
            slug = slugify_name(name)
        except ValueError as exc:
            msg = f"{label}[{idx}].name must contain at least one letter or digit"
            raise ValueError(msg) from exc
        if is_reserved_slug(slug):
            msg = f"{label}[{idx}].name maps to the reserved slug '{slug}'"
            raise ValueError(msg)
        if "slug" in item and item["slug"] != slug:
            msg = f"{label}[{idx}].slug must be '{slug}' (derived from the name), got {item['slug']!r}"
            raise ValueError(msg)
        item["slug"] = slug


def _validate_unique(items: list[dict[str, Any]], key: str, label: str) -> None:
    """Ensure no two items share the same value for *key*."""
    seen: set[str] = set()
    duplicates: set[str] = set()

    for item in items:
        value = item[key]
        if value in seen:
            duplicates.add(value)
        seen.add(value)

    if duplicates:
        msg = f"{label} has duplicate {key}s: {', '.join(sorted(duplicates))}"
        raise ValueError(msg)


def _validate_list(data: dict[str, Any], key: str, required_fields: set[str]) -> list[dict[str, Any]]:
    """Validate an optional array of tables and return it (empty when absent).

    Args:
        data: The parsed TOML document.
        key: The top-level key to validate (``"events"`` or ``"accounts"``).
        required_fields: Fields each item must define.
    """
    items = data.get(key)
    if items is None:
        return []

    if not isinstance(items, list):
        msg = f"{key} must be a list of tables"
        raise ValueError(msg)

    for idx, item in enumerate(items):
        _validate_mapping(item, required_fields, f"{key}[{idx}]")
    return items


def load_event_config(path: str | Path) -> dict[str, list[dict[str, Any]]]:
    """Load and validate an event bootstrap TOML file.

    Args:
        path: Filesystem path to the TOML file.

    Returns:
        A mapping with ``events`` and ``accounts`` lists.  Every event has a
        ``slug`` derived from its ``name``.

    Raises:
        FileNotFoundError: If *path* does not exist.
        TypeError: If a table has the wrong shape.
        ValueError: If required fields are missing, names or slugs collide,
            or the file is not valid TOML.
    """
    path = Path(path)
    if not path.exists():
        msg = f"Event config file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open("rb") as fh:
        try:
            data: dict[str, Any] = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {path}: {exc}"
            raise ValueError(msg) from exc

    if "events" not in data and "accounts" not in data:
        msg = "Config file must define [[events]] or [[accounts]]"
        raise ValueError(msg)

    events = _validate_list(data, "events", _REQUIRED_EVENT_FIELDS)
    _ensure_slugs(events, "events")
    _validate_unique(events, "name", "events")
    _validate_unique(events, "slug", "events")

    accounts = _validate_list(data, "accounts", _REQUIRED_ACCOUNT_FIELDS)
    _validate_unique(accounts, "username", "accounts")

    return {"events": events, "accounts": accounts}


def _validate_mapping(mapping: object, required: set[str], label: str) -> None:
    """Validate that *mapping* is a dict containing all *required* keys.

    Args:
        mapping: The value to validate.
        required: Set of required key names.
        label: Human-readable context for error messages.

    Raises:
        TypeError: If *mapping* is not a dict.
        ValueError: If *mapping* is missing required keys.
    """
    if not isinstance(mapping, dict):
        msg = f"{label} must be a mapping, got {type(mapping).__name__}"
        raise TypeError(msg)
    missing = required - mapping.keys()
    if missing:
        msg = f"{label} is missing required fields: {', '.join(sorted(missing))}"
        raise ValueError(msg)
