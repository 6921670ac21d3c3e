"""
Resizer template catalog: loads garment-structure templates from YAML.

The catalog describes, per template, which shape family it belongs to and
which named values the original pattern and the new dimensions must supply.
Display metadata (labels, descriptions) is carried for callers but unused by
the calculations.

The registry is a module-level singleton loaded once at import time; call
get_template_registry() to obtain it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, cast

import yaml

from knitcalc.schemas.resize import ShapeFamily

_DATA_DIR = Path(__file__).parent / "data"


@dataclass(frozen=True)
class TemplateField:
    """One named input a template expects."""

    key: str
    label: str
    required: bool = True
    integer: bool = False


@dataclass(frozen=True)
class ResizerTemplate:
    key: str
    display_name: str
    description: str
    family: ShapeFamily
    supports_shaping: bool
    original_fields: tuple[TemplateField, ...]
    new_fields: tuple[TemplateField, ...]
    outputs: tuple[str, ...]


class TemplateRegistry:
    """
    Read-only catalog of resizer templates.

    Instantiate directly to use a custom data directory (e.g. in tests);
    otherwise use get_template_registry() for the module singleton.
    """

    def __init__(self, data_dir: Path = _DATA_DIR) -> None:
        self._data_dir = data_dir
        self.templates: MappingProxyType[str, ResizerTemplate]
        self._load()

    def _load_yaml(self, filename: str) -> dict[str, Any]:
        path = self._data_dir / filename
        try:
            with open(path) as f:
                return cast(dict[str, Any], yaml.safe_load(f))
        except FileNotFoundError:
            raise FileNotFoundError(f"Template catalog not found: {path}") from None
        except yaml.YAMLError as exc:
            raise ValueError(f"Failed to parse template catalog {path}: {exc}") from exc

    @staticmethod
    def _fields(raw: list[dict[str, Any]]) -> tuple[TemplateField, ...]:
        return tuple(
            TemplateField(
                key=f["key"],
                label=f.get("label", f["key"]),
                required=f.get("required", True),
                integer=f.get("integer", False),
            )
            for f in raw
        )

    def _load(self) -> None:
        data = self._load_yaml("templates.yaml")
        result: dict[str, ResizerTemplate] = {}
        for entry in data["entries"]:
            key = entry["key"]
            try:
                family = ShapeFamily(entry["family"])
            except ValueError:
                raise ValueError(
                    f"Template {key!r} has unknown family {entry['family']!r}"
                ) from None
            if key in result:
                raise ValueError(f"Duplicate template key {key!r}")
            result[key] = ResizerTemplate(
                key=key,
                display_name=entry["display_name"],
                description=entry.get("description", "").strip(),
                family=family,
                supports_shaping=entry.get("supports_shaping", False),
                original_fields=self._fields(entry.get("original_fields", [])),
                new_fields=self._fields(entry.get("new_fields", [])),
                outputs=tuple(entry.get("outputs", [])),
            )
        self.templates = MappingProxyType(result)

    # ── Query API ──────────────────────────────────────────────────────────────

    def get(self, template_key: str) -> ResizerTemplate:
        """Return the template registered under *template_key*.

        Raises
        ------
        KeyError
            If *template_key* is not in the catalog.
        """
        try:
            return self.templates[template_key]
        except KeyError:
            raise KeyError(f"Unknown template: {template_key!r}") from None

    def list_keys(self) -> list[str]:
        """Return a sorted list of all template keys."""
        return sorted(self.templates)

    def supporting_shaping(self) -> list[ResizerTemplate]:
        return [t for t in self.templates.values() if t.supports_shaping]


_registry: TemplateRegistry = TemplateRegistry()


def get_template_registry() -> TemplateRegistry:
    """Return the module-level template catalog singleton."""
    return _registry


def get_template(template_key: str) -> ResizerTemplate:
    return _registry.get(template_key)


def list_templates() -> list[str]:
    return _registry.list_keys()


def templates_supporting_shaping() -> list[ResizerTemplate]:
    return _registry.supporting_shaping()
