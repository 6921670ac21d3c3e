"""
Calculator settings: every threshold the engine compares against.

Settings are loaded from ``data/settings.yaml`` once at import time and are
read-only afterwards. Set ``KNITCALC_SETTINGS`` to the path of another YAML
file with the same shape to override the bundled defaults; tests construct
their own instances with :func:`load_settings` instead.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, cast

import yaml

from knitcalc.utilities.types import Unit

_DATA_FILE = Path(__file__).parent / "data" / "settings.yaml"
_ENV_VAR = "KNITCALC_SETTINGS"


@dataclass(frozen=True)
class Range:
    """Closed plausible range ``[min, max]``."""

    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(f"range min ({self.min}) must not exceed max ({self.max})")


@dataclass(frozen=True)
class ShapingSettings:
    max_plausible_rows: int


@dataclass(frozen=True)
class ResizeSettings:
    """Warning thresholds for the pattern resizer.

    Attributes:
        rounding_tolerance: Allowed achieved-vs-desired drift per unit.
        cylindrical_rounding_tolerance: Same, for fitted cylindrical pieces.
        ease_fit_tolerance: Circumference drift that triggers an ease warning.
        max_gauge_change: Fractional stitch-density change before warning.
        max_taper_ratio_shift: Fractional taper-ratio change before warning.
        display_decimals: Decimals kept on achieved dimensions.
    """

    rounding_tolerance: MappingProxyType[Unit, float]
    cylindrical_rounding_tolerance: MappingProxyType[Unit, float]
    ease_fit_tolerance: MappingProxyType[Unit, float]
    max_gauge_change: float
    max_taper_ratio_shift: float
    display_decimals: int


@dataclass(frozen=True)
class HammerSleeveSettings:
    """Plausible ranges (cm) and fixed construction constants."""

    shoulder_extension_cm: Range
    upper_arm_width_cm: Range
    armhole_depth_cm: Range
    extension_length_rows: int


@dataclass(frozen=True)
class CalculatorSettings:
    shaping: ShapingSettings
    resize: ResizeSettings
    hammer_sleeve: HammerSleeveSettings


# ── Loading ────────────────────────────────────────────────────────────────────


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Settings file not found: {path}") from None
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse settings file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping at the top level")
    return cast(dict[str, Any], data)


class _Reader:
    """Walks the raw YAML tree and records every missing key before failing."""

    def __init__(self, data: dict[str, Any]) -> None:
        self._data = data
        self.missing: list[str] = []

    def get(self, dotted: str, default: Any = None) -> Any:
        node: Any = self._data
        for part in dotted.split("."):
            if not isinstance(node, dict) or part not in node:
                self.missing.append(dotted)
                return default
            node = node[part]
        return node

    def per_unit(self, dotted: str) -> MappingProxyType[Unit, float]:
        return MappingProxyType(
            {unit: float(self.get(f"{dotted}.{unit.value}", 0.0)) for unit in Unit}
        )

    def range(self, dotted: str) -> Range:
        return Range(
            min=float(self.get(f"{dotted}.min", 0.0)),
            max=float(self.get(f"{dotted}.max", 0.0)),
        )


def load_settings(path: Path = _DATA_FILE) -> CalculatorSettings:
    """
    Load and validate a settings file.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the YAML is malformed or any required key is missing.
    """
    r = _Reader(_read_yaml(path))
    settings = CalculatorSettings(
        shaping=ShapingSettings(max_plausible_rows=int(r.get("shaping.max_plausible_rows", 0))),
        resize=ResizeSettings(
            rounding_tolerance=r.per_unit("resize.rounding_tolerance"),
            cylindrical_rounding_tolerance=r.per_unit("resize.cylindrical_rounding_tolerance"),
            ease_fit_tolerance=r.per_unit("resize.ease_fit_tolerance"),
            max_gauge_change=float(r.get("resize.max_gauge_change", 0.0)),
            max_taper_ratio_shift=float(r.get("resize.max_taper_ratio_shift", 0.0)),
            display_decimals=int(r.get("resize.display_decimals", 1)),
        ),
        hammer_sleeve=HammerSleeveSettings(
            shoulder_extension_cm=r.range("hammer_sleeve.shoulder_extension_cm"),
            upper_arm_width_cm=r.range("hammer_sleeve.upper_arm_width_cm"),
            armhole_depth_cm=r.range("hammer_sleeve.armhole_depth_cm"),
            extension_length_rows=int(r.get("hammer_sleeve.extension_length_rows", 0)),
        ),
    )
    if r.missing:
        raise ValueError(
            f"Settings file {path} is missing required keys:\n"
            + "\n".join(f"  • {key}" for key in r.missing)
        )
    return settings


# ── Module-level singleton ─────────────────────────────────────────────────────

_settings: CalculatorSettings = load_settings(Path(os.environ.get(_ENV_VAR, _DATA_FILE)))


def get_settings() -> CalculatorSettings:
    """Return the module-level settings singleton."""
    return _settings
