"""
Pattern-component adapter for the hammer-sleeve calculator.

A pattern component is a plain mapping such as::

    {
        "componentKey": "sleeve_left",
        "attributes": {
            "construction_method": "hammer_sleeve",
            "total_shoulder_width_cm": 45,
            "upper_arm_width_cm": 32,
            "armhole_depth_cm": 20,
            "neckline_width_cm": 25,
        },
    }
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from knitcalc.resizer.validation import parse_number
from knitcalc.schemas.hammer_sleeve import DEFAULT_COMPONENT_KEY, HammerSleeveInput
from knitcalc.utilities.types import Gauge, Length, Unit

logger = logging.getLogger(__name__)

CONSTRUCTION_METHOD = "hammer_sleeve"

_DIMENSION_KEYS = (
    ("total_shoulder_width", "total_shoulder_width_cm"),
    ("upper_arm_width", "upper_arm_width_cm"),
    ("armhole_depth", "armhole_depth_cm"),
    ("neckline_width", "neckline_width_cm"),
)


def _attributes(component: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not isinstance(component, Mapping):
        return {}
    attributes = component.get("attributes")
    return attributes if isinstance(attributes, Mapping) else {}


def component_requires_hammer_sleeve(component: Mapping[str, Any] | None) -> bool:
    """True when the component is built with hammer-sleeve construction."""
    return _attributes(component).get("construction_method") == CONSTRUCTION_METHOD


def extract_hammer_sleeve_input(
    component: Mapping[str, Any] | None,
    gauge: Gauge,
) -> HammerSleeveInput | None:
    """
    Build a HammerSleeveInput from a component's attributes.

    Returns None when the component is not a hammer sleeve, or when any of
    the four measurements is missing or not a positive number (logged).
    """
    if component is None or not component_requires_hammer_sleeve(component):
        return None
    attributes = _attributes(component)

    dimensions: dict[str, Length] = {}
    missing: list[str] = []
    for name, key in _DIMENSION_KEYS:
        value = parse_number(attributes.get(key))
        if value is None or value <= 0:
            missing.append(key)
        else:
            dimensions[name] = Length(value, Unit.CM)
    if missing:
        logger.warning(
            "Missing required hammer sleeve dimensions for %s: %s",
            component.get("componentKey", DEFAULT_COMPONENT_KEY),
            ", ".join(missing),
        )
        return None

    return HammerSleeveInput(
        gauge=gauge,
        component_key=component.get("componentKey") or DEFAULT_COMPONENT_KEY,
        **dimensions,
    )
