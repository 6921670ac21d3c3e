"""hammer_sleeve: matching sleeve-cap and body-cutout counts."""

from knitcalc.hammer_sleeve.calculator import (
    calculate_hammer_sleeve,
    check_join,
    shoulder_extension_width,
    validate_hammer_sleeve_input,
)
from knitcalc.hammer_sleeve.extraction import (
    component_requires_hammer_sleeve,
    extract_hammer_sleeve_input,
)

__all__ = [
    "calculate_hammer_sleeve",
    "check_join",
    "shoulder_extension_width",
    "validate_hammer_sleeve_input",
    "component_requires_hammer_sleeve",
    "extract_hammer_sleeve_input",
]
