"""
Public entry points taking raw mappings, as a web form or JSON body sends them.

Every function here returns a result object and never raises for bad input.
"""

from knitcalc.api.hammer_sleeve import calculate_hammer_sleeve_from_fields
from knitcalc.api.resize import resize_pattern
from knitcalc.api.shaping import calculate_shaping_from_fields

__all__ = [
    "calculate_hammer_sleeve_from_fields",
    "calculate_shaping_from_fields",
    "resize_pattern",
]
