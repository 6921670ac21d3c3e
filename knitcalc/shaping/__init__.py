from knitcalc.shaping.calculator import (
    ShapingEvent,
    ShapingInput,
    ShapingResult,
    ShapingSchedule,
    ShapingStep,
    calculate_shaping,
    validate_shaping_input,
)

__all__ = [
    "ShapingEvent",
    "ShapingInput",
    "ShapingResult",
    "ShapingSchedule",
    "ShapingStep",
    "calculate_shaping",
    "validate_shaping_input",
]
