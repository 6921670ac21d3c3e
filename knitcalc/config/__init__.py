from knitcalc.config.settings import (
    CalculatorSettings,
    HammerSleeveSettings,
    Range,
    ResizeSettings,
    ShapingSettings,
    get_settings,
    load_settings,
)

__all__ = [
    "CalculatorSettings",
    "HammerSleeveSettings",
    "Range",
    "ResizeSettings",
    "ShapingSettings",
    "get_settings",
    "load_settings",
]
