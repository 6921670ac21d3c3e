"""resizer: gauge-based pattern resizing over the template catalog."""

from knitcalc.resizer.resizer import ResizeError, build_shape, calculate_resize
from knitcalc.resizer.templates import (
    ResizerTemplate,
    TemplateField,
    TemplateRegistry,
    get_template,
    get_template_registry,
    list_templates,
    templates_supporting_shaping,
)
from knitcalc.resizer.validation import gauge_from_fields, parse_number, validate_fields

__all__ = [
    "ResizeError",
    "build_shape",
    "calculate_resize",
    "ResizerTemplate",
    "TemplateField",
    "TemplateRegistry",
    "get_template",
    "get_template_registry",
    "list_templates",
    "templates_supporting_shaping",
    "gauge_from_fields",
    "parse_number",
    "validate_fields",
]
