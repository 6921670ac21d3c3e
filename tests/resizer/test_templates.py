"""Tests for the resizer template catalog."""

import pytest
import yaml

from knitcalc.resizer.templates import (
    TemplateRegistry,
    get_template,
    get_template_registry,
    list_templates,
    templates_supporting_shaping,
)
from knitcalc.schemas.resize import ShapeFamily


def _entry(key="panel", family="rectangular"):
    return {
        "key": key,
        "display_name": key.title(),
        "family": family,
        "original_fields": [{"key": "original_cast_on", "label": "Cast on", "integer": True}],
        "new_fields": [{"key": "new_finished_width", "label": "Width"}],
    }


def _registry(tmp_path, entries):
    (tmp_path / "templates.yaml").write_text(yaml.safe_dump({"entries": entries}))
    return TemplateRegistry(tmp_path)


class TestBundledCatalog:
    def test_keys(self):
        assert list_templates() == [
            "simple_body_panel_rectangular",
            "simple_hat_cylindrical",
            "simple_scarf_rectangular",
            "simple_sleeve_tapered",
        ]

    def test_families(self):
        assert get_template("simple_scarf_rectangular").family is ShapeFamily.RECTANGULAR
        assert get_template("simple_sleeve_tapered").family is ShapeFamily.TAPERED
        assert get_template("simple_hat_cylindrical").family is ShapeFamily.CYLINDRICAL

    def test_supporting_shaping(self):
        assert [t.key for t in templates_supporting_shaping()] == ["simple_sleeve_tapered"]

    def test_integer_fields(self):
        template = get_template("simple_sleeve_tapered")
        assert all(f.integer for f in template.original_fields)
        assert not any(f.integer for f in template.new_fields)

    def test_outputs(self):
        assert "new_shaping_schedule_summary" in get_template("simple_sleeve_tapered").outputs

    def test_unknown_key(self):
        with pytest.raises(KeyError, match="Unknown template: 'nope'"):
            get_template("nope")

    def test_singleton(self):
        assert get_template_registry() is get_template_registry()

    def test_read_only(self):
        with pytest.raises(TypeError):
            get_template_registry().templates["x"] = None  # type: ignore[index]


class TestCustomCatalog:
    def test_loads_entries(self, tmp_path):
        registry = _registry(tmp_path, [_entry()])
        template = registry.get("panel")
        assert template.display_name == "Panel"
        assert template.supports_shaping is False
        assert template.original_fields[0].required is True
        assert template.original_fields[0].integer is True

    def test_unknown_family(self, tmp_path):
        with pytest.raises(ValueError, match="unknown family 'conical'"):
            _registry(tmp_path, [_entry(family="conical")])

    def test_duplicate_key(self, tmp_path):
        with pytest.raises(ValueError, match="Duplicate template key 'panel'"):
            _registry(tmp_path, [_entry(), _entry()])

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Template catalog not found"):
            TemplateRegistry(tmp_path)

    def test_malformed_yaml(self, tmp_path):
        (tmp_path / "templates.yaml").write_text("entries: [\n")
        with pytest.raises(ValueError, match="Failed to parse template catalog"):
            TemplateRegistry(tmp_path)
