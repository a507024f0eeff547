"""
Unit tests for the feature page templates.

Run: pytest tests/test_module_templates.py -v
"""

import pytest

from module_templates import (
    DATA_INVALIDATOR,
    FEATURE_TEMPLATES,
    MODELING_MODULES,
    MODELING_OVERVIEW,
    modeling_module,
    template_for_path,
)

SLUGS = [
    "fast-pick-analysis", "affinity-analysis", "solution-selector", "storage-sizing",
    "pick-and-pass", "pallet-ant", "pick-to-amr", "amr-put-wall",
    "pick-path-generator", "layer-gantry",
]


class TestModelingModules:
    def test_ten_modules_in_order(self):
        assert [m.slug for m in MODELING_MODULES] == SLUGS

    @pytest.mark.parametrize("slug", SLUGS)
    def test_every_module_has_content(self, slug):
        """Each module page needs a name and a description of what it does."""
        module = modeling_module(slug)

        assert module is not None
        assert module.name
        assert module.template.what_it_does

    def test_unknown_slug(self):
        assert modeling_module("nope") is None


class TestTemplateForPath:
    """Tests for template_for_path()"""

    def test_feature_paths(self):
        assert template_for_path("/data-invalidator") is DATA_INVALIDATOR
        assert template_for_path("/modeling") is MODELING_OVERVIEW

    def test_modeling_sub_path(self):
        assert template_for_path("/modeling/pallet-ant") is modeling_module("pallet-ant").template

    @pytest.mark.parametrize("path", ["/modeling/nope", "/route-distance", "/ops/command-center"])
    def test_non_template_paths(self, path):
        assert template_for_path(path) is None

    def test_status_labels(self):
        """Only the data invalidator is past the coming-soon stage."""
        labels = {path: t.status_label for path, t in FEATURE_TEMPLATES.items()}

        assert labels.pop("/data-invalidator") == "In Development"
        assert set(labels.values()) == {"Coming Soon"}
