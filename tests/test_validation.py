"""Tests for appliance parameter validation and probe temperature helpers."""

import pytest

from recipe_ingestion.appliances import get_method, list_methods, resolve_family
from recipe_ingestion.models.appliance import ApplianceFamily
from recipe_ingestion.services.validation import (
    clamp_remove_temp,
    default_parameters,
    default_remove_temp,
    should_show_remove_temp,
    validate,
    validate_parameters,
    validate_probe_temps,
)


class TestMethodLookup:

    @pytest.mark.parametrize("family", ["oven", "CQ50", "minioven", ApplianceFamily.OVEN])
    def test_oven_aliases(self, family):
        assert resolve_family(family) == ApplianceFamily.OVEN

    def test_unknown_family(self):
        assert resolve_family("toaster") is None
        assert get_method("toaster", "bake") is None

    @pytest.mark.parametrize("method_id", ["air_fry", "AIR_FRY", "METHOD_AIR_FRY"])
    def test_oven_method_ids(self, method_id):
        assert get_method("oven", method_id).id == "air_fry"

    @pytest.mark.parametrize("method_id", [0, "0", "pressure_cook", "pressure"])
    def test_cooker_pressure_ids(self, method_id):
        assert get_method("rj40", method_id).id == "pressure_cook"

    def test_cooker_numeric_ids(self):
        assert get_method("cooker", 1).id == "sear_saute"
        assert get_method("cooker", "16").id == "ferment"
        assert get_method("cooker", 4) is None

    def test_every_family_has_methods(self):
        assert len(list_methods("oven")) == 11
        assert len(list_methods("cooker")) == 8
        assert list_methods("nope") == []


class TestValidateRanges:

    @pytest.mark.parametrize("value", ["", None, "   "])
    def test_blank_is_always_valid(self, value):
        assert validate("oven", "bake", "target_probe_temp", value, {}) is None
        assert validate("cooker", "pressure_cook", "cooking_time", value, {}) is None

    def test_probe_temp_above_max(self):
        assert validate("oven", "bake", "target_probe_temp", 310, {}) == "Probe temperature must not exceed 300°F"

    def test_probe_temp_below_min(self):
        assert validate("oven", "roast", "target_probe_temp", "90", {}) == "Probe temperature must be at least 100°F"

    def test_cooking_time_messages_in_minutes(self):
        assert validate("oven", "air_fry", "cooking_time", 30, {}) == "Cooking time must be at least 1 minutes"
        assert validate("oven", "air_fry", "cooking_time", 3600, {}) == "Cooking time must not exceed 59 minutes"
        assert validate("oven", "air_fry", "cooking_time", "600", {}) is None

    def test_cavity_temperature(self):
        assert validate("oven", "air_fry", "target_cavity_temp", 250, {}) == "Temperature must be at least 300°F"
        assert validate("oven", "bake", "target_cavity_temp", 550, {}) == "Temperature must not exceed 500°F"
        assert validate("oven", "bake", "target_cavity_temp", "350°F", {}) is None

    def test_cooker_temperature(self):
        assert validate("cooker", "sous_vide", "cooking_temp", 100, {}) == "Temperature must be at least 110°F"
        assert validate("cooker", "ferment", "cooking_temp", 120, {}) == "Temperature must not exceed 110°F"

    def test_non_numeric(self):
        assert validate("oven", "bake", "cooking_time", "soon", {}) == "Cooking time must be a number"
        assert validate("oven", "bake", "target_cavity_temp", "hot", {}) == "Temperature must be a number"

    def test_unknown_method_or_key_is_not_validated(self):
        assert validate("oven", "teleport", "cooking_time", -1, {}) is None
        assert validate("oven", "bake", "pres_level", 99, {}) is None
        # toast has no probe
        assert validate("oven", "toast", "target_probe_temp", 999, {}) is None


class TestValidateOptions:

    def test_fan_speed_outside_method_options(self):
        error = validate("oven", "dehydrate", "fan_speed", 3, {})
        assert error.startswith("Fan speed must be one of:")
        assert validate("oven", "dehydrate", "fan_speed", "2", {}) is None

    def test_pressure_release(self):
        assert validate("cooker", "pressure_cook", "pres_release", 2, {}) is None
        assert "Pressure release must be one of" in validate("cooker", "pressure_cook", "pres_release", 5, {})

    def test_boolean_keep_warm(self):
        assert validate("cooker", "pressure_cook", "keep_warm", True, {}) is None
        assert validate("cooker", "pressure_cook", "keep_warm", False, {}) is None


class TestProbeCrossField:

    def test_remove_above_current_target(self):
        error = validate("oven", "roast", "remove_probe_temp", 160, {"target_probe_temp": 150})
        assert error == "Remove temperature must not exceed target temperature (150°F)"

    def test_target_below_current_remove(self):
        error = validate("oven", "roast", "target_probe_temp", 150, {"remove_probe_temp": 160})
        assert error == "Probe temperature must not be below remove temperature (160°F)"

    def test_remove_with_blank_target(self):
        assert validate("oven", "roast", "remove_probe_temp", 160, {"target_probe_temp": ""}) is None

    def test_joint_validation_reports_remove_field(self):
        errors = validate_probe_temps(150, 160)
        assert errors.target_error is None
        assert errors.remove_error == "Remove temperature must not exceed target temperature (150°F)"

    def test_joint_validation_both_fields(self):
        errors = validate_probe_temps(310, 90)
        assert errors.target_error == "Probe temperature must not exceed 300°F"
        assert errors.remove_error == "Remove temperature must be at least 100°F"

    def test_joint_validation_ok(self):
        assert validate_probe_temps(165, 160).ok
        assert validate_probe_temps("", "").ok

    def test_validate_parameters_collects_field_errors(self):
        errors = validate_parameters("oven", "METHOD_ROAST", {
            "target_cavity_temp": 600,
            "cooking_time": 1800,
            "target_probe_temp": 150,
            "remove_probe_temp": 160,
        })
        assert errors == {
            "target_cavity_temp": "Temperature must not exceed 500°F",
            "remove_probe_temp": "Remove temperature must not exceed target temperature (150°F)",
        }

    def test_validate_parameters_clean(self):
        assert validate_parameters("cooker", 0, {"cooking_time": 900, "pres_level": 1, "pres_release": 2}) == {}


class TestTemperatureHelpers:

    def test_default_remove_temp(self):
        assert default_remove_temp(165) == 160
        assert default_remove_temp(102) == 100

    def test_clamp_remove_temp(self):
        assert clamp_remove_temp(170, 165) == 165
        assert clamp_remove_temp(150, 165) == 150

    def test_should_show_remove_temp(self):
        assert should_show_remove_temp(155, 160) is True
        assert should_show_remove_temp(160, 160) is False
        assert should_show_remove_temp(None, 160) is False

    def test_default_parameters_for_probe_method(self):
        defaults = default_parameters("oven", "reheat")
        assert defaults["target_cavity_temp"] == 350
        assert defaults["cooking_time"] == 900
        assert defaults["target_probe_temp"] == 165
        assert defaults["remove_probe_temp"] == 160
        assert validate_parameters("oven", "reheat", defaults) == {}

    def test_default_parameters_for_cooker(self):
        assert default_parameters("cooker", "pressure_cook") == {
            "cooking_time": 900,
            "pres_level": 1,
            "pres_release": 0,
            "keep_warm": 1,
        }

    def test_default_parameters_unknown_method(self):
        assert default_parameters("oven", "nope") == {}
