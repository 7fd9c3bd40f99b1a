"""
Test settings loading and form option resolution.
"""

# Standard library imports
import dataclasses
import sys
from pathlib import Path

# Third-party imports
import pytest

# Local imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from lineplot.config import (
    Settings,
    build_settings,
    clear_config_cache,
    get_settings,
    load_settings,
    resolve_form_options,
)
from lineplot.config.core import DEFAULT_FORM_FIELDS, _config_cache
from lineplot.errors import LinePlotError
from lineplot.logging.error_codes import ErrorCode


class TestLoadSettings:
    """Test load_settings / get_settings."""

    @pytest.mark.unit
    def test_project_settings_file(self):
        settings = get_settings()
        assert settings.display.width == 2400
        assert settings.display.height == 500
        assert settings.display.title == "unamed line chart"
        assert settings.max_upload_bytes == 20 * 1024 * 1024
        assert settings.page_title == "Line Charts"
        assert settings.output_dir.is_absolute()

    @pytest.mark.unit
    def test_settings_are_cached(self):
        first = load_settings()
        assert load_settings() is first
        clear_config_cache()
        assert 'settings' not in _config_cache

    @pytest.mark.unit
    def test_missing_file_uses_defaults(self, tmp_path):
        settings = get_settings(tmp_path / 'nope.yaml')
        assert settings.display.width == 2400
        assert settings.form_defaults['c1x'] == 'true'

    @pytest.mark.unit
    def test_overrides(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text(
            "display:\n  width: 1200\n"
            "directories:\n  output: /srv/charts\n"
            "web:\n  max_upload_bytes: 1024\n  form_defaults:\n    smooth: 'true'\n"
        )
        settings = get_settings(path)
        assert settings.display.width == 1200
        assert settings.display.height == 500
        assert settings.output_dir == Path('/srv/charts')
        assert settings.max_upload_bytes == 1024
        assert settings.form_defaults['smooth'] == 'true'
        assert settings.form_defaults['xaxis'] == 'x'

    @pytest.mark.unit
    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text("display: [unclosed\n")
        with pytest.raises(LinePlotError) as exc_info:
            get_settings(path)
        assert exc_info.value.error_code == ErrorCode.CONFIG_LOAD_ERROR

    @pytest.mark.unit
    def test_invalid_value(self):
        with pytest.raises(LinePlotError) as exc_info:
            build_settings({'display': {'width': 'wide'}})
        assert exc_info.value.error_code == ErrorCode.CONFIG_INVALID

    @pytest.mark.unit
    def test_default_instance(self):
        """Settings built without arguments carry the built-in form defaults."""
        first, second = Settings(), Settings()
        assert first.form_defaults == DEFAULT_FORM_FIELDS
        assert first.form_defaults['xaxis'] == 'x'
        assert first == second
        with pytest.raises(TypeError):
            first.form_defaults['xaxis'] = 'time'

    @pytest.mark.unit
    def test_settings_immutable(self):
        settings = get_settings()
        with pytest.raises(dataclasses.FrozenInstanceError):
            settings.port = 1
        with pytest.raises(TypeError):
            settings.form_defaults['c1x'] = 'false'


class TestResolveFormOptions:
    """Test resolve_form_options."""

    @pytest.mark.unit
    def test_all_absent(self):
        options = resolve_form_options({})
        assert (options.x_title, options.y_title) == ("x", "y")
        assert options.c1x is True
        assert options.r1h is True
        assert options.smooth is False

    @pytest.mark.unit
    def test_blank_fields_take_defaults(self):
        options = resolve_form_options({'xaxis': '   ', 'c1x': '', 'smooth': None})
        assert options.x_title == "x"
        assert options.c1x is True
        assert options.smooth is False

    @pytest.mark.unit
    def test_values_trimmed(self):
        options = resolve_form_options({'xaxis': ' time ', 'yaxis': 'load', 'smooth': ' TRUE '})
        assert options.x_title == "time"
        assert options.y_title == "load"
        assert options.smooth is True

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [
        ("true", True), ("True", True), ("TRUE", True),
        ("false", False), ("yes", False), ("1", False), ("tRuE", False),
    ])
    def test_boolean_spellings(self, value, expected):
        assert resolve_form_options({'r1h': value}).r1h is expected

    @pytest.mark.unit
    def test_missing_default(self):
        with pytest.raises(KeyError):
            resolve_form_options({}, defaults={'xaxis': 'x'})
