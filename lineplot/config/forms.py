"""
Upload form option resolution.

Turns the raw, optional text fields of an upload form into typed options.
Kept free of any web framework so it can be tested on plain dictionaries.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from .core import DEFAULT_FORM_FIELDS

# Only these spellings enable a toggle
_TRUE_VALUES = frozenset({'true', 'True', 'TRUE'})


@dataclass(frozen=True)
class FormOptions:
    """Resolved upload form options shared by every file of one request."""
    x_title: str
    y_title: str
    c1x: bool
    r1h: bool
    smooth: bool


def parse_bool(value: str) -> bool:
    """Interpret a form value as a boolean toggle."""
    return value.strip() in _TRUE_VALUES


def _field(fields: Mapping[str, Optional[str]], defaults: Mapping[str, str], key: str) -> str:
    value = (fields.get(key) or '').strip()
    if value:
        return value
    default = defaults.get(key, '')
    if not default:
        raise KeyError(f"No default defined for form field '{key}'")
    return default


def resolve_form_options(
    fields: Mapping[str, Optional[str]],
    defaults: Mapping[str, str] = DEFAULT_FORM_FIELDS,
) -> FormOptions:
    """
    Resolve raw form fields against the defaults table.

    Blank or absent fields take their default.

    Args:
        fields: Raw form fields (xaxis, yaxis, c1x, r1h, smooth)
        defaults: Defaults table keyed by the same field names

    Returns:
        FormOptions

    Raises:
        KeyError: If a field is blank and the table has no default for it
    """
    return FormOptions(
        x_title=_field(fields, defaults, 'xaxis'),
        y_title=_field(fields, defaults, 'yaxis'),
        c1x=parse_bool(_field(fields, defaults, 'c1x')),
        r1h=parse_bool(_field(fields, defaults, 'r1h')),
        smooth=parse_bool(_field(fields, defaults, 'smooth')),
    )
