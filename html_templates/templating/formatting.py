"""
Formatting of resolved data into display strings.

Templates use printf-style placeholders ("%s", "%05.2f", "%2$s", ...). A list
fills the placeholders positionally, a single scalar fills the first one and
date-like objects are formatted with strftime after converting the template's
date tokens.
"""

import re

from .exceptions import BadExpressionException
from .resolver import is_formattable, is_pure_list, is_scalar

PLACEHOLDER_PATTERN = re.compile(
    r"%(?:(?P<argnum>[1-9]\d*)\$)?"
    r"(?P<flags>[-+ #0]*)"
    r"(?P<width>\d+)?"
    r"(?:\.(?P<precision>\d+))?"
    r"(?P<conversion>[%bcdeEfFgGiosuxX])"
)

INTEGER_CONVERSIONS = "bcdiouxX"
FLOAT_CONVERSIONS = "eEfFgG"


def convert_format(custom_format):
    """
    Convert a custom date format string into a Python strftime format.

    Custom tokens:
      - MMMM : Full month name (e.g., January)  -> %B
      - MMM  : Abbreviated month name (e.g., Jan) -> %b
      - MM   : Zero-padded month number         -> %m
      - YYYY : 4-digit year                     -> %Y
      - YY   : 2-digit year                     -> %y
      - dd   : Zero-padded day of month         -> %d
      - DD   : Full weekday name                -> %A
      - ddd  : Abbreviated weekday name         -> %a
      - HH   : 24-hour clock hour               -> %H
      - hh   : 12-hour clock hour               -> %I
      - mm   : Minute                           -> %M
      - ss   : Second                           -> %S

    Plain strftime directives ("%Y-%m-%d") pass through untouched.
    """
    mapping = {
        "MMMM": "%B",
        "MMM": "%b",
        "MM": "%m",
        "YYYY": "%Y",
        "YY": "%y",
        "ddd": "%a",
        "dd": "%d",
        "DD": "%A",
        "HH": "%H",
        "hh": "%I",
        "mm": "%M",
        "ss": "%S",
    }
    pattern = re.compile(
        "%.|" + "|".join(sorted(mapping, key=lambda token: -len(token)))
    )
    return pattern.sub(lambda m: mapping.get(m.group(0), m.group(0)), custom_format)


def to_text(value):
    """Render a value as attribute or text content."""
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


def _coerce(value, conversion):
    if conversion in INTEGER_CONVERSIONS:
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return 0
    if conversion in FLOAT_CONVERSIONS:
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0
    return to_text(value)


def sprintf(template, args):
    """
    Fill the printf-style placeholders of *template* from *args*.

    Arguments are consumed in order unless a placeholder names its position
    ("%2$s"). Surplus arguments are ignored.

    Raises:
      BadExpressionException: if a placeholder has no matching argument.
    """
    args = list(args)
    position = 0

    def replace(match):
        nonlocal position
        conversion = match.group("conversion")
        if conversion == "%":
            return "%"

        if match.group("argnum"):
            index = int(match.group("argnum")) - 1
        else:
            index = position
            position += 1
        if index >= len(args):
            raise BadExpressionException(
                f"Too few arguments for '{template}': {len(args)} given."
            )

        value = _coerce(args[index], conversion)
        spec = "%" + match.group("flags") + (match.group("width") or "")
        if match.group("precision") is not None:
            spec += "." + match.group("precision")

        if conversion == "b":
            return format(value, "b").rjust(int(match.group("width") or 0))
        if conversion == "c":
            try:
                return chr(value)
            except (ValueError, OverflowError):
                raise BadExpressionException(
                    f"No character for {value} in '{template}'."
                )
        if conversion == "u":
            conversion = "d"
        return (spec + conversion) % value

    return PLACEHOLDER_PATTERN.sub(replace, template)


def evaluate(template, datum):
    """
    Format *template* with *datum*.

    Returns:
      The formatted string, or None if the datum is not applicable
      (a mapping, or the scalar False).
    """
    template = to_text(template)
    if is_formattable(datum):
        try:
            return datum.strftime(convert_format(template))
        except (TypeError, ValueError) as e:
            raise BadExpressionException(f"Bad date format '{template}': {e}.")
    if is_pure_list(datum):
        return sprintf(template, datum)
    if is_scalar(datum) and datum is not False:
        return sprintf(template, [datum])
    return None
