"""
Core value processing.

An attribute stack is processed level by level: level 0 seeds the value with a
literal expression, every higher level assigns data from a selector and
formats the current expression with it. After each level the value may be
substituted by an entry from the expression dictionary. A result of None
means the attribute (or text) should be dropped.
"""

from ..config import DEFAULT_CONFIG
from .formatting import evaluate
from .resolver import (
    is_formattable,
    is_pure_list,
    is_scalar,
    resolve_selector,
)


def process_assignment(
    template,
    selector,
    default_selector,
    global_data,
    local_data,
    config=DEFAULT_CONFIG,
):
    """
    Combine the current template with the data assigned by *selector*.

    Without a selector, the default selector (usually the attribute's own
    name) is tried, and failing that the local data itself when it is a
    scalar, a list or a date-like object.
    """
    if selector != "":
        datum = resolve_selector(selector, global_data, local_data, config)
    else:
        datum = resolve_selector(default_selector, global_data, local_data, config)
        if datum is None and (
            is_scalar(local_data)
            or is_pure_list(local_data)
            or is_formattable(local_data)
        ):
            datum = local_data

    if datum is not None and template is not None and template != "":
        return evaluate(template, datum)

    # Valueless attributes such as "readonly": False drops them.
    if is_scalar(datum) and datum is not False:
        return datum

    return None


def process_value(
    stack,
    default_selector,
    global_data,
    local_data,
    expressions=None,
    config=DEFAULT_CONFIG,
):
    """
    Process an attribute stack into its final value.

    Args:
      stack (dict): level -> raw value.
      default_selector (str): Selector used by levels with an empty value.
      global_data: The top-level data context.
      local_data: The data context in scope at the node.
      expressions: Optional ExpressionDictionary for substitutions.
      config: RenderConfig providing the selector separators.

    Returns:
      The value, or None if it should be dropped.
    """
    value = None
    for level, selector in sorted(stack.items()):
        if level == 0:
            value = selector
        else:
            value = process_assignment(
                value, selector, default_selector, global_data, local_data, config
            )

        if value is not None and expressions is not None:
            value = expressions.lookup(value)

    return value
