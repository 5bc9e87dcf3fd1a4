from collections.abc import Mapping

from ..config import DEFAULT_CONFIG


def is_scalar(value):
    """Return True for strings, numbers and booleans."""
    return isinstance(value, (str, int, float, bool))


def is_pure_list(value):
    """Return True for ordered lists without named keys."""
    return isinstance(value, (list, tuple))


def is_formattable(value):
    """Return True for structured objects that format themselves (dates, times)."""
    return hasattr(value, "strftime")


def is_container(value):
    return isinstance(value, Mapping) or is_pure_list(value)


def is_empty(value):
    """Return True for absent, false, zero and empty values, including "0"."""
    return not value or value == "0"


def get_item(container, key):
    """
    Look up one key in a mapping or list.

    Args:
      container: A mapping, or a list indexed by a decimal key.
      key (str): The segment to look up.

    Returns:
      The value, or None if the key is missing.
    """
    if isinstance(container, Mapping):
        return container.get(key)
    if key.isdigit() and int(key) < len(container):
        return container[int(key)]
    return None


def resolve_selector(selector, global_data, local_data, config=DEFAULT_CONFIG):
    """
    Resolve a selector such as "user/name", "/settings/locale" or "first,last".

    An empty selector returns the local data itself. A leading nesting separator
    starts from the global data instead of the local data. A listing separator
    resolves every part independently and returns the results as a list.

    Returns:
      The resolved value, or None if nothing was found.
    """
    if selector == "":
        return local_data

    if config.listing_separator and config.listing_separator in selector:
        return [
            resolve_selector(part, global_data, local_data, config)
            for part in selector.split(config.listing_separator)
        ]

    segments = selector.split(config.nesting_separator)
    if segments[0] == "":
        segments = segments[1:]
        data = global_data
    else:
        data = local_data

    for name in segments:
        # Leading, trailing or doubled separators leave empty segments.
        if name == "":
            continue
        if not is_container(data):
            return None
        data = get_item(data, name)
        if data is None:
            return None
    return data
