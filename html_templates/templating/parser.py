import json
import logging
from collections.abc import Mapping

from ..config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)


def split_attribute_name(name, marker=":"):
    """
    Split a raw attribute name into (level, base name).

    e.g. "class" -> (0, "class"), ":class" -> (1, "class"), "::" -> (2, "")
    """
    level = 0
    while name.startswith(marker, level * len(marker)):
        level += 1
    return level, name[level * len(marker):]


def extract_attribute_stacks(node, config=DEFAULT_CONFIG):
    """
    Group the attributes of *node* into stacks and remove them from the node.

    Every attribute sharing a base name contributes one level to the stack of
    that name. An element holding nothing but text also gets a level-0 entry
    for the text attribute, so its content can act as an expression.

    Args:
      node: An lxml element.
      config: RenderConfig providing the marker and the text attribute name.

    Returns:
      dict: base name -> {level: raw value}
    """
    stacks = {}
    consumed = []
    for name, value in node.attrib.items():
        level, base_name = split_attribute_name(name, config.marker)
        stacks.setdefault(base_name, {})[level] = value or ""
        consumed.append(name)

    # Removing while iterating would disturb the attribute order.
    for name in consumed:
        del node.attrib[name]

    if len(node) == 0 and node.text:
        stacks.setdefault(config.text_attribute, {}).setdefault(0, node.text)

    return stacks


def parse_array_literal(value):
    """
    Parse a JSON array used as the source of a repetition.

    A JSON object yields its values. Anything that does not parse as an
    array or object yields an empty list.
    """
    try:
        items = json.loads(value)
    except ValueError as e:
        logger.warning(f"Ignoring repetition source {value!r}: {e}")
        return []

    if isinstance(items, list):
        return items
    if isinstance(items, Mapping):
        return list(items.values())

    logger.warning(f"Ignoring repetition source {value!r}: not an array")
    return []
