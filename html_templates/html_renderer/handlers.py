"""
Directive handlers.

Each handler owns one base attribute name and is run when a node carries a
stack under that name. Handlers may rebind the scope, insert siblings or
children, and return True to have the node removed. The order in which they
run is part of the configuration (RenderConfig.handlers).
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..templating import (
    extract_attribute_stacks,
    parse_array_literal,
    resolve_selector,
    to_text,
)
from ..templating.resolver import is_empty, is_pure_list
from .tree_utils import clone_before, remove_node, set_text

logger = logging.getLogger(__name__)

_IN_SCOPE = object()


@dataclass
class Scope:
    """Data in scope at one node. Handlers rebind it for the node and its children."""

    global_data: Any
    local_data: Any
    processed: list = field(default_factory=list)  # children already walked


class Handler:
    attribute = None

    def __init__(self, engine):
        self.engine = engine

    def resolve(self, selector, scope, local_data=_IN_SCOPE):
        if local_data is _IN_SCOPE:
            local_data = scope.local_data
        return resolve_selector(
            selector, scope.global_data, local_data, self.engine.config
        )

    def process(self, node, stacks, scope, stack) -> bool:
        raise NotImplementedError


class NestingHandler(Handler):
    """
    Bind the assigned data as local data of the node and its children.

    <div :="user" :text="name"></div> is the same as <div :text="user/name"></div>
    <div :="one" ::="two"></div> is the same as <div :="one/two"></div>
    """

    attribute = ""

    def process(self, node, stacks, scope, stack):
        for _, selector in sorted(stack.items()):
            scope.local_data = self.resolve(selector, scope)
        return False


class ForeachHandler(Handler):
    """
    Repeat the node for each item of an array.

    <li :foreach="products"></li>
    <li foreach='["a", "b"]'></li>
    <li :foreach="groups" ::foreach="members"></li>
    """

    attribute = "foreach"

    def collect_items(self, stack, scope):
        items = [scope.local_data]
        for level, value in sorted(stack.items()):
            # Level 0 is a JSON literal replacing the inherited data.
            if level == 0:
                items = parse_array_literal(value)
                continue

            # Go one level deeper in every item that has an array there.
            deeper = []
            for item in items:
                array = self.resolve(value, scope, local_data=item)
                if is_pure_list(array):
                    deeper.extend(array)
                elif isinstance(array, Mapping):
                    deeper.extend(array.values())
                else:
                    deeper.append(item)
            items = deeper
        return items

    def process(self, node, stacks, scope, stack):
        items = self.collect_items(stack, scope)
        logger.debug(f"Repeating <{node.tag}> {len(items)} times")

        # Each copy is inserted before it is processed, so nested appends
        # and wrappers see it attached to the tree.
        for item in items:
            copy = clone_before(node)
            if self.engine.process_node(copy, stacks, scope.global_data, item):
                remove_node(copy)

        return True


class ConditionHandler(Handler):
    """
    Keep or remove the node depending on a condition.

    Every level is one condition and all of them must agree with the mode.
    A level-0 value is compared against the data of the other levels;
    without one, the data must be non-empty.
    """

    mode = True

    def process(self, node, stacks, scope, stack):
        levels = sorted(stack.items())
        compare_to = None
        if len(levels) > 1 and levels[0][0] == 0:
            compare_to = levels.pop(0)[1]

        for _, selector in levels:
            data = self.resolve(selector, scope)
            if compare_to is not None:
                condition_met = to_text(data) == compare_to
            else:
                condition_met = not is_empty(data)
            if condition_met is not self.mode:
                return True
        return False


class WithHandler(ConditionHandler):
    """<div :with="login" ::with="admin">Special rights granted</div>"""

    attribute = "with"
    mode = True


class WithoutHandler(ConditionHandler):
    """<div :without="login">Not logged in</div>"""

    attribute = "without"
    mode = False


class ExportHandler(Handler):
    """
    Make the local data available globally, for the node and its children.

    <li :foreach="users" :as="user"><span :text="/user/name"></span></li>
    """

    attribute = "as"

    def process(self, node, stacks, scope, stack):
        for _, name in sorted(stack.items()):
            if not isinstance(scope.global_data, Mapping):
                logger.warning(f"Cannot export '{name}': global data is not a mapping")
                continue
            scope.global_data = {**scope.global_data, name: scope.local_data}
        return False


class TextHandler(Handler):
    """
    Process the value like a regular attribute but set it as text.

    <p :text="age">I am %d years old</p>
    """

    def __init__(self, engine):
        super().__init__(engine)
        self.attribute = engine.config.text_attribute

    def process(self, node, stacks, scope, stack):
        value = self.engine.process_value(stack, self.attribute, scope)
        if (len(node) == 0 and not node.text) or 0 in stack:
            set_text(node, to_text(value))
        return False


class AppendHandler(Handler):
    """
    Append the root element of another template to the node.

    <div append="sidebar.html"></div>
    <div append="%s.html" :append="widget"></div>
    """

    attribute = "append"

    def process(self, node, stacks, scope, stack):
        name = to_text(self.engine.process_value(stack, self.attribute, scope))
        with self.engine.including(name):
            markup = self.engine.loader.load_fragment_text(name)
            if not markup.strip():
                return False

            before = list(node)
            child = self.engine.loader.parse_fragment(markup)
            node.append(child)

            # Attach before processing: a wrapper root splices its children
            # into the node and needs a parent for that.
            child_stacks = extract_attribute_stacks(child, self.engine.config)
            if self.engine.process_node(
                child, child_stacks, scope.global_data, scope.local_data
            ):
                remove_node(child)

        scope.processed.extend(c for c in node if not any(c is b for b in before))
        return False


HANDLERS = {
    "nest": NestingHandler,
    "foreach": ForeachHandler,
    "with": WithHandler,
    "without": WithoutHandler,
    "as": ExportHandler,
    "text": TextHandler,
    "append": AppendHandler,
}


def build_handlers(engine, names):
    """Instantiate the handlers listed in *names*, keeping their order."""
    handlers = []
    for name in names:
        if name not in HANDLERS:
            raise ValueError(
                f"Unknown handler '{name}', expected one of: {', '.join(HANDLERS)}"
            )
        handlers.append(HANDLERS[name](engine))
    return handlers
