"""
The template engine: walks a parsed template, runs the directive handlers on
every element and serializes the result.

Processing a node (the order matters):
  1. handlers run in configured order; any of them may ask for removal
  2. stacks no handler consumed become plain attributes
  3. children are processed, removals are applied after the loop
  4. a wrapper element hands its children to its parent and disappears
"""

import logging
from contextlib import contextmanager

from ..config import RenderConfig
from ..templating import extract_attribute_stacks, process_value, to_text
from ..templating.exceptions import RecursionLimitException
from .expressions import ExpressionDictionary
from .handlers import Scope, build_handlers
from .loader import TemplateLoader, serialize
from .tree_utils import is_element, remove_node, unwrap_node

logger = logging.getLogger(__name__)


class Engine:
    """
    Renders HTML templates annotated with marker attributes.

    Args:
      config: RenderConfig; defaults are used if omitted.
      expressions: ExpressionDictionary with named format strings.
      loader: Object providing load_document(), load_fragment_text(),
        parse_document() and parse_fragment(); defaults to a
        TemplateLoader on config.template_folder.
    """

    def __init__(self, config=None, expressions=None, loader=None):
        self.config = config or RenderConfig()
        self.expressions = expressions or ExpressionDictionary()
        self.loader = loader or TemplateLoader(
            self.config.template_folder, self.config
        )
        self.handlers = build_handlers(self, self.config.handlers)
        self._includes = []

    def load_expression_file(self, path):
        self.expressions = self.expressions.merged(
            ExpressionDictionary.from_file(path)
        )

    def render(self, name, data=None) -> str:
        """Render the template file *name* with *data* as global and local data."""
        return self.render_document(self.loader.load_document(name), data)

    def render_string(self, markup, data=None) -> str:
        """Render template markup given as a string."""
        return self.render_document(self.loader.parse_document(markup), data)

    def render_document(self, document, data=None) -> str:
        data = {} if data is None else data
        self._includes = []
        self.process_children(document.root, data, data)
        return serialize(document)

    @contextmanager
    def including(self, name):
        """Track nested fragment inclusion and stop runaway recursion."""
        self._includes.append(name)
        try:
            if len(self._includes) > self.config.max_include_depth:
                raise RecursionLimitException(self._includes)
            logger.debug(f"Including fragment {name} (depth {len(self._includes)})")
            yield
        finally:
            self._includes.pop()

    def process_value(self, stack, default_selector, scope):
        return process_value(
            stack,
            default_selector,
            scope.global_data,
            scope.local_data,
            self.expressions,
            self.config,
        )

    def process_children(self, node, global_data, local_data, skip=()):
        """
        Process all children of *node*.

        Removal waits until every child has been processed: nodes inserted by
        handlers land before the current child, and the snapshot keeps them
        out of this loop.
        """
        remove = []
        for child in list(node):
            if any(child is s for s in skip) or not is_element(child):
                continue
            stacks = extract_attribute_stacks(child, self.config)
            if self.process_node(child, stacks, global_data, local_data):
                remove.append(child)

        for child in remove:
            remove_node(child)

    def process_node(self, node, stacks, global_data, local_data) -> bool:
        """
        Process *node* with its extracted attribute *stacks*.

        Returns:
          bool: True if the caller should remove the node.
        """
        if not is_element(node):
            return False

        stacks = dict(stacks)
        scope = Scope(global_data, local_data)

        for handler in self.handlers:
            stack = stacks.pop(handler.attribute, None)
            if stack is None:
                continue
            if handler.process(node, stacks, scope, stack):
                return True

        for name, stack in stacks.items():
            if not name:
                continue
            value = self.process_value(stack, name, scope)
            if value is not None:
                node.set(name, to_text(value))

        self.process_children(
            node, scope.global_data, scope.local_data, skip=scope.processed
        )

        if node.tag == self.config.wrapper:
            unwrap_node(node)
            return True

        return False


def render_string(markup, data=None, **config) -> str:
    """Render *markup* with a default engine; keyword arguments configure it."""
    return Engine(RenderConfig(**config)).render_string(markup, data)
