from .render import Engine, render_string
from .expressions import ExpressionDictionary
from .loader import (
    Document,
    TemplateLoader,
    parse_document,
    parse_fragment,
    rewrite_wrapper_tags,
    serialize,
)
from .handlers import HANDLERS, Handler, Scope
