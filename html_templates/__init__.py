from .config import RenderConfig, load_config
from .html_renderer import Engine, ExpressionDictionary, TemplateLoader, render_string
from .templating.exceptions import (
    TemplateException,
    BadExpressionException,
    FragmentStructureException,
    TemplateNotFoundException,
    RecursionLimitException,
)
