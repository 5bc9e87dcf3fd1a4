class TemplateException(Exception):
    """Base class for errors that abort a render."""

    pass


class BadExpressionException(TemplateException):
    """Raised when an expression cannot be formatted with its data."""

    pass


class FragmentStructureException(TemplateException):
    """Raised when an appended fragment does not have exactly one root element."""

    pass


class TemplateNotFoundException(TemplateException):
    """Raised when a template name does not point to a readable file."""

    def __init__(self, name, reason="not found"):
        self.name = name
        super().__init__(f"Template '{name}' {reason}")


class RecursionLimitException(TemplateException):
    """Raised when fragment inclusion nests deeper than allowed."""

    def __init__(self, chain):
        self.chain = list(chain)
        super().__init__(
            "Fragment inclusion too deep: " + " -> ".join(self.chain)
        )
