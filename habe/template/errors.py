"""
Template error types.

All errors raised while compiling or evaluating a template derive from
TemplateError so callers can catch them in one place.
"""


class TemplateError(Exception):
    """Base error for template compilation and evaluation."""


class TemplateSyntaxError(TemplateError):
    """Raised when a template or JSONPath expression cannot be parsed."""


class ArityError(TemplateError):
    """Raised when a helper is called with the wrong number of arguments."""

    def __init__(self, name: str, got: int, expected: int, at_least: bool = False):
        self.name = name
        self.got = got
        self.expected = expected
        self.at_least = at_least
        expect = f"at least {expected}" if at_least else str(expected)
        super().__init__(f"Wrong number of arguments to '{name}': got {got} expect {expect}")

