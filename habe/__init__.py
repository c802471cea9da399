"""
habe - Lispy expressions for templates.

    from habe import create_environment

    env = create_environment()
    env.render("{{#if (and a (or b c))}}yes{{/if}}", {"a": 1, "c": 0})
"""

__version__ = "1.0.0"

from .template import (
    ArityError,
    TemplateEnvironment,
    TemplateError,
    TemplateSyntaxError,
    create_environment,
    is_empty,
    register,
)

__all__ = [
    "ArityError",
    "TemplateEnvironment",
    "TemplateError",
    "TemplateSyntaxError",
    "create_environment",
    "is_empty",
    "register",
]
