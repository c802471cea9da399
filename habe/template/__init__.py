"""Template processing and lispy helper expressions."""

from .engine import JSONPathEngine, HelperOptions
from .environment import TemplateEnvironment, Utils, adapt_helper, create_environment
from .conditions import ConditionEvaluator
from .errors import ArityError, TemplateError, TemplateSyntaxError
from .functions import HELPER_NAMES, build_helpers, is_empty, register

__all__ = [
    "JSONPathEngine",
    "HelperOptions",
    "TemplateEnvironment",
    "Utils",
    "adapt_helper",
    "create_environment",
    "ConditionEvaluator",
    "ArityError",
    "TemplateError",
    "TemplateSyntaxError",
    "HELPER_NAMES",
    "build_helpers",
    "is_empty",
    "register",
]
