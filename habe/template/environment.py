"""
Template environment: helper table, template compilation and rendering.

Templates use Handlebars syntax and are compiled by pybars3:

    {{expr}}                          - write the value of an expression
    {{{expr}}}                        - write it without HTML escaping
    {{#if (and a b)}} .. {{else}} .. {{/if}}
    {{#each (mklist 1 2)}} .. {{/each}}

Helpers are stored with the catalog's calling convention, fn(*args, options),
and adapted to pybars' fn(this, *args, **kwargs) when registered.
"""

import logging
from functools import lru_cache
from typing import Any, Callable, Dict

from pybars import Compiler, PybarsError

from .conditions import ConditionEvaluator
from .engine import HelperOptions, JSONPathEngine
from .errors import TemplateError, TemplateSyntaxError
from . import functions

logger = logging.getLogger(__name__)

# Compiled templates kept per environment
COMPILE_CACHE_SIZE = 256


class Utils:
    """Utilities exposed to helper libraries."""

    TemplateError = TemplateError

    @staticmethod
    def is_array(value: Any) -> bool:
        return isinstance(value, (list, tuple))


def adapt_helper(name: str, helper: Callable[..., Any]) -> Callable[..., Any]:
    """
    Adapt a catalog helper to the pybars calling convention.

    pybars calls helper(this, *args, **kwargs). The catalog expects the
    positional arguments followed by a HelperOptions record holding the
    helper name and the hash (keyword) arguments.
    """
    def call(this: Any, *args: Any, **kwargs: Any) -> Any:
        return helper(*args, HelperOptions(name, kwargs, context=this))

    call.__name__ = name
    return call


class TemplateEnvironment:
    """Holds helpers and compiles templates against them."""

    def __init__(self, cache_size: int = COMPILE_CACHE_SIZE):
        self.helpers: Dict[str, Callable[..., Any]] = {}
        self._pybars_helpers: Dict[str, Callable[..., Any]] = {}
        self.utils = Utils()
        self.jsonpath = JSONPathEngine()
        self.compiler = Compiler()
        self.conditions = ConditionEvaluator(self)
        self._compile = lru_cache(maxsize=cache_size)(self._compile_source)

    def register_helper(self, name: str, helper: Callable[..., Any]) -> None:
        if name in self.helpers:
            logger.debug("Overriding helper '%s'", name)
        self.helpers[name] = helper
        self._pybars_helpers[name] = adapt_helper(name, helper)

    def unregister_helper(self, name: str) -> None:
        self.helpers.pop(name, None)
        self._pybars_helpers.pop(name, None)

    def has_helper(self, name: str) -> bool:
        return name in self.helpers

    def _compile_source(self, source: str) -> Callable[..., Any]:
        try:
            return self.compiler.compile(source)
        except PybarsError as e:
            raise TemplateSyntaxError(f"Invalid template: {e}") from e

    def compile(self, source: str) -> Callable[[Any], str]:
        """
        Compile template source into a render function taking the data.

        Compiled sources are kept in a bounded LRU cache, so ad-hoc
        templates cannot grow memory without limit.
        """
        template = self._compile(source)

        def render(data: Any = None) -> str:
            context = {} if data is None else data
            return str(template(context, helpers=self._pybars_helpers))

        return render

    def cache_info(self):
        """Statistics of the compiled template cache."""
        return self._compile.cache_info()

    def render(self, source: str, data: Any = None) -> str:
        return self.compile(source)(data)


def create_environment(lispy: bool = True) -> TemplateEnvironment:
    """Create an environment, with the lispy helper catalog unless disabled."""
    env = TemplateEnvironment()
    if lispy:
        functions.register(env)
    return env
