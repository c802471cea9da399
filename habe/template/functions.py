"""
Lisp-style helper functions for templates.

Registers a catalog of variadic helpers so templates can use nested call
expressions instead of single-argument helpers:

    {{#if (and a (or b c))}} .. {{/if}}
    {{or nickname name "anonymous"}}

Create new object

    (mklist x y ..)     [x, y, ..]      - list made from positional arguments
    (mkhash x=1 y=2 ..) {x: 1, y: 2}    - dict made from hash arguments

Boolean logic

    (and x y ...)                       - first empty value, or the last value
    (or x y ...)                        - first non-empty value, or the last value
    (not x)                             - True if x is empty

Comparison

    (eq x y ...)                        - True if all adjacent values are equal
    (ne x y ...)                        - True if no adjacent values are equal
    (gt x y ...)                        - True if values are strictly decreasing
    (ge x y ...)                        - True if values are non-increasing
    (lt x y ...)                        - True if values are strictly increasing
    (le x y ...)                        - True if values are non-decreasing
    (min x y ...)                       - smallest value
    (max x y ...)                       - largest value

Arithmetic

    (add x y ...)   (sub x y ...)   (mul x y ...)   (div x y ...)   (neg x)
    (abs x)   (ceil x)   (floor x)   (round x)   (trunc x)
"""

import logging
import math
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Tuple

from .errors import ArityError, TemplateError

logger = logging.getLogger(__name__)

Helper = Callable[..., Any]

# Returned by a reducer step to stop the fold
STOP = object()
# Marks a reducer with no success override
UNSET = object()


def is_sequence(value: Any) -> bool:
    """Return True for list-like values (lists and tuples, not strings)."""
    return isinstance(value, (list, tuple))


def is_empty(value: Any, is_array: Callable[[Any], bool] = is_sequence) -> bool:
    """
    Decide whether a value counts as false for the helper catalog.

    None, False, empty strings, numeric zero, NaN and empty sequences are
    empty. Everything else, including empty mappings, is not.

    Args:
        value: Value to test
        is_array: Sequence detector, normally the host engine's

    Returns:
        True if the value is empty
    """
    if is_array(value):
        return len(value) == 0
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, Mapping):
        return False
    return not value


def strict_equal(a: Any, b: Any) -> bool:
    """Equality that never treats a boolean as equal to a number."""
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    return a == b


def js_round(x: Any) -> int:
    """Round half up, so 2.5 -> 3 and -2.5 -> -2."""
    whole = math.floor(x)
    return whole + (1 if x - whole >= 0.5 else 0)


# ============================================================================
# Argument validators
# ============================================================================

def split_args(args: Tuple[Any, ...]) -> Tuple[Tuple[Any, ...], Any]:
    """Split a helper invocation into (logical_args, options)."""
    if not args:
        raise TemplateError("Helper called without an options record")
    return args[:-1], args[-1]


def option(options: Any, key: str, default: Any = None) -> Any:
    """Read a field from the trailing options record (object or mapping)."""
    if isinstance(options, Mapping):
        return options.get(key, default)
    return getattr(options, key, default)


def helper_name(options: Any, default: str = "<unknown>") -> str:
    return option(options, "name") or default


def req_args(args: Tuple[Any, ...], options: Any, req: int, default_name: str = "<unknown>") -> None:
    """Raise ArityError unless exactly `req` logical arguments were given."""
    got = len(args)
    if got != req:
        raise ArityError(helper_name(options, default_name), got, req)


def min_args(args: Tuple[Any, ...], options: Any, minimum: int, default_name: str = "<unknown>") -> None:
    """Raise ArityError unless at least `minimum` logical arguments were given."""
    got = len(args)
    if got < minimum:
        raise ArityError(helper_name(options, default_name), got, minimum, at_least=True)


def _tag(func: Helper, name: str, arity: Tuple[str, int]) -> Helper:
    func.__name__ = name
    func.__qualname__ = name
    func.arity = arity  # type: ignore[attr-defined]
    return func


# ============================================================================
# Helper generators
# ============================================================================

def wrap_simple(name: str, func: Callable[[Any], Any]) -> Helper:
    """
    Wrap a one-argument function as a helper.

    Args:
        name: Helper name, used when the host passes no name of its own
        func: Function applied to the single argument

    Returns:
        Helper requiring exactly one argument
    """
    def helper(*arguments: Any) -> Any:
        args, options = split_args(arguments)
        req_args(args, options, 1, name)
        return func(args[0])

    return _tag(helper, name, ("exact", 1))


def reducer(
    name: str,
    func: Callable[[Any, Any], Any],
    success: Any = UNSET,
    failure: Any = False,
) -> Helper:
    """
    Fold a binary function left to right over two or more arguments.

    The step function receives the running value and the next argument.
    When it returns STOP the fold ends at once and `failure` is returned.
    Otherwise the fold runs to the end and returns `success`, or the final
    running value when no success value was configured.

    Args:
        name: Helper name
        func: Binary step function
        success: Value returned when the fold completes (UNSET returns the
            running value itself)
        failure: Value returned when a step returns STOP

    Returns:
        Helper requiring at least two arguments

    Examples:
        reducer("sub", operator.sub)                     # (sub 7 2 1) -> 4
        reducer("lt", lambda a, b: b if a < b else STOP, True, False)
    """
    def helper(*arguments: Any) -> Any:
        args, options = split_args(arguments)
        min_args(args, options, 2, name)
        acc = args[0]
        for value in args[1:]:
            acc = func(acc, value)
            if acc is STOP:
                return failure
        return acc if success is UNSET else success

    return _tag(helper, name, ("min", 2))


def relation(test: Callable[[Any, Any], bool]) -> Callable[[Any, Any], Any]:
    """Turn a pairwise test into a reducer step that continues with `b`."""
    def step(a: Any, b: Any) -> Any:
        return b if test(a, b) else STOP
    return step


# ============================================================================
# Variadic helpers
# ============================================================================

def mklist(*arguments: Any) -> List[Any]:
    """Return positional arguments as a list."""
    args, _ = split_args(arguments)
    return list(args)


def mkhash(*arguments: Any) -> Dict[str, Any]:
    """Return hash arguments as a dict."""
    _, options = split_args(arguments)
    return dict(option(options, "hash") or {})


def make_and(empty: Callable[[Any], bool]) -> Helper:
    def helper(*arguments: Any) -> Any:
        args, options = split_args(arguments)
        min_args(args, options, 1, "and")
        for value in args:
            if empty(value):
                return value
        return args[-1]

    return _tag(helper, "and", ("min", 1))


def make_or(empty: Callable[[Any], bool]) -> Helper:
    def helper(*arguments: Any) -> Any:
        args, options = split_args(arguments)
        min_args(args, options, 1, "or")
        for value in args:
            if not empty(value):
                return value
        return args[-1]

    return _tag(helper, "or", ("min", 1))


# ============================================================================
# Catalog and registration
# ============================================================================

def build_helpers(is_array: Callable[[Any], bool] = is_sequence) -> Dict[str, Helper]:
    """
    Build the full helper catalog.

    Args:
        is_array: Sequence detector used by the truthiness policy

    Returns:
        Dict mapping helper names to helper functions
    """
    def empty(value: Any) -> bool:
        return is_empty(value, is_array)

    helpers: Dict[str, Helper] = {
        "mklist": _tag(mklist, "mklist", ("min", 0)),
        "mkhash": _tag(mkhash, "mkhash", ("min", 0)),
        "and": make_and(empty),
        "or": make_or(empty),
        "not": wrap_simple("not", empty),
    }

    for helper in (
        reducer("eq", relation(strict_equal), True, False),
        reducer("ne", relation(lambda a, b: not strict_equal(a, b)), True, False),
        reducer("gt", relation(lambda a, b: a > b), True, False),
        reducer("ge", relation(lambda a, b: a >= b), True, False),
        reducer("lt", relation(lambda a, b: a < b), True, False),
        reducer("le", relation(lambda a, b: a <= b), True, False),
        reducer("min", lambda a, b: a if a <= b else b),
        reducer("max", lambda a, b: a if a >= b else b),
        reducer("add", lambda a, b: a + b),
        reducer("sub", lambda a, b: a - b),
        reducer("mul", lambda a, b: a * b),
        reducer("div", lambda a, b: a / b),
        wrap_simple("neg", lambda x: -x),
        wrap_simple("abs", abs),
        wrap_simple("ceil", math.ceil),
        wrap_simple("floor", math.floor),
        wrap_simple("round", js_round),
        wrap_simple("trunc", math.trunc),
    ):
        helpers[helper.__name__] = helper

    return helpers


HELPER_NAMES: Tuple[str, ...] = tuple(build_helpers())


def register(env: Any) -> Any:
    """
    Register every helper of the catalog into a template environment.

    The environment must provide register_helper(name, fn). When it also
    has a `utils` namespace with is_array(), the truthiness policy uses it
    to recognise sequences.

    Returns:
        The environment, for chaining
    """
    utils = getattr(env, "utils", None)
    is_array = getattr(utils, "is_array", None) or is_sequence

    for name, helper in build_helpers(is_array).items():
        env.register_helper(name, helper)

    logger.debug("Registered %d lispy helpers", len(HELPER_NAMES))
    return env
