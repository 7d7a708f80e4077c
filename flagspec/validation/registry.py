"""Validator registry - name/alias to factory resolution.

Every spec name maps to one ValidatorEntry carrying its aliases, argument
arity, ArgShape and factory. The table is closed: it holds exactly the
built-in validators declared below. Lookup is case-insensitive. Composite
factories recurse through ``build`` with ``depth + 1``; the depth guard
rejects a spec before parsing once ``depth`` exceeds MAX_RECURSION_DEPTH.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from flagspec.core.errors import AppError, Ok, Result
from . import builders as b
from .errors import (
    SpecError,
    argument_cannot_be_negative,
    argument_must_be_integer,
    argument_must_be_number,
    recursion_depth_exceeded,
    requires_argument,
    requires_at_least_one_argument,
    unknown_validator,
)
from .parser import ArgShape, parse_spec
from .patterns import parse_pattern_argument
from .validators import Validator, parse_integer, parse_number

MAX_RECURSION_DEPTH = 10


@dataclass(frozen=True, slots=True)
class Arity:
    """Accepted argument count; ``maximum=None`` means unbounded."""
    minimum: int
    maximum: int | None

    def accepts(self, count: int) -> bool:
        return count >= self.minimum and (self.maximum is None or count <= self.maximum)

    def error(self, name: str) -> SpecError:
        if self.maximum is None and self.minimum == 1:
            return requires_at_least_one_argument(name)
        return requires_argument(name, self.minimum)


NO_ARGS = Arity(0, 0)
ONE_ARG = Arity(1, 1)
TWO_ARGS = Arity(2, 2)
AT_LEAST_ONE = Arity(1, None)
ANY_ARGS = Arity(0, None)


@dataclass(frozen=True, slots=True)
class BuildContext:
    """Arguments of one spec plus helpers to convert them."""
    name: str
    args: tuple[str, ...]
    depth: int = 0

    def integer(self, index: int) -> int:
        value = parse_integer(self.args[index])
        if value is None: raise argument_must_be_integer(self.name)
        return value

    def length(self, index: int) -> int:
        value = self.integer(index)
        if value < 0: raise argument_cannot_be_negative(self.name)
        return value

    def number(self, index: int, label: str | None = None) -> float:
        value = parse_number(self.args[index])
        if value is None: raise argument_must_be_number(label or self.name)
        return value

    def nested(self, index: int) -> Validator:
        return build(self.args[index], self.depth + 1)

    def all_nested(self) -> list[Validator]:
        return [build(arg, self.depth + 1) for arg in self.args]


Factory = Callable[[BuildContext], Validator]


@dataclass(frozen=True, slots=True)
class ValidatorEntry:
    name: str
    factory: Factory
    arity: Arity = NO_ARGS
    shape: ArgShape = ArgShape.LIST
    aliases: tuple[str, ...] = ()

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)


_ENTRIES: dict[str, ValidatorEntry] = {}


def _register(entry: ValidatorEntry) -> None:
    """Index an entry under its name and every alias."""
    for name in entry.names:
        _ENTRIES[name.casefold()] = entry


def builtin(name: str, *aliases: str, arity: Arity = NO_ARGS, shape: ArgShape = ArgShape.LIST):
    """Decorator adding a factory to the built-in table."""
    def decorator(factory: Factory) -> Factory:
        _register(ValidatorEntry(name, factory, arity, shape, aliases))
        return factory
    return decorator


def lookup(name: str) -> ValidatorEntry | None:
    return _ENTRIES.get(name.strip().casefold())


def list_validators() -> list[ValidatorEntry]:
    """Registered entries, one per canonical name, in registration order."""
    return list({id(e): e for e in _ENTRIES.values()}.values())


def shape_for(name: str) -> ArgShape:
    entry = lookup(name)
    return entry.shape if entry else ArgShape.LIST


def resolve(name: str, args: Sequence[str] = (), depth: int = 0) -> Validator:
    """Build the validator registered under ``name`` from parsed arguments.

    Raises:
        SpecError: unknown name, wrong arity or malformed argument
    """
    entry = lookup(name)
    if entry is None:
        raise unknown_validator(name)
    if not entry.arity.accepts(len(args)):
        raise entry.arity.error(entry.name)
    return entry.factory(BuildContext(entry.name, tuple(args), depth))


def try_resolve(name: str, args: Sequence[str] = (), depth: int = 0) -> Result[Validator, AppError]:
    try:
        return Ok(resolve(name, args, depth))
    except SpecError as e:
        return e.to_err(origin="registry")


def build(spec: str, depth: int = 0) -> Validator:
    """Parse and resolve one spec at the given nesting depth."""
    if depth > MAX_RECURSION_DEPTH:
        raise recursion_depth_exceeded(MAX_RECURSION_DEPTH)
    parsed = parse_spec(spec, shape_for)
    return resolve(parsed.name, parsed.args, depth)


# ============================================================================
# Built-in validators
# ============================================================================

@builtin("email")
def _email(ctx: BuildContext) -> Validator: return b.email()


@builtin("url", arity=ANY_ARGS)
def _url(ctx: BuildContext) -> Validator: return b.url(*ctx.args)


@builtin("minlength", "minlen", arity=ONE_ARG)
def _min_length(ctx: BuildContext) -> Validator: return b.min_length(ctx.length(0))


@builtin("maxlength", "maxlen", arity=ONE_ARG)
def _max_length(ctx: BuildContext) -> Validator: return b.max_length(ctx.length(0))


@builtin("length", "len", arity=ONE_ARG)
def _length(ctx: BuildContext) -> Validator: return b.length(ctx.length(0))


@builtin("minbytelength", "minbytelen", arity=ONE_ARG)
def _min_byte_length(ctx: BuildContext) -> Validator: return b.min_byte_length(ctx.length(0))


@builtin("maxbytelength", "maxbytelen", arity=ONE_ARG)
def _max_byte_length(ctx: BuildContext) -> Validator: return b.max_byte_length(ctx.length(0))


@builtin("bytelength", "bytelen", arity=ONE_ARG)
def _byte_length(ctx: BuildContext) -> Validator: return b.byte_length(ctx.length(0))


@builtin("range", arity=TWO_ARGS)
def _range(ctx: BuildContext) -> Validator:
    return b.value_range(ctx.number(0, "range min"), ctx.number(1, "range max"))


@builtin("intrange", arity=TWO_ARGS)
def _int_range(ctx: BuildContext) -> Validator: return b.int_range(ctx.integer(0), ctx.integer(1))


@builtin("min", arity=ONE_ARG)
def _min(ctx: BuildContext) -> Validator: return b.min_value(ctx.number(0))


@builtin("max", arity=ONE_ARG)
def _max(ctx: BuildContext) -> Validator: return b.max_value(ctx.number(0))


@builtin("regex", arity=ONE_ARG, shape=ArgShape.SINGLE)
def _regex(ctx: BuildContext) -> Validator:
    value = parse_pattern_argument(ctx.args[0])
    return b.regex(value.pattern, value.description)


@builtin("mustmatch", arity=ONE_ARG, shape=ArgShape.SINGLE)
def _must_match(ctx: BuildContext) -> Validator: return _regex(ctx)


@builtin("mustnotmatch", arity=ONE_ARG, shape=ArgShape.SINGLE)
def _must_not_match(ctx: BuildContext) -> Validator: return b.negate(_regex(ctx))


@builtin("isoneof", arity=AT_LEAST_ONE)
def _is_one_of(ctx: BuildContext) -> Validator: return b.is_one_of(*ctx.args)


@builtin("isnotoneof", arity=AT_LEAST_ONE)
def _is_not_one_of(ctx: BuildContext) -> Validator: return b.is_not_one_of(*ctx.args)


@builtin("integer", "int")
def _integer(ctx: BuildContext) -> Validator: return b.integer()


@builtin("float", "number")
def _float(ctx: BuildContext) -> Validator: return b.number()


@builtin("boolean", "bool")
def _boolean(ctx: BuildContext) -> Validator: return b.boolean()


@builtin("alphanumeric", "alnum")
def _alphanumeric(ctx: BuildContext) -> Validator: return b.alphanumeric()


@builtin("identifier", "id")
def _identifier(ctx: BuildContext) -> Validator: return b.identifier()


@builtin("nowhitespace", "nospace")
def _no_whitespace(ctx: BuildContext) -> Validator: return b.no_whitespace()


@builtin("fileext", "extension", arity=AT_LEAST_ONE)
def _file_extension(ctx: BuildContext) -> Validator: return b.file_extension(*ctx.args)


@builtin("hostname", "host")
def _hostname(ctx: BuildContext) -> Validator: return b.hostname()


@builtin("ip", "ipaddress")
def _ip(ctx: BuildContext) -> Validator: return b.ip()


@builtin("port")
def _port(ctx: BuildContext) -> Validator: return b.port()


@builtin("oneof", arity=AT_LEAST_ONE, shape=ArgShape.NESTED)
def _one_of(ctx: BuildContext) -> Validator: return b.one_of(*ctx.all_nested())


@builtin("all", arity=AT_LEAST_ONE, shape=ArgShape.NESTED)
def _all(ctx: BuildContext) -> Validator: return b.all_of(*ctx.all_nested())


@builtin("not", arity=ONE_ARG, shape=ArgShape.NESTED_ONE)
def _not(ctx: BuildContext) -> Validator: return b.negate(ctx.nested(0))
