"""flagspec command-line tool.

Usage:
    flagspec check "oneof(email,integer)" 42 nope
    flagspec explain "all(minlength(3),maxlength(10))"
    flagspec lint "range(1,100)" "minlength:5"
    flagspec validators

Exit codes: 0 success, 1 a value failed validation, 2 a spec is malformed.
"""
import argparse
import json
import sys

from flagspec.core.config import get_settings
from flagspec.core.errors import Err, Ok, collect_results
from flagspec.core.logging import bind_context, cli_logger, configure_logging
from flagspec.validation import (
    Composite,
    Negation,
    SpecError,
    Validator,
    list_validators,
    parse_validator_list,
    split_validator_specs,
    try_parse_validators,
    validate_all,
)

log = cli_logger()

EXIT_OK = 0
EXIT_INVALID_VALUE = 1
EXIT_INVALID_SPEC = 2


def _parse_or_report(spec: str) -> list[Validator] | None:
    try:
        return parse_validator_list(spec)
    except SpecError as e:
        print(f"✗ {e}", file=sys.stderr)
        return None


def cmd_check(args: argparse.Namespace) -> int:
    validators = _parse_or_report(args.spec)
    if validators is None:
        return EXIT_INVALID_SPEC

    failed = 0
    for value in args.values:
        result = validate_all(validators, value)
        if args.json:
            print(json.dumps({"input": value, **result.to_dict()}))
        elif result.is_valid:
            print(f"✓ {value!r}: ok")
        else:
            print(f"✗ {value!r}: {result.message}")
        failed += not result.is_valid

    log.debug("values_checked", spec=args.spec, total=len(args.values), failed=failed)
    return EXIT_INVALID_VALUE if failed else EXIT_OK


def _describe(validator: Validator, depth: int = 0) -> list[str]:
    lines = [f"{'  ' * depth}{validator.name} ({validator.kind}): {validator.description}"]
    if isinstance(validator, Composite):
        for child in validator.validators:
            lines.extend(_describe(child, depth + 1))
    elif isinstance(validator, Negation):
        lines.extend(_describe(validator.validator, depth + 1))
    return lines


def cmd_explain(args: argparse.Namespace) -> int:
    validators = _parse_or_report(args.spec)
    if validators is None:
        return EXIT_INVALID_SPEC
    for validator in validators:
        print("\n".join(_describe(validator)))
    return EXIT_OK


def cmd_lint(args: argparse.Namespace) -> int:
    """Report every malformed spec, not just the first."""
    results = [try_parse_validators(split_validator_specs(spec)) for spec in args.specs]
    match collect_results(results):
        case Ok(parsed):
            print(f"✓ {len(parsed)} spec(s) OK")
            return EXIT_OK
        case Err(errors):
            for error in errors:
                print(f"✗ [{error.code.name}] {error.message}")
            log.debug("specs_linted", total=len(args.specs), failed=len(errors))
            return EXIT_INVALID_SPEC


def cmd_validators(args: argparse.Namespace) -> int:
    for entry in list_validators():
        maximum = "*" if entry.arity.maximum is None else entry.arity.maximum
        aliases = f" (aliases: {', '.join(entry.aliases)})" if entry.aliases else ""
        print(f"{entry.name}{aliases}  args: {entry.arity.minimum}..{maximum}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flagspec",
        description="Check values against validator specs such as 'oneof(email,integer)'",
    )
    parser.add_argument("--log-level", help="Log level (default: FLAGSPEC_LOG_LEVEL or WARNING)")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines on stderr")
    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="Validate values against a spec list")
    check.add_argument("spec", help="Comma-separated spec list, e.g. 'email,maxlength(64)'")
    check.add_argument("values", nargs="+", help="Values to validate")
    check.add_argument("--json", action="store_true", help="Print one JSON object per value")
    check.set_defaults(handler=cmd_check)

    explain = commands.add_parser("explain", help="Print the validator tree built from a spec list")
    explain.add_argument("spec")
    explain.set_defaults(handler=cmd_explain)

    lint = commands.add_parser("lint", help="Parse spec lists and report every malformed one")
    lint.add_argument("specs", nargs="+")
    lint.set_defaults(handler=cmd_lint)

    validators = commands.add_parser("validators", help="List registered validators and aliases")
    validators.set_defaults(handler=cmd_validators)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.LOG_LEVEL, args.json_logs or settings.LOG_JSON)
    bind_context(command=args.command)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
