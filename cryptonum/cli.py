"""cryptonum CLI: evaluate one fixed-width operation."""

from __future__ import annotations

import logging
import sys

from .biguint import BigUInt, big_uint
from .config import parse_limb_order
from .errors import ConfigError, NumberError
from .limb import limb_named

logger = logging.getLogger(__name__)


USAGE: str = """\
cryptonum [OPTIONS] OP LHS [RHS]

Evaluate LHS OP RHS in a fixed-width multi-limb unsigned integer type and
print the decimal result. OP is one of: add sub mul div rem pow shl shr.
Operands are integer literals (decimal, 0x.., 0o.., 0b..).

Options:
  --limb NAME        Limb width: u8 u16 u32 u64 u128 (default u64)
  --limbs N          Number of limbs (default 4)
  --order ORDER      Physical limb order: little or big
  --verbose          Log type generation and evaluation to stderr
  --help             Show this help message
"""

BINARY_OPS: dict[str, str] = {
    "add": "wrapping_add",
    "sub": "wrapping_sub",
    "mul": "wrapping_mul",
    "div": "wrapping_div",
    "rem": "wrapping_rem",
    "pow": "wrapping_pow",
    "shl": "shl",
    "shr": "shr",
}


def _flag_names(value: BigUInt) -> list[str]:
    names: list[str] = []
    if value.is_overflow():
        names.append("OVERFLOW")
    if value.is_underflow():
        names.append("UNDERFLOW")
    if value.is_divided_by_zero():
        names.append("DIVIDED_BY_ZERO")
    return names


def _parse_operand(text: str, cls: type[BigUInt]) -> BigUInt:
    try:
        value = int(text, 0)
    except ValueError:
        raise ConfigError(f"invalid integer '{text}'") from None
    number = cls.from_int(value)
    if number.is_overflow():
        raise ConfigError(f"{text} does not fit in {cls.__name__}")
    return number


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    limb_name = "u64"
    limbs_text = "4"
    order_text = ""
    verbose = False
    positional: list[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg in ("--limb", "--limbs", "--order"):
            if i + 1 >= len(args):
                print("cryptonum: " + arg + " requires a value", file=sys.stderr)
                return 2
            if arg == "--limb":
                limb_name = args[i + 1]
            elif arg == "--limbs":
                limbs_text = args[i + 1]
            else:
                order_text = args[i + 1]
            i += 2
        elif arg == "--verbose" or arg == "-v":
            verbose = True
            i += 1
        elif arg.startswith("-") and not arg[1:2].isdigit():
            print("cryptonum: unknown flag '" + arg + "'", file=sys.stderr)
            return 2
        else:
            positional.append(arg)
            i += 1

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if len(positional) < 2:
        print("cryptonum: missing operation or operand", file=sys.stderr)
        return 2
    if len(positional) > 3:
        print("cryptonum: unexpected argument '" + positional[3] + "'", file=sys.stderr)
        return 2
    op = positional[0]
    if op not in BINARY_OPS:
        print("cryptonum: unknown operation '" + op + "'", file=sys.stderr)
        return 2
    if len(positional) != 3:
        print("cryptonum: " + op + " needs two operands", file=sys.stderr)
        return 2

    try:
        limb = limb_named(limb_name)
        if not limbs_text.isdigit() or int(limbs_text) == 0:
            raise ConfigError(f"invalid limb count '{limbs_text}'")
        order = parse_limb_order(order_text) if order_text else None
        cls = big_uint(limb, int(limbs_text), order)
        lhs = _parse_operand(positional[1], cls)
        if op in ("pow", "shl", "shr"):
            rhs: BigUInt | int = int(positional[2], 0)
            if op == "pow" and rhs < 0:
                raise ConfigError(f"negative exponent {rhs}")
        else:
            rhs = _parse_operand(positional[2], cls)
    except ValueError as e:
        print("cryptonum: " + str(e), file=sys.stderr)
        return 2

    logger.debug("%s %s %s in %s", op, int(lhs), int(rhs), cls.__name__)
    try:
        result = getattr(lhs, BINARY_OPS[op])(rhs)
    except NumberError as e:
        print("cryptonum: arithmetic error: " + str(e), file=sys.stderr)
        return 1

    print(int(result))
    names = _flag_names(result)
    if names:
        print("flags: " + "|".join(names))
    return 0


if __name__ == "__main__":
    sys.exit(main())
