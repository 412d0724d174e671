import argparse
import logging
import sys
from typing import List, Optional, Tuple

from quantum_memory import BitValue, IndexOutOfRange, QuantumMemory


def parse_assignment(text: str) -> Tuple[int, BitValue, Optional[float]]:
    """Parse ``INDEX=VALUE`` where VALUE is ``1``, ``0``, ``?`` or ``?P``."""
    index_text, sep, value_text = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected INDEX=VALUE, got {text!r}")
    try:
        index = int(index_text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid slot index {index_text!r}") from None

    value_text = value_text.strip()
    if value_text == "1":
        return index, BitValue.TRUE, None
    if value_text == "0":
        return index, BitValue.FALSE, None
    if value_text.startswith("?"):
        prob_text = value_text[1:]
        if not prob_text:
            return index, BitValue.SUPERPOSED, None
        try:
            prob = float(prob_text)
        except ValueError:
            raise argparse.ArgumentTypeError(
                f"invalid probability {prob_text!r}"
            ) from None
        if not 0.0 <= prob <= 1.0:
            raise argparse.ArgumentTypeError(f"probability {prob} outside [0, 1]")
        return index, BitValue.SUPERPOSED, prob
    raise argparse.ArgumentTypeError(f"invalid bit value {value_text!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Drive a 64-slot quantum memory register and print it"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the collapse generator (default: $QMEM_SEED or random)",
    )
    parser.add_argument(
        "--set",
        dest="assignments",
        type=parse_assignment,
        action="append",
        default=[],
        metavar="INDEX=VALUE",
        help=(
            "Write a slot: 1, 0, ? (superposed) or ?P with collapse probability P. "
            "Use --set=INDEX=VALUE when INDEX starts with '-'"
        ),
    )
    parser.add_argument(
        "--measure",
        dest="measures",
        type=int,
        action="append",
        default=[],
        metavar="INDEX",
        help="Measure a slot after all writes",
    )
    parser.add_argument(
        "--measure-all",
        action="store_true",
        help="Collapse every slot before printing",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every collapse",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    mem = QuantumMemory(seed=args.seed)
    try:
        for index, value, prob in args.assignments:
            mem.set_bit(index, value, prob)
        for index in args.measures:
            print(f"Measured {index}: {int(mem.measure(index))}")
        if args.measure_all:
            mem.measure_all()
    except IndexOutOfRange as exc:
        parser.error(str(exc))
    mem.print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
