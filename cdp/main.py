"""Command line entry point: encode, decode and self-test."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path

from cdp.bits import format_bits
from cdp.codec import CdpError, decode, encode
from cdp.config import CdpConfig, load_config

log = logging.getLogger(__name__)

# Raw byte 0b01110100 starting from a HIGH signal level.
KNOWN_VECTOR = (b"\x74", b"\x5a\xa6")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="cdp", description="Conditional DePhase (Differential Manchester) codec"
    )
    p.add_argument("--config", default=None, help="YAML config file path")
    p.add_argument("--log-level", default=None, help="Log level (default from config)")
    sub = p.add_subparsers(dest="command", required=True)

    for name, help_text in (("encode", "Encode raw data"), ("decode", "Decode CDP data")):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("hex", nargs="?", default=None, help="Input as hex string")
        sp.add_argument("--in", dest="infile", default=None, help="Read input from file")
        sp.add_argument("--out", dest="outfile", default=None, help="Write raw output to file")
        sp.add_argument("--bits", action="store_true", help="Print binary instead of hex")
        if name == "decode":
            sp.add_argument(
                "--permissive",
                action="store_true",
                help="Accept 00/11 symbols instead of failing",
            )

    st = sub.add_parser("selftest", help="Run known-vector and random round-trip checks")
    st.add_argument("--size", type=int, default=None, help="Random round-trip size in bytes")
    st.add_argument("--seed", type=int, default=None, help="Random seed")

    args = p.parse_args(argv)
    if args.command in ("encode", "decode"):
        if (args.hex is None) == (args.infile is None):
            p.error("give exactly one of HEX or --in FILE")
    return args


def _read_input(args: argparse.Namespace) -> bytes:
    if args.infile is not None:
        return Path(args.infile).read_bytes()
    return bytes.fromhex(args.hex)


def _emit(args: argparse.Namespace, data: bytes) -> None:
    if args.outfile is not None:
        Path(args.outfile).write_bytes(data)
        log.info("wrote %d bytes to %s", len(data), args.outfile)
    elif args.bits:
        print(format_bits(data))
    else:
        print(data.hex())


def selftest(size: int = 4096, seed: int | None = None) -> bool:
    """Check the known vector, then round-trip ``size`` random bytes."""
    raw, expected = KNOWN_VECTOR
    encoded = encode(raw)
    decoded = decode(encoded)
    print(f"Input data:   {format_bits(raw)}")
    print(f"Encoded data: {format_bits(encoded, ', ')}")
    print(f"Decoded data: {format_bits(decoded)}")
    vector_ok = encoded == expected and decoded == raw
    print(f"TEST 0 Result - {'OK' if vector_ok else 'FAIL'}")

    rng = random.Random(seed)
    data = rng.randbytes(size)
    result = decode(encode(data))
    mismatches = [i for i, (a, b) in enumerate(zip(data, result)) if a != b]
    for i in mismatches:
        log.error("byte %d: %08b != %08b", i, data[i], result[i])
    round_trip_ok = len(result) == len(data) and not mismatches
    print(f"TEST 1 Result - {'OK' if round_trip_ok else 'FAIL'} ({size} bytes)")

    return vector_ok and round_trip_ok


def run(args: argparse.Namespace, cfg: CdpConfig | None = None) -> int:
    """Execute a parsed command. Returns the process exit status."""
    if cfg is None:
        cfg = load_config(args.config)

    try:
        if args.command == "encode":
            _emit(args, encode(_read_input(args)))
        elif args.command == "decode":
            strict = cfg.codec.strict_symbols and not args.permissive
            _emit(args, decode(_read_input(args), strict=strict))
        else:
            size = args.size if args.size is not None else cfg.selftest.size
            seed = args.seed if args.seed is not None else cfg.selftest.seed
            return 0 if selftest(size, seed) else 1
    except (CdpError, OSError) as e:
        log.error("%s failed: %s", args.command, e)
        return 1
    except ValueError as e:
        # bytes.fromhex
        log.error("bad input: %s", e)
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    cfg = load_config(args.config)
    level = args.log_level or cfg.logging.level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-5s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    sys.exit(run(args, cfg))


if __name__ == "__main__":
    main()
