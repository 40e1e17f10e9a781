import argparse
import json
import logging
import sys

from ..core import time as clock
from ..core import xrpl_config
from ..core.oracle import RpcTimeOracle
from ..core.rpc_client import LedgerRpcClient, LedgerRpcError
from ..logger import get_logger, set_level
from .find_ledger import LocatorError, Sample, locate

logger = get_logger(__name__)

DEFAULT_TARGET = "2019-12-31T23:59:59Z"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find the ledger closed at (or last before) a given time."
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=DEFAULT_TARGET,
        help="Date/time, or ledger-epoch seconds (default: %(default)s)",
    )
    parser.add_argument(
        "--rpc",
        type=str,
        default=xrpl_config.LEDGER_RPC_URL,
        help="JSON-RPC endpoint (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=xrpl_config.LEDGER_RPC_TIMEOUT,
        help="Per-request timeout in seconds",
    )
    parser.add_argument(
        "--seed-width",
        type=int,
        default=xrpl_config.LEDGER_SEED_WIDTH,
        help="Ledgers between the two seed samples",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Give up after this many lookups",
    )
    parser.add_argument(
        "--clamp",
        action="store_true",
        help="Answer future targets with the latest validated ledger",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Skip TLS certificate verification",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON output instead of human-readable text",
    )
    parser.add_argument(
        "-d",
        "--debug",
        help="Print lots of debugging statements",
        action="store_const",
        dest="loglevel",
        const=logging.DEBUG,
        default=logging.WARNING,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        help="Be verbose",
        action="store_const",
        dest="loglevel",
        const=logging.INFO,
    )
    return parser


def main(argv=None, oracle=None) -> int:
    args = build_parser().parse_args(argv)
    set_level(args.loglevel)

    try:
        target = clock.parse_target(args.target)
    except ValueError as e:
        logger.error(str(e))
        return 2

    if oracle is None:
        client = LedgerRpcClient(
            url=args.rpc,
            timeout=args.timeout,
            verify_tls=xrpl_config.LEDGER_RPC_VERIFY_TLS and not args.insecure,
        )
        oracle = RpcTimeOracle(client)

    samples = []

    def on_sample(sample: Sample):
        samples.append(sample)
        if not args.json:
            print(sample)

    if not args.json:
        print(f"Looking for {{ledger at, {target}, {clock.format_close_time(target)}}}")
    try:
        answer = locate(
            target,
            oracle,
            seed_width=args.seed_width,
            on_sample=on_sample,
            max_steps=args.max_steps,
            clamp_to_validated=args.clamp,
        )
    except (LedgerRpcError, LocatorError, ValueError) as e:
        logger.error(f"Search for {target} failed: {e}")
        return 1

    if args.json:
        print(
            json.dumps(
                {
                    "target": target,
                    "target_time": clock.format_close_time(target),
                    "ledger_index": answer.sequence,
                    "close_time": answer.close_time,
                    "close_time_human": answer.human_time,
                    "exact": answer.close_time == target,
                    "lookups": len(samples),
                }
            )
        )
    else:
        print("---")
        print(answer)
    return 0


if __name__ == "__main__":
    sys.exit(main())
