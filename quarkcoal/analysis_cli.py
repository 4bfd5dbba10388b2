"""Command-line driver: analyse events written by the coalescence driver."""

from __future__ import annotations

import argparse
import sys
from collections import deque
from collections.abc import Sequence
from typing import Optional

from .cli import _progress_bar
from .cve import CVEAnalyzer
from .event import Event
from .eventio import EventReader
from .qa import QAAnalyzer

_RULE = "=" * 82


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quarkcoal-analysis", description="Offline hadron analysis.")
    parser.add_argument("-i", "--data-input", default="", help="input event file or list")
    parser.add_argument("-s", "--savedir", default=".", help="output directory for all analysis files")
    parser.add_argument("-m", "--is-mix", action="store_true", help="enable event mixing")
    parser.add_argument("-p", "--mixpool-size", type=int, default=2, help="size of the mixing pool")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _parser()
    args = parser.parse_args(argv)
    if not args.data_input:
        parser.print_usage()
        return 1

    reader = EventReader(args.data_input)
    n_events = len(reader)

    print(_RULE)
    print("              Quark Coalescence Model Analyzer")
    print(_RULE)
    print(f">>>Input file: {args.data_input}")
    print(f">>>Number of events to process: {n_events}")
    if args.is_mix:
        print(f">>> Mix event enabled: Yes, mix pool size: {args.mixpool_size}")
    else:
        print(">>> Mix event enabled: No")
    print(f">>>Save directory: {args.savedir}")

    cve_same = CVEAnalyzer()
    qa = QAAnalyzer()
    cve_mix = CVEAnalyzer(mixed=True) if args.is_mix else None
    pool: deque[Event] = deque(maxlen=max(args.mixpool_size, 0))

    total_read = 0
    for event in reader:
        total_read += 1
        _progress_bar(total_read, n_events)
        cve_same.process(event)
        qa.process(event)
        if cve_mix is not None:
            cve_mix.process_mixed(event, list(pool))
            pool.append(event)

    cve_same.finish(f"{args.savedir}/cve_single_offline.json")
    if cve_mix is not None:
        cve_mix.finish(f"{args.savedir}/cve_mix_offline.json")
    qa.finish(f"{args.savedir}/qa_offline.json")

    if args.is_mix and total_read < args.mixpool_size + 1:
        print(
            f"Warning: only {total_read} events read, less than mixpool-size+1 "
            f"({args.mixpool_size + 1}), no mixed-event analysis was performed.",
            file=sys.stderr,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())