"""Command-line driver: combine partons into hadrons and analyse them."""

from __future__ import annotations

import argparse
import random
import sys
from collections.abc import Iterator, Sequence
from itertools import islice
from typing import Optional

from .bruteforce import BruteForceGlobal, BruteForceGreedy
from .combiner import Combiner
from .cve import CVEAnalyzer
from .event import Event
from .eventio import EventReader, EventWriter
from .generator import EventGenerator
from .kdcombiners import KDTreeGlobal, KDTreeGreedy
from .pid import assign_pids
from .qa import QAAnalyzer

_COMBINERS = {
    "KDTreeGlobal": KDTreeGlobal,
    "KDTreeGreedy": KDTreeGreedy,
    "BruteForceGlobal": BruteForceGlobal,
    "BruteForceGreedy": BruteForceGreedy,
}

_RULE = "=" * 82


def make_combiner(name: str, baryon_preference: float = 1.0) -> Combiner:
    """Combiner for an algorithm name; raises ValueError for an unknown name."""
    try:
        factory = _COMBINERS[name]
    except KeyError:
        raise ValueError(f"Unknown algorithm: {name}") from None
    return factory(baryon_preference)


def output_stem(
    kind: str,
    save_dir: str,
    algorithm: str,
    baryon_preference: float,
    toy_mode: bool,
    n_events: int,
    partons: int,
    sum_bn: int,
    shuffle_fraction: float,
) -> str:
    """Output path without extension for an analysis result of the given kind."""
    stem = f"{save_dir}/{kind}_{algorithm}_r{baryon_preference:.2f}"
    if toy_mode:
        stem += f"_n{n_events}_p{partons}_bn{sum_bn}"
        if shuffle_fraction >= 0.0:
            stem += f"_sf{shuffle_fraction:.2f}"
    return stem


def _progress_bar(current: int, total: int, width: int = 80) -> None:
    if total <= 0:
        return
    filled = int(width * current / total)
    bar = "=" * filled + " " * max(0, width - filled)
    sys.stdout.write(f"\r[{bar}] {int(100.0 * current / total)}% ({current}/{total})")
    sys.stdout.flush()
    if current == total:
        sys.stdout.write("\n")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quarkcoal", description="Quark coalescence model.")
    parser.add_argument("-i", "--data-input", default="",
                        help="event file or list to take partons from (random generation if omitted)")
    parser.add_argument("-o", "--data-output", default="",
                        help="output file for events with hadrons (nothing written if omitted)")
    parser.add_argument("-a", "--algorithm", default="KDTreeGlobal",
                        help="combiner: " + ", ".join(_COMBINERS))
    parser.add_argument("-n", "--events", type=int, default=None,
                        help="number of events to process or generate (default: all, or 10)")
    parser.add_argument("-b", "--bn", type=int, default=0,
                        help="target total baryon number per event")
    parser.add_argument("-p", "--partons", type=int, default=-1,
                        help="partons per event (-1 to sample the multiplicity)")
    parser.add_argument("-s", "--savedir", default=".", help="output directory for all files")
    parser.add_argument("-r", "--baryon-preference", type=float, default=1.0,
                        help="baryon preference factor")
    parser.add_argument("-F", "--shuffle-fraction", type=float, default=-1.0,
                        help="fraction of parton positions to shuffle (0.0-1.0)")
    parser.add_argument("-T", "--toymode", action="store_true",
                        help="toy event generation (uniform disk + simple pT)")
    return parser


def _input_events(reader: EventReader) -> Iterator[Event]:
    for event in reader:
        for parton in event.partons:
            parton.used = False
        event.hadrons.clear()
        yield event


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parser().parse_args(argv)

    try:
        combiner = make_combiner(args.algorithm, args.baryon_preference)
    except ValueError as err:
        print(err, file=sys.stderr)
        return 1

    writer = EventWriter(f"{args.savedir}/{args.data_output}") if args.data_output else None
    qa = QAAnalyzer()
    cve = CVEAnalyzer()
    rng = random.Random()

    print(_RULE)
    print("                  Quark Coalescence Model")
    print(_RULE)

    n_events = 10 if args.events is None else args.events
    if args.data_input:
        print(f">>>Mode: Input mode (file: {args.data_input})")
        reader = EventReader(args.data_input)
        if args.events is None:
            n_events = len(reader)
            print(f">>>Number of events to process: all available events ({n_events})")
        else:
            print(f">>>Number of events to process: {n_events}")
        source: Iterator[Event] = _input_events(reader)
    else:
        print(">>>Mode: Random generation mode")
        generator = EventGenerator(rng=rng)
        source = (generator.generate(args.partons, args.bn) for _ in iter(int, 1))

    print(f">>>Baryon preference factor: {args.baryon_preference}")
    print(f">>>Save directory: {args.savedir}")
    print(f">>>Algorithm: {args.algorithm}")
    if writer is not None:
        print(f">>>Hadrons output file: {args.savedir}/{args.data_output}")
    if args.shuffle_fraction >= 0.0:
        print(f">>>Shuffle fraction of parton positions: {args.shuffle_fraction}")

    try:
        for count, event in enumerate(islice(source, max(n_events, 0)), start=1):
            if args.shuffle_fraction > 0.0:
                event.shuffle_partons(args.shuffle_fraction, rng)
            for hadron in combiner.combine(list(event.partons)):
                event.add_hadron(hadron)
            assign_pids(event, rng)
            if writer is not None:
                writer.write(event)
            qa.process(event)
            cve.process(event)
            _progress_bar(count, n_events)
    finally:
        if writer is not None:
            writer.close()

    stem_args = (
        args.savedir,
        args.algorithm,
        args.baryon_preference,
        args.toymode,
        n_events,
        args.partons,
        args.bn,
        args.shuffle_fraction,
    )
    qa.finish(output_stem("qa", *stem_args) + ".json")
    cve.finish(output_stem("cve", *stem_args) + ".json")
    return 0


if __name__ == "__main__":
    sys.exit(main())