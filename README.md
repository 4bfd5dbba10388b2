# quarkcoal

A quark coalescence model. Partons (quarks and antiquarks with a position,
a momentum, a flavour code and a baryon number of ±1/3) are combined into
hadrons: a quark–antiquark pair forms a meson, three quarks form a baryon.
Each hadron then gets a PDG code from its quark content and invariant mass.
Events can be written to disk as JSON lines and analysed with
quality-assurance and azimuthal pair-correlation (CVE-style) observables.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Building blocks

- `quarkcoal.particle`: `Particle`, `Parton` and `Hadron` dataclasses, and
  `random_parton(rng)`, which draws a toy parton uniformly in the unit disk
  with a Tsallis-like transverse momentum and a weighted flavour code.
- `quarkcoal.event`: `Event` (partons, hadrons, reaction plane) with
  `shuffle_partons(amount, rng)`, which permutes the positions of a fraction
  of the partons; `amount` is a float or a `ShuffleLevel`.
- `quarkcoal.constants`: the mass table (`get_mass`), production ratios, and
  samplers for the reference multiplicity (`sample_multiplicity`) and parton
  flavours (`sample_parton_pid`).
- `quarkcoal.generator.EventGenerator`: `generate(n_partons, sum_baryon_number)`
  draws an event and tops it up until the total baryon number matches. A
  negative `n_partons` samples the multiplicity.

## Combining partons

Six strategies are available, each with a `combine(partons)` method that
returns a list of `Hadron` objects and marks the partons it used:

| Class                  | Module        | Strategy                                                        |
|------------------------|---------------|-----------------------------------------------------------------|
| `BruteForceGlobal`     | `bruteforce`  | all meson pairs and baryon triplets, formed in order of distance |
| `BruteForceGreedy`     | `bruteforce`  | parton by parton, nearest partner first                         |
| `BruteForceDualGreedy` | `bruteforce`  | parton by parton, best meson against best baryon                |
| `KDTreeGlobal`         | `kdcombiners` | global ordering over nearest neighbours found with a k-d tree   |
| `KDTreeGreedy`         | `kdcombiners` | a meson pass, then a baryon pass, over nearest neighbours       |
| `KDTreeDualGreedy`     | `kdcombiners` | best meson against best same-sign triplet, over neighbours      |

`baryon_preference` makes baryons more likely. In the global and dual-greedy
strategies, baryon distances are divided by three times this value. In the
greedy strategies, each meson pairing is rejected with probability r/(1+r).
The greedy ones also take an optional `rng`.

Every strategy except `BruteForceGlobal` finishes with
`Combiner.afterburner`. It pairs leftover quarks with leftover antiquarks,
then groups what remains in consecutive threes, and sets `afterburned=True`
on those hadrons. All strategies derive from `quarkcoal.combiner.Combiner`,
which also provides `invariant_mass` and `form_hadron`.

```python
import random

from quarkcoal.generator import EventGenerator
from quarkcoal.kdcombiners import KDTreeGlobal
from quarkcoal.pid import assign_pids

rng = random.Random(1)
event = EventGenerator(rng=rng).generate(n_partons=400, sum_baryon_number=0)

for hadron in KDTreeGlobal(baryon_preference=1.0).combine(event.partons):
    event.add_hadron(hadron)
assign_pids(event, rng)
```

## Particle identification

`quarkcoal.pid` infers PDG codes from quark flavour codes and mass:

```python
from quarkcoal.pid import infer_baryon_pdg, infer_quarkonium_pdg

infer_baryon_pdg(2, 2, 1, 0.938)   # 2212, a proton
infer_quarkonium_pdg(4, 3.097)     # 443, J/psi
```

`infer_pid` draws vector or pseudoscalar spin for off-diagonal mesons.
`assign_pids(event, rng)` labels every hadron in an event. Light diagonal
mesons (u ū, d d̄) are labelled π⁰, η, ρ⁰ or ω in a batch, from the event's
counts of charged pions and rhos.

## Event files

`quarkcoal.eventio.EventWriter` writes one event per line as JSON and works
as a context manager. `EventReader` reads such a file back. It also accepts
a file ending in `.list` that names one event file per line. It supports
`len()` and iteration.

## Analysis

- `quarkcoal.qa.QAAnalyzer` fills transverse momentum, pseudorapidity and
  azimuth histograms for baryons, antibaryons and mesons. It also counts PDG
  codes (`sorted_pid_counts`), computes species ratios (`ratios`) and
  profiles the fraction of afterburned hadrons.
- `quarkcoal.cve.CVEAnalyzer` fills Δφ and Σφ distributions and the
  ⟨cos(φ₁−φ₂)⟩ and ⟨cos(φ₁+φ₂)⟩ correlators, in position and momentum space,
  for each of the six baryon/antibaryon/meson pair classes. It uses `process`
  for pairs within one event and `process_mixed` for a signal event against
  background events. Only non-afterburned hadrons with 0.2 ≤ pT ≤ 3 and
  |η| ≤ 0.8 take part.

Both write their results with `finish(path)` as a JSON file. The histogram
types are in `quarkcoal.histograms`.

## Command-line tools

`quarkcoal` generates or reads events, combines them, assigns PDG codes and
writes the QA and CVE results:

```
quarkcoal --algorithm KDTreeGlobal --events 100 --baryon-preference 1.0 --savedir out
quarkcoal --toymode --events 50 --partons 500 --bn 2 --shuffle-fraction 0.25
quarkcoal --data-input out/events.jsonl --data-output hadrons.jsonl --savedir out
```

- `--algorithm` accepts `KDTreeGlobal` (the default), `KDTreeGreedy`,
  `BruteForceGlobal` and `BruteForceGreedy`.
- Without `--data-input`, 10 events are generated unless `--events` says
  otherwise. With it, every event in the file is read.
- Read events have their partons marked unused and their hadrons cleared
  before combining.
- The results go to `<savedir>/qa_<algorithm>_r<R>....json` and
  `<savedir>/cve_<algorithm>_r<R>....json`. With `--toymode` the names also
  carry the event count, parton count, baryon number and shuffle fraction.
- `--data-output` names an event file, inside `--savedir`, for the events
  with their hadrons.

`quarkcoal-analysis` analyses a file of events again, with optional event
mixing. The mixing pool holds the most recent events, 2 by default:

```
quarkcoal-analysis --data-input out/hadrons.jsonl --savedir out
quarkcoal-analysis --data-input out/hadrons.jsonl --is-mix --mixpool-size 5
```

It writes `cve_single_offline.json`, `qa_offline.json` and, with mixing,
`cve_mix_offline.json`. `--help` lists every option of either command.

## What it does not do

- Generated partons always come from the toy distribution. `--toymode` only
  changes the output file names. Sampling partons from stored measured
  distributions is not provided.
- The only input format is the JSON-lines event file that `EventWriter`
  produces. There is no reader for other transport-model output.
- Results are JSON, not binary histogram files.
- The dual-greedy strategies are available from Python only, not from the
  command line.