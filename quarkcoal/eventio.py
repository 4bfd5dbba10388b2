"""Reading and writing events as JSON lines."""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import asdict
from os import PathLike
from pathlib import Path
from typing import Any, Optional, TextIO, Union

from .event import Event
from .particle import Hadron, Parton

PathType = Union[str, PathLike[str]]

#: Suffix of a text file that lists one event file per line.
LIST_SUFFIX = ".list"


def event_to_dict(event: Event) -> dict[str, Any]:
    """Plain-data form of an event, including its partons and hadrons."""
    return asdict(event)


def event_from_dict(data: dict[str, Any]) -> Event:
    """Rebuild an event from the form produced by event_to_dict."""
    return Event(
        partons=[Parton(**parton) for parton in data["partons"]],
        hadrons=[Hadron(**hadron) for hadron in data["hadrons"]],
        reaction_plane=data["reaction_plane"],
        uid=data["uid"],
    )


class EventWriter:
    """Writes events to a file, one JSON object per line."""

    def __init__(self, path: PathType) -> None:
        self.path = Path(path)
        self._handle: Optional[TextIO] = self.path.open("w", encoding="utf-8")
        self.events_written = 0

    def write(self, event: Event) -> None:
        """Append one event to the file."""
        if self._handle is None:
            raise ValueError(f"writer for {self.path} is closed")
        self._handle.write(json.dumps(event_to_dict(event)))
        self._handle.write("\n")
        self.events_written += 1

    def close(self) -> None:
        """Flush and close the file; closing twice is harmless."""
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> EventWriter:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _event_files(path: Path) -> list[Path]:
    if path.name.endswith(LIST_SUFFIX):
        with path.open(encoding="utf-8") as handle:
            return [Path(line.strip()) for line in handle if line.strip()]
    return [path]


def _records(path: Path) -> Iterator[str]:
    with path.open(encoding="utf-8") as handle:
        for line in handle:
            if line.strip():
                yield line


class EventReader:
    """Reads events written by EventWriter.

    The path may name a single event file or a ".list" file naming one event
    file per line. Each iteration yields fresh, independent events.
    """

    def __init__(self, path: PathType) -> None:
        self.path = Path(path)
        self.files = _event_files(self.path)
        self._total = sum(sum(1 for _ in _records(file)) for file in self.files)

    def __iter__(self) -> Iterator[Event]:
        for file in self.files:
            for line in _records(file):
                yield event_from_dict(json.loads(line))

    def __len__(self) -> int:
        return self._total