"""Destinations for a finished FeatureCollection.

The scheduler that runs a conversion decides where output goes; the
pipeline only ever calls `submit` once per run.
"""

import logging
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TextIO

from metlink_cot.models.features import FeatureCollection

logger = logging.getLogger(__name__)


class Submitter(ABC):
    """Receives the output of a conversion run."""

    @abstractmethod
    async def submit(self, collection: FeatureCollection) -> None:
        raise NotImplementedError


class StdoutSubmitter(Submitter):
    """Writes the collection as GeoJSON to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None, indent: int | None = None):
        self._stream = stream
        self._indent = indent

    async def submit(self, collection: FeatureCollection) -> None:
        stream = self._stream or sys.stdout
        stream.write(collection.to_json(indent=self._indent))
        stream.write("\n")
        stream.flush()


class FileSubmitter(Submitter):
    """Writes the collection as GeoJSON to a file, replacing its contents."""

    def __init__(self, path: Path, indent: int | None = 2):
        self.path = path
        self._indent = indent

    async def submit(self, collection: FeatureCollection) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(collection.to_json(indent=self._indent), encoding="utf-8")
        logger.info(f"Wrote {len(collection.features)} features to {self.path}")


class MemorySubmitter(Submitter):
    """Keeps every submitted collection in memory."""

    def __init__(self) -> None:
        self.submissions: list[FeatureCollection] = []

    async def submit(self, collection: FeatureCollection) -> None:
        self.submissions.append(collection)

    @property
    def last(self) -> FeatureCollection | None:
        return self.submissions[-1] if self.submissions else None
