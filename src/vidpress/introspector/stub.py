"""Stub implementation of the Prober protocol for development and testing."""

from collections.abc import Mapping
from pathlib import Path

from vidpress.exceptions import ProbeFailedError
from vidpress.introspector.interface import ProbeResult


class StubProber:
    """Prober that answers from a fixed table keyed by file name.

    Files missing from the table fail to probe, which lets tests mix
    analyzable and broken inputs.
    """

    def __init__(self, sizes: Mapping[str, tuple[int, int]]) -> None:
        self._sizes = dict(sizes)
        self.probed: list[str] = []

    def probe(self, path: Path) -> ProbeResult:
        """Return the canned frame size for path.name.

        Raises:
            ProbeFailedError: If the file name is not in the table.
        """
        self.probed.append(path.name)
        try:
            width, height = self._sizes[path.name]
        except KeyError:
            raise ProbeFailedError(path, "no stub dimensions") from None
        return ProbeResult(width=width, height=height)
