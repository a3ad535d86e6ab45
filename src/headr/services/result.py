"""RunReport and SourceOutcome — the executor's return contract.

The report never changes the exit status: open failures are recorded
here and printed to stderr, but the run still succeeds.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class SourceOutcome(BaseModel):
    """What happened to a single input source.

    Attributes:
        name: The input name as given on the command line.
        opened: Whether the source could be opened.
        error: OS error text when the open failed.
        emitted: Lines (line mode) or bytes (byte mode) written.
    """

    model_config = {"frozen": True}

    name: str
    opened: bool
    error: str | None = None
    emitted: int = 0


class RunReport(BaseModel):
    """Summary of a complete headr run, in input order."""

    model_config = {"frozen": True}

    mode: Literal["lines", "bytes"]
    sources: list[SourceOutcome] = Field(default_factory=list)

    @property
    def failed(self) -> list[str]:
        return [s.name for s in self.sources if not s.opened]

    @property
    def ok(self) -> bool:
        return not self.failed
