"""Line and byte limits as a tagged choice, plus the resolved request.

INVARIANT: Exactly one truncation mode is active per run. The request
carries a single ``limit`` value that is either a :class:`LineLimit` or a
:class:`ByteLimit`, never both.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field, PositiveInt

DEFAULT_LINES = 10
STDIN_NAME = "-"


class LimitConflictError(ValueError):
    """Raised when both a line count and a byte count are requested."""


class LineLimit(BaseModel):
    """Truncate each source to its first ``count`` lines."""

    model_config = {"frozen": True}

    kind: Literal["lines"] = "lines"
    count: PositiveInt = DEFAULT_LINES


class ByteLimit(BaseModel):
    """Truncate each source to its first ``count`` bytes."""

    model_config = {"frozen": True}

    kind: Literal["bytes"] = "bytes"
    count: PositiveInt


Limit = Annotated[LineLimit | ByteLimit, Field(discriminator="kind")]


class HeadRequest(BaseModel):
    """Validated configuration for one headr run.

    Attributes:
        files: Input names in processing order; ``"-"`` is standard input.
        limit: The active truncation mode and its count.
    """

    model_config = {"frozen": True}

    files: tuple[str, ...] = Field(default=(STDIN_NAME,), min_length=1)
    limit: Limit = Field(default_factory=LineLimit)

    @property
    def multiple(self) -> bool:
        """True when more than one input name was supplied."""
        return len(self.files) > 1


def ensure_single_mode(lines: int | None, bytes_: int | None) -> None:
    """Reject a request that names both a line count and a byte count.

    Raises:
        LimitConflictError: Both *lines* and *bytes_* were given.
    """
    if lines is not None and bytes_ is not None:
        msg = "--lines and --bytes are mutually exclusive"
        raise LimitConflictError(msg)


def resolve_limit(
    lines: int | None,
    bytes_: int | None,
    *,
    default_lines: int = DEFAULT_LINES,
) -> LineLimit | ByteLimit:
    """Collapse the two optional counts into a single limit.

    Raises:
        LimitConflictError: Both *lines* and *bytes_* were given.
        pydantic.ValidationError: A count is not a positive integer.
    """
    ensure_single_mode(lines, bytes_)
    if bytes_ is not None:
        return ByteLimit(count=bytes_)
    if lines is not None:
        return LineLimit(count=lines)
    return LineLimit(count=default_lines)
