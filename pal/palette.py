import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from pal.color import Color, round_half_up

log = logging.getLogger(__name__)

CHANNEL_MIN = 0
CHANNEL_MAX = 255


class RejectionReason(Enum):
    NON_FINITE = "non_finite"
    OUT_OF_RANGE = "out_of_range"


@dataclass(frozen=True)
class RejectedColor:
    index: int  # position in the candidate list handed to finalize_palette
    values: Tuple[float, ...]
    reason: RejectionReason


@dataclass
class PaletteResult:
    """
    Outcome of one palette extraction.

    `colors` is the clean palette; `rejected` lists every candidate that was
    dropped during validation, so callers can see what was lost instead of
    just getting a shorter palette. The remaining fields are run metadata,
    filled in by pal.extract.extract_palette.
    """
    colors: List[Color] = field(default_factory=list)
    rejected: List[RejectedColor] = field(default_factory=list)
    algorithm: Optional[str] = None
    requested_k: Optional[int] = None
    sampled_count: int = 0
    elapsed: float = 0.0

    def __len__(self) -> int:
        return len(self.colors)


def _check_candidate(values: Sequence[float]) -> Optional[RejectionReason]:
    if len(values) != 3 or not all(isinstance(v, (int, float)) and math.isfinite(v) for v in values):
        return RejectionReason.NON_FINITE
    rounded = [round_half_up(v) for v in values]
    if any(c < CHANNEL_MIN or c > CHANNEL_MAX for c in rounded):
        return RejectionReason.OUT_OF_RANGE
    return None


def finalize_palette(candidates: Iterable[Sequence[float]]) -> PaletteResult:
    """
    Round and validate raw palette candidates.

    Args:
        candidates: Iterable of RGB triples, possibly fractional (centroids, box means).

    Returns:
        PaletteResult: clean Colors in candidate order, plus a RejectedColor
        entry for each candidate with a non-finite channel or a channel
        outside [0, 255] after rounding.
    """
    result = PaletteResult()
    for index, candidate in enumerate(candidates):
        values = tuple(float(v) for v in candidate)
        reason = _check_candidate(values)
        if reason is not None:
            result.rejected.append(RejectedColor(index=index, values=values, reason=reason))
            continue
        result.colors.append(Color(*(round_half_up(v) for v in values)))

    if result.rejected:
        log.warning("Dropped %d invalid palette color(s); palette has %d color(s).",
                    len(result.rejected), len(result.colors))
        for rejected in result.rejected:
            log.debug("Rejected candidate %d %s: %s", rejected.index, rejected.values, rejected.reason.value)
    return result


def clamp_k(k: int, sample_count: int, engine: str = "palette") -> int:
    """
    Effective number of colors for an engine run.

    k is capped at the number of sampled pixels; anything below zero becomes
    zero. A result of 0 means the engine returns an empty palette, 1 means
    it returns the average color without clustering or splitting.
    """
    if sample_count == 0:
        log.warning("%s: no sampled pixels, returning an empty palette.", engine)
        return 0
    if k > sample_count:
        log.warning("%s: k (%d) is larger than the number of sampled pixels (%d). Using k=%d.",
                    engine, k, sample_count, sample_count)
        k = sample_count
    return max(int(k), 0)
