import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..core import time as clock
from ..core.oracle import TimeOracle
from ..logger import get_logger

logger = get_logger(__name__)

DEFAULT_SEED_WIDTH = 10


class LocatorError(RuntimeError):
    pass


class DegenerateBracketError(LocatorError):
    """Both bounds share a close time, so no slope can be drawn through them."""


class SearchExhaustedError(LocatorError):
    pass


@dataclass(frozen=True)
class Sample:
    sequence: int
    close_time: int

    @property
    def human_time(self) -> str:
        return clock.format_close_time(self.close_time)

    def __str__(self) -> str:
        return f"{{{self.sequence}, {self.close_time}, {self.human_time}}}"


class Bound(Enum):
    LOW = "low"
    HIGH = "high"


@dataclass(frozen=True)
class Probe:
    """Next ledger to fetch and the bound it replaces.

    With ``carry`` the other bound first takes the replaced bound's old value,
    i.e. the bracket slides toward the guess instead of shrinking.
    """

    bound: Bound
    sequence: int
    carry: bool = False


@dataclass
class Bracket:
    low: Sample
    high: Sample

    @property
    def width(self) -> int:
        return self.high.sequence - self.low.sequence

    def straddles(self, target: int) -> bool:
        return self.low.close_time < target < self.high.close_time

    def interpolate(self, target: int) -> int:
        """Sequence number the line through both bounds predicts for ``target``."""
        span = self.high.close_time - self.low.close_time
        if span == 0:
            raise DegenerateBracketError(
                f"Ledgers {self.low.sequence} and {self.high.sequence} "
                f"both closed at {self.low.close_time}"
            )
        m = self.width / span
        b = self.low.sequence - m * self.low.close_time
        return _round_half_away(m * target + b)

    def update(self, probe: Probe, sample: Sample):
        if probe.bound is Bound.LOW:
            if probe.carry:
                self.high = self.low
            self.low = sample
        else:
            if probe.carry:
                self.low = self.high
            self.high = sample


def locate(
    target: int,
    oracle: TimeOracle,
    seed_width: int = DEFAULT_SEED_WIDTH,
    on_sample: Optional[Callable[[Sample], None]] = None,
    max_steps: Optional[int] = None,
    clamp_to_validated: bool = False,
) -> Sample:
    """
    Find the ledger that closed at ``target``, or the last one closed before it.

    Interpolation search over (close time -> sequence), seeded with the latest
    validated ledger and the ledger ``seed_width`` before it.

    Args:
        target: Close time to look for, in ledger-epoch seconds
        oracle: Source of close times
        seed_width: Distance between the two seed ledgers
        on_sample: Called with every sample fetched; defaults to logging it
        max_steps: Give up after this many fetches past the latest validated
            ledger (None: no limit)
        clamp_to_validated: Answer targets later than the latest validated
            ledger with that ledger instead of guessing past it

    Returns:
        The Sample whose close time equals ``target`` if one was hit, otherwise
        the low bound of the adjacent bracket straddling ``target``

    Raises:
        Whatever the oracle raises, DegenerateBracketError, SearchExhaustedError
    """
    if seed_width < 1:
        raise ValueError(f"seed_width must be at least 1, got {seed_width}")
    report = on_sample or _log_sample

    latest = Sample(*oracle.fetch_latest_validated())
    report(latest)
    if latest.close_time == target:
        return latest
    if clamp_to_validated and target > latest.close_time:
        logger.info(f"Target {target} is past the latest validated ledger {latest}")
        return latest

    bracket: Optional[Bracket] = None
    probe: Optional[Probe] = Probe(Bound.LOW, latest.sequence - seed_width)
    steps = 0
    while probe is not None:
        if max_steps is not None and steps >= max_steps:
            raise SearchExhaustedError(
                f"No answer for {target} after {steps} lookups (bracket {bracket})"
            )
        sample = Sample(probe.sequence, oracle.fetch_close_time(probe.sequence))
        steps += 1
        report(sample)

        if bracket is None:
            bracket = Bracket(low=sample, high=latest)
        else:
            bracket.update(probe, sample)
        if sample.close_time == target:
            return sample

        probe = _next_probe(bracket, target)

    logger.debug(f"Converged on {bracket.low} after {steps} lookups")
    return bracket.low


def _next_probe(bracket: Bracket, target: int) -> Optional[Probe]:
    """Classify the interpolated guess against the bracket. None: bracket.low is the answer."""
    low = bracket.low.sequence
    high = bracket.high.sequence
    guess = bracket.interpolate(target)

    if guess < low:
        return Probe(Bound.LOW, guess, carry=True)
    if guess > high:
        return Probe(Bound.HIGH, guess, carry=True)
    if guess == low:
        if bracket.width == 1:
            return _settle(bracket, target)
        return Probe(Bound.HIGH, low + 1)
    if guess == high:
        if bracket.width == 1:
            return _settle(bracket, target)
        return Probe(Bound.LOW, high - 1)

    # Strictly inside: drop the bound farther from the guess
    if guess - low <= high - guess:
        return Probe(Bound.HIGH, guess)
    return Probe(Bound.LOW, guess)


def _settle(bracket: Bracket, target: int) -> Optional[Probe]:
    # Adjacent bounds only answer when they straddle the target; otherwise step one past
    if bracket.straddles(target):
        return None
    if target < bracket.low.close_time:
        return Probe(Bound.LOW, bracket.low.sequence - 1, carry=True)
    return Probe(Bound.HIGH, bracket.high.sequence + 1, carry=True)


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def _log_sample(sample: Sample):
    logger.info(str(sample))
