"""Behavioural switches for the legality pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class RulesConfig:
    """Options accepted by every legality entry point.

    Attributes:
        validate_position: Check the input position with the plausibility
            checker before judging a move.  Callers that only ever feed
            positions produced by the engine itself may switch it off.
        forbid_adjacent_kings: Also reject moves after which the two kings
            stand on neighbouring squares.  Such positions are unreachable in
            legal play anyway; the switch exists for byte-compatible verdicts
            on hand-built positions.
    """

    validate_position: bool = True
    forbid_adjacent_kings: bool = False


DEFAULT_CONFIG = RulesConfig()
