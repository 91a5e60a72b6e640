# recompute.py — v1.1.0
# Keeps a displayed Outcome in step with the current input snapshot.
# Modes:
#   "manual"   : inputs are staged; recompute only on recalculate()
#   "reactive" : every change to the snapshot recomputes immediately
# Everything is synchronous: by the time update() returns, the outcome matches the snapshot.

from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Any, Callable, List, Mapping, Optional

from takeoff_estimator_core import (
    DEFAULT_INPUTS, EstimatorInputs, InputParseError, Outcome,
    estimate, parse_text_inputs,
)

logger = logging.getLogger(__name__)

MODES = ("manual", "reactive")
_FIELD_NAMES = {f.name for f in fields(EstimatorInputs)}

Subscriber = Callable[[Outcome], None]


class RecomputeController:
    """
    Owns the only mutable state around the estimator: the current snapshot, the snapshot
    the last outcome was computed from, the outcome itself and a revision counter that
    bumps on every visible transition.
    """

    def __init__(self, mode: str = "reactive", initial: Optional[EstimatorInputs] = None,
                 cfg: Optional[Mapping[str, Any]] = None,
                 estimator: Callable[..., Outcome] = estimate):
        if mode not in MODES:
            raise ValueError(f"Unknown recompute mode {mode!r}; expected one of {MODES}")
        self.mode = mode
        self.cfg = cfg
        self._estimator = estimator
        self._inputs: EstimatorInputs = initial if initial is not None else DEFAULT_INPUTS
        self._computed_from: Optional[EstimatorInputs] = None
        self._outcome: Optional[Outcome] = None
        self._subscribers: List[Subscriber] = []
        self.revision = 0
        if mode == "reactive":
            self._recompute()

    # ---------- State ----------
    @property
    def inputs(self) -> EstimatorInputs:
        return self._inputs

    @property
    def outcome(self) -> Optional[Outcome]:
        return self._outcome

    @property
    def stale(self) -> bool:
        """True when staged inputs differ from what the shown outcome was computed on."""
        return self._outcome is None or self._computed_from != self._inputs

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)
        return _unsubscribe

    # ---------- Triggers ----------
    def set_inputs(self, inputs: EstimatorInputs) -> Optional[Outcome]:
        self._inputs = inputs
        if self.mode == "reactive":
            if not self.stale:
                logger.debug("snapshot unchanged, skipping recompute")
                return self._outcome
            return self._recompute()
        return self._outcome

    def update(self, **changes: Any) -> Optional[Outcome]:
        unknown = set(changes) - _FIELD_NAMES
        if unknown:
            raise TypeError(f"Unknown input field(s): {sorted(unknown)}")
        return self.set_inputs(replace(self._inputs, **changes))

    def recalculate(self) -> Outcome:
        """Explicit trigger; always recomputes from the latest snapshot."""
        return self._recompute()

    def recalculate_from_text(self, raw: Mapping[str, Any]) -> Outcome:
        """Manual text-entry trigger: parse first, publish parse failures as fatal outcomes."""
        try:
            inputs = parse_text_inputs(raw)
        except InputParseError as e:
            self._computed_from = None
            return self._publish(Outcome.error(str(e)))
        self._inputs = inputs
        return self._recompute()

    # ---------- Internals ----------
    def _recompute(self) -> Outcome:
        snapshot = self._inputs
        out = self._estimator(snapshot, self.cfg)
        self._computed_from = snapshot
        logger.debug("recomputed (rev %d) %s -> %s", self.revision + 1, snapshot, out.as_dict())
        return self._publish(out)

    def _publish(self, out: Outcome) -> Outcome:
        """
        Store the outcome, bump the revision, then call subscribers in order. A subscriber
        that raises propagates to the trigger caller and the remaining subscribers are not
        called; the stored outcome is already the new one.
        """
        self._outcome = out
        self.revision += 1
        for cb in list(self._subscribers):
            cb(out)
        return out
