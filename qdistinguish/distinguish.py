"""
The distinguisher itself: decide whether an oracle on ``2*n_bits``-bit blocks
is a 3-round Feistel network or a random permutation.

A run is a small state machine::

    SAMPLING --(rank == n_bits)--> SOLVING --> VERIFYING --> DONE
        |
        +--(budget exhausted)----------------------------> DONE

In ``SAMPLING``, Simon's circuit is run on the bit-flip oracle for the masked
probe function and every measurement becomes an equation for the solver.
Measurements contradicting the equations so far are thrown away and do not
count against the budget of ``2*n_bits`` samples; they cannot happen for a
Feistel network, but they routinely do for a random permutation.

Once the system has full rank, the solution ``s`` is the only candidate period
of the probe function, and one classical check ``f(u) == f(u ^ s)`` on a random
``u`` settles the verdict. If the budget runs out first, the verdict defaults
to Feistel, as in the published algorithm.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from .config import DistinguisherConfig
from .gf2 import LinearSolver, RowStatus
from .oracle import BitFlipOracle, to_reversible
from .probe import MaskingParams, ProbeFunction
from .sampling import Sampler, get_sampler

logger = logging.getLogger(__name__)

class Verdict(enum.Enum):
    FEISTEL = '3-round Feistel'
    RANDOM_PERMUTATION = 'Random permutation'
    INCONCLUSIVE = 'Inconclusive'

class Reason(enum.Enum):
    """How a run arrived at its verdict."""
    SOLVED = 'solved equation'
    BUDGET_EXHAUSTED = '{budget} equations attempted without full rank'
    REJECTION_LIMIT = 'too many inconsistent equations'

class State(enum.Enum):
    SAMPLING = enum.auto()
    SOLVING = enum.auto()
    VERIFYING = enum.auto()
    DONE = enum.auto()

@dataclass(frozen=True)
class Outcome:
    verdict: Verdict
    reason: Reason
    # Encoded candidate period (bit 0 set), or None if never solved
    secret: Optional[int]
    # Samples accepted by the solver (independent or redundant)
    n_samples: int
    # Inconsistent samples thrown away
    n_rejected: int
    params: MaskingParams
    budget: int

    def describe(self) -> str:
        if self.verdict == Verdict.RANDOM_PERMUTATION:
            return self.verdict.value
        return '{} ({})'.format(self.verdict.value,
                                self.reason.value.format(budget=self.budget))

class FeistelDistinguisher:
    """
    Runs the distinguisher against ``oracle``, a function on
    ``2*n_bits``-bit integers. Every ``run()`` is an independent detection:
    it draws its own masks (unless ``params`` pins them), builds the probe
    function and its bit-flip oracle for them, and starts from a fresh
    solver.
    """

    def __init__(self, oracle: Callable[[int], int], n_bits: int,
                 sampler: Optional[Sampler] = None,
                 rng: Optional[np.random.Generator] = None,
                 config: Optional[DistinguisherConfig] = None,
                 params: Optional[MaskingParams] = None):
        if config is None:
            config = DistinguisherConfig()
        if rng is None:
            rng = np.random.default_rng(config.seed)
        if sampler is None:
            sampler = get_sampler(config.sampler, rng=rng)
        if params is not None and params.n_bits != n_bits:
            raise ValueError('Masks are {} bits wide but the oracle has {}-bit '
                             'halves'.format(params.n_bits, n_bits))

        self.n_bits = n_bits
        self.config = config
        self.rng = rng
        self.sampler = sampler
        self.target = oracle
        # None means fresh masks on every run
        self.params = params
        self._last_probe = None
        self.state = None

    def probe_for(self, params: MaskingParams) \
            -> Tuple[ProbeFunction, BitFlipOracle]:
        """
        The probe function for ``params`` and its bit-flip oracle. Only the
        most recent mask pair is kept, so pinned masks build the oracle once.
        """
        if self._last_probe is None or self._last_probe[0] != params:
            probe = ProbeFunction(self.target, params)
            oracle = to_reversible(probe, probe.input_width,
                                   probe.output_width)
            self._last_probe = (params, probe, oracle)
        return self._last_probe[1:]

    @property
    def budget(self) -> int:
        return self.config.budget(self.n_bits)

    def _transition(self, state: State):
        logger.debug('%s -> %s', self.state.name if self.state else None,
                     state.name)
        self.state = state

    def _done(self, verdict, reason, secret, n_samples, n_rejected,
              params) -> Outcome:
        self._transition(State.DONE)
        outcome = Outcome(verdict, reason, secret, n_samples, n_rejected,
                          params, self.budget)
        logger.info('verdict: %s', outcome.describe())
        return outcome

    def run(self) -> Outcome:
        params = self.params
        if params is None:
            params = MaskingParams.random(self.n_bits, self.rng)
        probe, oracle = self.probe_for(params)
        solver = LinearSolver(self.n_bits)
        n_samples = 0
        n_rejected = 0

        self._transition(State.SAMPLING)
        while n_samples < self.budget:
            y = self.sampler.sample(oracle)
            if solver.try_add_encoded(y) == RowStatus.INCONSISTENT:
                # Not fatal and not counted: pick another sample
                n_rejected += 1
                if self.config.max_rejections is not None \
                        and n_rejected > self.config.max_rejections:
                    return self._done(Verdict.INCONCLUSIVE,
                                      Reason.REJECTION_LIMIT, None,
                                      n_samples, n_rejected, params)
                continue

            n_samples += 1
            if solver.rank() == self.n_bits:
                break
        else:
            return self._done(Verdict.FEISTEL, Reason.BUDGET_EXHAUSTED, None,
                              n_samples, n_rejected, params)

        self._transition(State.SOLVING)
        s = solver.solve_encoded()

        self._transition(State.VERIFYING)
        u = int(self.rng.integers(0, 1 << probe.input_width))
        verdict = Verdict.FEISTEL if probe.is_period(s, u) \
                  else Verdict.RANDOM_PERMUTATION
        logger.debug('candidate period %s checked at u=%s',
                     bin(s), bin(u))
        return self._done(verdict, Reason.SOLVED, s, n_samples, n_rejected,
                          params)

def distinguish(oracle: Callable[[int], int], n_bits: int,
                **kwargs) -> Outcome:
    """
    One-shot helper: ``FeistelDistinguisher(oracle, n_bits, ...).run()``.
    """
    return FeistelDistinguisher(oracle, n_bits, **kwargs).run()
