"""
Knobs for a distinguisher run. Defaults reproduce the reference algorithm;
the environment variables below override them, mostly for experiments::

    QDIST_SAMPLER=qiskit QDIST_SEED=7 python -m qdistinguish
"""

import os
import dataclasses
from dataclasses import dataclass
from typing import Optional

def _env_int(environ, var: str) -> Optional[int]:
    val = environ.get(var)
    if val is None or val == '':
        return None
    try:
        return int(val)
    except ValueError:
        raise ValueError('${} must be an integer, not {!r}'
                         .format(var, val)) from None

@dataclass(frozen=True)
class DistinguisherConfig:
    # Name of the sampler to request (see sampling.get_sampler())
    sampler: str = 'walsh'
    # At most budget_factor*n_bits accepted samples per run
    budget_factor: int = 2
    # Give up with an inconclusive verdict after this many inconsistent
    # samples. None means never give up
    max_rejections: Optional[int] = None
    seed: Optional[int] = None
    debug: bool = False

    def __post_init__(self):
        if self.budget_factor <= 0:
            raise ValueError('budget_factor must be positive, not '
                             + str(self.budget_factor))
        if self.max_rejections is not None and self.max_rejections < 0:
            raise ValueError('max_rejections must be nonnegative, not '
                             + str(self.max_rejections))

    def budget(self, n_bits: int) -> int:
        return self.budget_factor * n_bits

    def with_overrides(self, **overrides):
        """
        Copy of this config with the given fields replaced. ``None`` values
        are skipped, so unset command line options can be passed straight
        through.
        """
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(cls, environ=None):
        """
        Read ``$QDIST_SAMPLER``, ``$QDIST_MAX_REJECTIONS``, ``$QDIST_SEED``
        and ``$QDIST_DEBUG``.
        """
        if environ is None:
            environ = os.environ

        return cls().with_overrides(
            sampler=environ.get('QDIST_SAMPLER') or None,
            max_rejections=_env_int(environ, 'QDIST_MAX_REJECTIONS'),
            seed=_env_int(environ, 'QDIST_SEED'),
            debug=bool(environ.get('QDIST_DEBUG', False)) or None)
