"""
Exceptions raised by the distinguisher. Everything here derives from
``DistinguisherError`` so callers can catch the whole family at once.

Note that running out of sampling budget is *not* an error: it is a normal
``Outcome`` of the controller (see ``distinguish.py``).
"""

class DistinguisherError(Exception):
    """
    Base class for every error raised by this package.
    """

    def kind(self) -> str:
        """Return a user-friendly description of what kind of error this is."""
        return 'Error'

class LinearSystemError(DistinguisherError):
    """
    A problem with the system of equations held by a ``LinearSolver``.
    """

    def kind(self) -> str:
        return 'Linear System Error'

class InconsistentEquationError(LinearSystemError):
    """
    The equation just submitted reduces to ``0 = 1`` against the independent
    equations already accepted. The solver does not store it, and the caller
    should throw the sample away rather than submit it again.
    """

    def __init__(self, coefficients, target, rank):
        self.coefficients = coefficients
        self.target = target
        self.rank = rank
        super().__init__('Equation {} . s = {} contradicts the {} independent '
                         'equations already accepted'
                         .format(coefficients, target, rank))

    def kind(self) -> str:
        return 'Inconsistent Equation'

class UnderdeterminedSystemError(LinearSystemError):
    """
    ``solve()`` was called before the system reached full rank. The controller
    checks the rank first, so seeing this means the controller is broken.
    """

    def __init__(self, rank, n_bits):
        self.rank = rank
        self.n_bits = n_bits
        super().__init__('Could not solve: only {} of {} independent '
                         'equations'.format(rank, n_bits))

    def kind(self) -> str:
        return 'Underdetermined System'

class OracleError(DistinguisherError, ValueError):
    """
    A classical function could not be turned into a bit-flip oracle, e.g.,
    because it returned a value wider than the output register.
    """

    def kind(self) -> str:
        return 'Oracle Error'
