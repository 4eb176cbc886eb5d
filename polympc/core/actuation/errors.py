"""
Exceptions raised by the MPC core.
"""


class MPCError(Exception):
    """Base class for all controller errors."""


class ConfigError(MPCError, ValueError):
    """Raised when a configuration value is missing or out of range."""


class InvalidInputError(MPCError, ValueError):
    """Raised when a cycle's state or reference polynomial is malformed."""


class LayoutError(MPCError, AssertionError):
    """Raised when a vector disagrees with the decision-vector layout."""


class SolverError(MPCError):
    """
    Raised when the NLP solver does not return a usable solution.

    Args:
        result (SolveResult): The failed solve, carrying the IPOPT status.
    """

    def __init__(self, result):
        self.result = result
        super().__init__(f"MPC solve failed: {result.status}")
