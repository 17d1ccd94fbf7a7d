# -*- coding: utf-8 -*-


class InvalidParameterError(ValueError):
    """Malformed model parameters, e.g. a benchmark grid that is not strictly increasing."""
    pass


class CorrelationError(ValueError):
    """Correlation matrix is not symmetric positive definite."""
    pass


class StateRequirementError(ValueError):
    """A state vector was supplied to a state-independent operator, or omitted for a state-dependent one."""
    pass


class AliasMismatchError(ValueError):
    """A pricing formula was called with the alias of a different model."""
    pass
