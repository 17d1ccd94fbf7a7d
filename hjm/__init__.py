# -*- coding: utf-8 -*-

from hjm.utils import InvalidParameterError, CorrelationError, StateRequirementError, AliasMismatchError
from hjm.enums import Capability
from hjm.term_structures import BackwardFlatParameter, BackwardFlatVolatility, CorrelationHolder, flat_parameter, flat_volatility
from hjm.pricing_engine import GaussianHjmModel, ModelState, model_state
