# -*- coding: utf-8 -*-

from hjm.utils.errors import InvalidParameterError, CorrelationError, StateRequirementError, AliasMismatchError
from hjm.utils.integration import intersect_interval, scalar_integral, vector_integral
from hjm.utils.settings import *
