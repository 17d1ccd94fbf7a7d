# -*- coding: utf-8 -*-

from hjm.term_structures.backward_flat import BackwardFlatTermstructure, BackwardFlatParameter, BackwardFlatVolatility, flat_parameter, flat_volatility
from hjm.term_structures.correlation import CorrelationHolder
