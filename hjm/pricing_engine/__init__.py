# -*- coding: utf-8 -*-

from hjm.pricing_engine.model_state import ModelState, model_state
from hjm.pricing_engine.model import Model, QuantoModel, StateDependence, StateIndependent, StateDependentOn, check_state, quanto_drift
from hjm.pricing_engine.gaussian_hjm import GaussianHjmModel, GaussianHjmModelVolatility, hybrid_volatility
