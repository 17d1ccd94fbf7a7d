# -*- coding: utf-8 -*-

# Quadrature (scipy.integrate.quad / quad_vec)
QUAD_EPSABS = 1.49e-8
QUAD_EPSREL = 1.49e-8
QUAD_LIMIT = 100 # Max. number of sub-intervals per quadrature call. scipy's default of 50 is too low for long horizons.

# Correlation matrices
CORRELATION_SYMMETRY_TOL = 1e-12

# Alias conventions for the joint simulation state.
# State alias of the k-th factor of model 'EUR' is 'EUR_x_1', the bank account state is 'EUR_s'.
STATE_ALIAS_SEP = '_x_'
BANK_ACCOUNT_ALIAS_SUFFIX = '_s'
FACTOR_ALIAS_SEP = '_f_'
CORRELATION_ALIAS_SEP = '<>' # Key separator for correlation pairs, e.g. 'EUR_f_1<>USD_f_1'
