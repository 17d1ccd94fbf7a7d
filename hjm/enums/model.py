# -*- coding: utf-8 -*-
import os
if __name__ == "__main__":
    os.chdir(os.environ.get('PROJECT_DIR_HJM'))

from enum import Enum
from hjm.enums.helper import clean_enum_value, get_enum_member


class Capability(Enum):
    """Operations a simulation model offers to the path simulator."""
    THETA = 'theta'
    H_T = 'h_t'
    SIGMA_T = 'sigma_t'
    LOG_BANK_ACCOUNT = 'log_bank_account'
    LOG_ZERO_BOND = 'log_zero_bond'
    SIMULATION_PARAMETERS = 'simulation_parameters'

    @classmethod
    def is_valid(cls, value):
        value = clean_enum_value(value)
        return value in {enum_member.value for enum_member in cls}

    @classmethod
    def from_value(cls, value):
        """Create an enum member from the given value, if valid."""
        if isinstance(value, cls):
            return value
        return get_enum_member(cls, value)

    @property
    def display_name(self):
        dict_ = {
            'THETA': 'Drift Θ(s,t)',
            'H_T': 'Convection matrix Hᵀ(s,t)',
            'SIGMA_T': 'Volatility function Σᵀ(u)',
            'LOG_BANK_ACCOUNT': 'Log bank account',
            'LOG_ZERO_BOND': 'Log zero coupon bond',
            'SIMULATION_PARAMETERS': 'Simulation parameters',
        }
        return dict_[self.name]
