# -*- coding: utf-8 -*-

from hjm.enums.model import Capability
