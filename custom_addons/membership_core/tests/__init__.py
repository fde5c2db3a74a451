# -*- coding: utf-8 -*-

from . import test_membership_types
from . import test_membership_core
from . import test_contributions
