# -*- coding: utf-8 -*-

from . import res_config_settings
from . import membership_type
from . import membership_contribution_recur
from . import membership_period
from . import membership_membership
from . import membership_period_calculator
from . import membership_payment
from . import membership_period_overdue
