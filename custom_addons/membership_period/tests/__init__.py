# -*- coding: utf-8 -*-

from . import test_end_date
from . import test_period_calculator
from . import test_payment_event
from . import test_overdue_sweep
from . import test_settings
from . import test_renewal_wizard
