# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from . import membership_type
from . import membership_membership
from . import membership_contribution
from . import membership_line_item
from . import membership_payment
