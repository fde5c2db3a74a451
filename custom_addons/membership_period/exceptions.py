# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from odoo.exceptions import UserError


class PeriodConfigurationError(UserError):
    """Membership period settings are missing or invalid"""


class OverduePeriodSweepError(UserError):
    """One or more overdue periods could not be updated.

    ``errors`` holds one message per failed period. The sweep that raises it
    has been rolled back as a whole.
    """

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))
