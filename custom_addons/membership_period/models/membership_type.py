# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from odoo import models, fields, _
from odoo.exceptions import UserError
from dateutil.relativedelta import relativedelta


class MembershipType(models.Model):
    _inherit = 'membership.type'

    def _compute_period_end_date(self, start_date):
        """Last covered day of a term starting on ``start_date``.

        Returns False for lifetime types, which have no end.
        """
        self.ensure_one()
        start_date = fields.Date.to_date(start_date)
        interval = self.duration_interval
        if self.duration_unit == 'day':
            term = relativedelta(days=interval)
        elif self.duration_unit == 'month':
            term = relativedelta(months=interval)
        elif self.duration_unit == 'year':
            term = relativedelta(years=interval)
        elif self.duration_unit == 'lifetime':
            return False
        else:
            raise UserError(_("Unknown duration unit %s on membership type %s") % (self.duration_unit, self.name))
        return start_date + term - relativedelta(days=1)
