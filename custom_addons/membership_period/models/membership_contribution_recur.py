# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from odoo import models


class MembershipContributionRecur(models.Model):
    _inherit = 'membership.contribution.recur'

    def _is_offline_payment_plan(self):
        """Installment plan paid without a processor, or through a manual one"""
        self.ensure_one()
        if not self.installments:
            return False
        if not self.payment_processor_id:
            return True
        manual_processor_ids = self.env['res.config.settings']._get_manual_processor_ids()
        return self.payment_processor_id.id in manual_processor_ids
