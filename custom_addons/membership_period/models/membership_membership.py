# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from odoo import models, fields, api, _
from odoo.exceptions import MissingError
from dateutil.relativedelta import relativedelta
import logging

_logger = logging.getLogger(__name__)

# Membership fields whose change triggers a period reconciliation
RECONCILED_FIELDS = ('join_date', 'end_date', 'state')


class MembershipMembership(models.Model):
    _inherit = 'membership.membership'

    period_ids = fields.One2many(
        'membership.period',
        'membership_id',
        string='Periods'
    )

    active_period_count = fields.Integer(
        string='Active Periods',
        compute='_compute_active_period_count'
    )

    @api.depends('period_ids.is_active')
    def _compute_active_period_count(self):
        for membership in self:
            membership.active_period_count = len(membership.period_ids.filtered('is_active'))

    @api.model_create_multi
    def create(self, vals_list):
        memberships = super().create(vals_list)
        contribution = self._get_period_contribution()
        for membership in memberships:
            membership._create_initial_period(contribution)
        return memberships

    def write(self, vals):
        contribution = self._get_period_contribution()
        if not contribution and not any(name in vals for name in RECONCILED_FIELDS):
            return super().write(vals)

        calculator = self.env['membership.period.calculator']
        renewal_date = fields.Date.to_date(self.env.context.get('membership_period_renewal_date'))
        for membership in self:
            membership_vals = membership._prepare_period_write_vals(vals, contribution)
            calculator.reconcile_membership_edit(
                membership, membership_vals,
                contribution=contribution,
                renewal_date=renewal_date,
            )
            super(MembershipMembership, membership).write(membership_vals)
        return True

    @api.model
    def _get_period_contribution(self):
        """Payment contribution of the current operation, from the context"""
        contribution_id = self.env.context.get('membership_period_contribution_id')
        if not contribution_id:
            return self.env['membership.contribution']
        contribution = self.env['membership.contribution'].browse(contribution_id).exists()
        if not contribution:
            raise MissingError(_("Contribution %s does not exist") % contribution_id)
        return contribution

    def _prepare_period_write_vals(self, vals, contribution):
        """Adjust the proposed end date for payment plan installments and renewals"""
        self.ensure_one()
        vals = dict(vals)
        plan = contribution.contribution_recur_id
        if not plan:
            return vals

        if 'end_date' in vals and contribution.status != 'pending' and plan._is_offline_payment_plan():
            # Each paid installment must not extend the membership again
            _logger.info(
                "Ignoring end date change of membership %s for installment %s of offline payment plan %s",
                self.name, contribution.id, plan.id
            )
            vals.pop('end_date')

        context = self.env.context
        if (context.get('membership_period_renewal') and plan.installments > 1
                and context.get('membership_period_pending_payment')):
            renewal_end_date = self._calculate_renewal_end_date()
            if renewal_end_date:
                vals['end_date'] = renewal_end_date
        return vals

    def _calculate_renewal_end_date(self):
        """End date of the next term, starting the day after the current end date"""
        self.ensure_one()
        if self.end_date:
            start_date = self.end_date + relativedelta(days=1)
        else:
            start_date = self.join_date
        return self.membership_type_id._compute_period_end_date(start_date)

    def _create_initial_period(self, contribution=None):
        self.ensure_one()
        start_date = self.start_date or self.join_date
        end_date = self.end_date or self.membership_type_id._compute_period_end_date(start_date)
        if not end_date:
            _logger.info(f"No initial period for lifetime membership {self.name}")
            return self.env['membership.period']

        vals = {
            'membership_id': self.id,
            'start_date': start_date,
            'end_date': end_date,
            'is_active': self.is_paid_up(),
        }
        vals.update(self.env['membership.period']._prepare_payment_link_vals(contribution))
        return self.env['membership.period'].create(vals)
