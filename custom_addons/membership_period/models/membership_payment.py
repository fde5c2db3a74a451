# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from collections import Counter

from odoo import models, api, _
from odoo.exceptions import MissingError
from dateutil.relativedelta import relativedelta
import logging

_logger = logging.getLogger(__name__)


class PaymentEventScope:
    """Membership payment events handled during one processing run.

    Pass the same scope through the ``payment_event_scope`` context key to
    share it between several payment creations. It is never persisted.
    """

    def __init__(self):
        self._seen = Counter()

    def register(self, event_id):
        """Record one delivery of ``event_id`` and return how often it was seen"""
        self._seen[event_id] += 1
        return self._seen[event_id]

    def __contains__(self, event_id):
        return event_id in self._seen


class MembershipPayment(models.Model):
    _inherit = 'membership.payment'

    @api.model_create_multi
    def create(self, vals_list):
        payments = super().create(vals_list)
        scope = self.env.context.get('payment_event_scope') or PaymentEventScope()
        period = self.env['membership.period'].browse(self.env.context.get('membership_period_id'))
        for payment in payments:
            payment._process_payment_event(scope, period=period)
        return payments

    def _process_payment_event(self, scope, period=None):
        """Reconcile the periods of the paid membership with this payment.

        :param scope: PaymentEventScope of the current run
        :param period: membership.period already created for this payment, if any
        """
        self.ensure_one()
        if not self.exists():
            raise MissingError(_("Membership payment %s does not exist") % self.id)
        membership = self.membership_id.exists()
        contribution = self.contribution_id.exists()
        if not membership or not contribution:
            raise MissingError(_("Membership payment %s refers to a deleted membership or contribution") % self.id)

        if scope.register(self.id) > 1:
            _logger.info(f"Membership payment {self.id} already processed, skipping")
            return False

        plan = contribution.contribution_recur_id
        if plan:
            self._fix_line_item_membership(plan)
        if contribution.status == 'pending':
            self._create_missing_period(plan, period)
        self._link_last_period()
        return True

    def _fix_line_item_membership(self, plan):
        """Attribute the plan's line item for this membership type to this membership.

        Among the line items of the plan sold from the membership's type and
        already attributed to a membership, the one with the lowest id is used.
        """
        line_item = self.env['membership.line.item'].search([
            ('contribution_recur_id', '=', plan.id),
            ('membership_type_id', '=', self.membership_id.membership_type_id.id),
            ('membership_id', '!=', False),
        ], order='id asc', limit=1)
        if line_item and line_item.membership_id != self.membership_id:
            _logger.info(
                f"Line item {line_item.id} of payment plan {plan.id} moved from "
                f"membership {line_item.membership_id.name} to {self.membership_id.name}"
            )
            line_item.membership_id = self.membership_id

    def _create_missing_period(self, plan, period):
        membership = self.membership_id
        if plan and not membership.contribution_recur_id and plan.contribution_count != 1:
            # Only the first installment of a plan opens a period
            return

        period = period or self._get_known_period(plan)
        if period:
            period.action_deactivate()
            return

        Period = self.env['membership.period']
        last_active = Period._get_last_active_period(membership)
        if last_active:
            start_date = last_active.end_date + relativedelta(days=1)
        else:
            start_date = membership.join_date

        end_date = membership.membership_type_id._compute_period_end_date(start_date)
        if not end_date:
            _logger.warning(f"No pending period created for lifetime membership {membership.name}")
            return

        Period.create({
            'membership_id': membership.id,
            'start_date': start_date,
            'end_date': end_date,
            'is_active': False,
        })

    def _get_known_period(self, plan):
        """Period already opened for this payment when the membership was created.

        That is the latest period of the membership funded by this payment, or
        by its plan when the plan is not the membership's recurring link. A
        membership without coverage whose latest period has no payment link
        yet is waiting for this payment too.
        """
        Period = self.env['membership.period']
        membership = self.membership_id
        if not plan:
            funded = Period._find_by_payment_link(contribution=self.contribution_id)
        elif not membership.contribution_recur_id:
            funded = Period._find_by_payment_link(contribution_recur=plan)
        else:
            funded = Period
        funded = funded.filtered(lambda p: p.membership_id == membership)
        if funded:
            return funded.sorted(lambda p: (p.start_date, p.id))[-1]

        if Period._get_last_active_period(membership):
            return Period
        last_period = Period._get_last_period(membership)
        if last_period.payment_link_type == 'none':
            return last_period
        return Period

    def _link_last_period(self):
        Period = self.env['membership.period']
        last_period = Period._get_last_period(self.membership_id)
        if last_period and last_period.payment_link_type == 'none':
            last_period.write(Period._prepare_payment_link_vals(self.contribution_id))
