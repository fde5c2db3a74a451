# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from odoo import models, fields, api, _
from odoo.exceptions import ValidationError
from dateutil.relativedelta import relativedelta
import logging

from odoo.addons.membership_core.models.membership_membership import INACTIVE_MEMBERSHIP_STATES

_logger = logging.getLogger(__name__)


class MembershipPeriodCalculator(models.AbstractModel):
    """Reconciles the periods of a membership with an edit before it is saved.

    The proposed values are compared with the first and last active periods
    as they are when the edit starts: coverage is shrunk when the new dates
    fall inside those periods and extended with new periods when they fall
    outside. Dates that leave the existing coverage entirely are rejected.
    """

    _name = 'membership.period.calculator'
    _description = 'Membership Period Calculator'

    @api.model
    def reconcile_membership_edit(self, membership, vals, contribution=None, renewal_date=None):
        """Apply the proposed ``vals`` of ``membership`` to its periods.

        :param membership: membership.membership record being edited
        :param vals: proposed values (``join_date``, ``end_date``, ``state``)
        :param contribution: membership.contribution paying for the edit, linked
            to any period created here
        :param renewal_date: start date override for a forward extension
        :raises ValidationError: when the new dates leave the existing coverage
        """
        membership.ensure_one()
        contribution = contribution or self.env['membership.contribution']
        with self.env.cr.savepoint():
            self._reconcile_periods(membership, vals, contribution, renewal_date)
        return True

    def _reconcile_periods(self, membership, vals, contribution, renewal_date):
        Period = self.env['membership.period']
        new_state = vals.get('state')
        join_date = fields.Date.to_date(vals.get('join_date')) or membership.join_date
        end_date = (
            fields.Date.to_date(vals.get('end_date'))
            or fields.Date.to_date(self.env.context.get('membership_period_end_date'))
            or membership.end_date
        )

        self._activate_on_status_change(membership, new_state)
        if contribution.status == 'completed':
            self._activate_paid_periods(membership, contribution)

        first_period = Period._get_first_active_period(membership)
        last_period = Period._get_last_active_period(membership)
        if not first_period or not last_period:
            return

        first_start, first_end = first_period.start_date, first_period.end_date
        last_start, last_end = last_period.start_date, last_period.end_date

        if end_date and end_date < last_start:
            raise ValidationError(_(
                "End date %(end)s precedes existing coverage starting on %(start)s",
                end=end_date, start=last_start,
            ))
        if join_date > first_end:
            raise ValidationError(_(
                "Join date %(join)s exceeds existing coverage ending on %(end)s",
                join=join_date, end=first_end,
            ))

        link_vals = Period._prepare_payment_link_vals(contribution)

        if end_date and last_start < end_date < last_end:
            last_period.end_date = end_date

        if first_start < join_date < first_end:
            first_period.start_date = join_date

        if end_date and end_date > last_end:
            start_date = last_end + relativedelta(days=1)
            if renewal_date and start_date < renewal_date < end_date:
                start_date = renewal_date
            period_vals = {
                'membership_id': membership.id,
                'start_date': start_date,
                'end_date': end_date,
                'is_active': (new_state or membership.state) not in INACTIVE_MEMBERSHIP_STATES,
            }
            period_vals.update(link_vals)
            Period.create(period_vals)
            _logger.info(f"Extended membership {membership.name} coverage to {end_date}")

        if join_date < first_start:
            period_vals = {
                'membership_id': membership.id,
                'start_date': join_date,
                'end_date': first_start - relativedelta(days=1),
                'is_active': True,
            }
            period_vals.update(link_vals)
            Period.create(period_vals)
            _logger.info(f"Extended membership {membership.name} coverage back to {join_date}")

    def _activate_on_status_change(self, membership, new_state):
        """Activate the latest period when a pending or cancelled membership becomes current"""
        if not new_state or new_state in INACTIVE_MEMBERSHIP_STATES:
            return
        if membership.state not in INACTIVE_MEMBERSHIP_STATES:
            return
        Period = self.env['membership.period']
        if Period._get_last_active_period(membership):
            return
        last_period = Period._get_last_period(membership)
        if last_period:
            last_period.action_activate()
            _logger.info(f"Activated period {last_period.id} of membership {membership.name}")

    def _activate_paid_periods(self, membership, contribution):
        periods = self.env['membership.period']._find_by_payment_link(
            contribution=contribution,
            contribution_recur=contribution.contribution_recur_id,
        ).filtered(lambda p: not p.is_active and p.membership_id == membership)

        for period in periods.sorted('start_date'):
            if period._get_overlapping_active_periods():
                _logger.warning(
                    f"Period {period.id} of membership {membership.name} is paid "
                    f"but overlaps active coverage, left inactive"
                )
                continue
            period.action_activate()
            _logger.info(f"Activated paid period {period.id} of membership {membership.name}")
