# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from odoo import models, fields, api
from dateutil.relativedelta import relativedelta
import logging

from ..exceptions import OverduePeriodSweepError

_logger = logging.getLogger(__name__)


class MembershipPeriodOverdueProcessor(models.AbstractModel):
    """Deactivates or adjusts active periods whose payment is overdue.

    A period is overdue after N days when it is funded by a contribution
    received at least N days ago and not completed, or by a payment plan whose
    latest due installment matches the same condition. Both actions run in a
    single savepoint: if any period fails to update, nothing is changed.
    """

    _name = 'membership.period.overdue.processor'
    _description = 'Overdue Membership Period Processor'

    @api.model
    def _cron_process_overdue_periods(self):
        """Scheduled action entry point"""
        try:
            self.run_overdue_sweep()
        except OverduePeriodSweepError as e:
            _logger.error(f"Overdue period sweep rolled back, {len(e.errors)} period(s) failed")
            raise

    @api.model
    def run_overdue_sweep(self):
        """Apply the enabled overdue actions to all active periods.

        :returns: True when every update succeeded
        :raises PeriodConfigurationError: before any change, on invalid settings
        :raises OverduePeriodSweepError: after rolling back every change, when
            at least one period could not be updated
        """
        settings = self.env['res.config.settings']._get_membership_period_settings()
        today = fields.Date.context_today(self)
        errors = []

        with self.env.cr.savepoint():
            if settings['overdue_disable']:
                periods = self._get_overdue_periods(settings['disable_days'], today)
                _logger.info(f"Deactivating {len(periods)} overdue membership periods")
                for period in periods:
                    self._update_period(period, {'is_active': False}, errors)

            if settings['overdue_adjust']:
                periods = self._get_overdue_periods(settings['adjust_days'], today)
                _logger.info(f"Adjusting end date of {len(periods)} overdue membership periods")
                for period in periods:
                    self._adjust_end_date(period, settings['end_date_offset'], errors)

            if errors:
                raise OverduePeriodSweepError(errors)

        return True

    @api.model
    def _get_overdue_periods(self, days, today):
        cutoff = today - relativedelta(days=days)
        Period = self.env['membership.period']

        contribution_periods = Period.search([
            ('is_active', '=', True),
            ('contribution_id', '!=', False),
            ('contribution_id.receive_date', '<=', cutoff),
            ('contribution_id.status', '!=', 'completed'),
        ])

        plan_periods = Period.search([
            ('is_active', '=', True),
            ('contribution_recur_id', '!=', False),
        ]).filtered(lambda p: self._is_plan_overdue(p.contribution_recur_id, cutoff, today))

        return (contribution_periods | plan_periods).sorted('id')

    @api.model
    def _is_plan_overdue(self, plan, cutoff, today):
        latest = plan._get_latest_due_contribution(as_of=today)
        return bool(latest) and latest.receive_date <= cutoff and latest.status != 'completed'

    @api.model
    def _adjust_end_date(self, period, offset_days, errors):
        new_end_date = period.end_date + relativedelta(days=offset_days)
        return self._update_period(period, {'end_date': new_end_date}, errors)

    @api.model
    def _update_period(self, period, vals, errors):
        try:
            with self.env.cr.savepoint():
                period.write(vals)
        except Exception as e:
            message = f"Overdue membership period {period.id} could not be updated: {e}"
            _logger.warning(message)
            errors.append(message)
            return False
        return True
