# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from odoo import models, fields, api, _
from odoo.tools import str2bool

from ..exceptions import PeriodConfigurationError

MANUAL_PROCESSORS_PARAM = 'membership_period.manual_processor_ids'


class ResConfigSettings(models.TransientModel):
    _inherit = 'res.config.settings'

    # Overdue payment handling
    membership_period_overdue_disable = fields.Boolean(
        'Deactivate Overdue Periods',
        config_parameter='membership_period.overdue_disable',
        help="Deactivate active periods whose payment is overdue"
    )

    membership_period_disable_days = fields.Integer(
        'Days Before Deactivation',
        default=30,
        config_parameter='membership_period.disable_days',
        help="Number of days after the receive date before an unpaid period is deactivated"
    )

    membership_period_overdue_adjust = fields.Boolean(
        'Adjust End Date of Overdue Periods',
        config_parameter='membership_period.overdue_adjust',
        help="Move the end date of active periods whose payment is overdue"
    )

    membership_period_adjust_days = fields.Integer(
        'Days Before End Date Adjustment',
        default=30,
        config_parameter='membership_period.adjust_days',
        help="Number of days after the receive date before the end date of an unpaid period is adjusted"
    )

    membership_period_end_date_offset = fields.Integer(
        'End Date Offset (Days)',
        default=0,
        config_parameter='membership_period.end_date_offset',
        help="Number of days added to the end date of an overdue period"
    )

    # Offline payment plans
    membership_period_manual_processor_ids = fields.Many2many(
        'membership.payment.processor',
        string='Manual Payment Processors',
        help="Payment plans using these processors are treated as offline (pay later) plans"
    )

    @api.model
    def get_values(self):
        """Override to read the manual processors from their id list parameter"""
        res = super().get_values()
        processor_ids = self._get_manual_processor_ids()
        existing = self.env['membership.payment.processor'].browse(processor_ids).exists()
        res['membership_period_manual_processor_ids'] = [(6, 0, existing.ids)]
        return res

    def set_values(self):
        """Override to store the manual processors as an id list parameter"""
        super().set_values()
        ICPSudo = self.env['ir.config_parameter'].sudo()
        ids = self.membership_period_manual_processor_ids.ids
        ICPSudo.set_param(MANUAL_PROCESSORS_PARAM, ','.join(str(i) for i in ids) if ids else False)

    @api.model
    def _get_manual_processor_ids(self):
        value = self.env['ir.config_parameter'].sudo().get_param(MANUAL_PROCESSORS_PARAM, '')
        try:
            return [int(part) for part in value.split(',') if part.strip()]
        except ValueError:
            raise PeriodConfigurationError(
                _("Invalid manual payment processor list: %s") % value
            )

    @api.model
    def _get_membership_period_int(self, key, default):
        value = self.env['ir.config_parameter'].sudo().get_param(key, default)
        try:
            value = int(value)
        except (TypeError, ValueError):
            raise PeriodConfigurationError(
                _("Setting %s must be a whole number of days, got %r") % (key, value)
            )
        if value < 0:
            raise PeriodConfigurationError(
                _("Setting %s cannot be negative") % key
            )
        return value

    @api.model
    def _get_membership_period_settings(self):
        """Parsed membership period settings.

        Raises PeriodConfigurationError for malformed or negative values.
        """
        ICPSudo = self.env['ir.config_parameter'].sudo()
        return {
            'overdue_disable': str2bool(ICPSudo.get_param('membership_period.overdue_disable', 'False'), False),
            'disable_days': self._get_membership_period_int('membership_period.disable_days', 30),
            'overdue_adjust': str2bool(ICPSudo.get_param('membership_period.overdue_adjust', 'False'), False),
            'adjust_days': self._get_membership_period_int('membership_period.adjust_days', 30),
            'end_date_offset': self._get_membership_period_int('membership_period.end_date_offset', 0),
            'manual_processor_ids': self._get_manual_processor_ids(),
        }
