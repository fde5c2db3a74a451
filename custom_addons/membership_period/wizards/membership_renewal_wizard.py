# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from odoo import models, fields, api, _
from odoo.exceptions import ValidationError, UserError
import logging
_logger = logging.getLogger(__name__)

RENEWABLE_STATES = ('pending', 'active', 'grace')


class MembershipPeriodRenewalWizard(models.TransientModel):
    _name = 'membership.period.renewal.wizard'
    _description = 'Membership Renewal Wizard'

    # Membership being renewed
    membership_id = fields.Many2one(
        'membership.membership',
        string='Membership',
        required=True,
        help='Membership to renew'
    )

    partner_id = fields.Many2one(
        related='membership_id.partner_id',
        string='Member',
        readonly=True
    )

    membership_type_id = fields.Many2one(
        related='membership_id.membership_type_id',
        string='Membership Type',
        readonly=True
    )

    current_end_date = fields.Date(
        related='membership_id.end_date',
        string='Current End Date',
        readonly=True
    )

    # Renewal configuration
    renewal_date = fields.Date(
        string='Renewal Date',
        required=True,
        default=fields.Date.context_today,
        help='The new period starts on this date when it falls after the current coverage'
    )

    new_end_date = fields.Date(
        string='New End Date',
        compute='_compute_new_end_date',
        store=True,
        readonly=False,
        help='End date of the renewed membership, one term after the current end date by default'
    )

    # Payment information
    contribution_id = fields.Many2one(
        'membership.contribution',
        string='Payment',
        domain="[('partner_id', '=', partner_id)]",
        help='Contribution paying for the renewal, linked to the new period'
    )

    payment_pending = fields.Boolean(
        string='Payment Pending',
        help='Renew now although the payment has not been received yet'
    )

    notes = fields.Text(
        string='Renewal Notes'
    )

    @api.depends('membership_id', 'membership_id.end_date', 'membership_id.membership_type_id')
    def _compute_new_end_date(self):
        for wizard in self:
            if wizard.membership_id:
                wizard.new_end_date = wizard.membership_id._calculate_renewal_end_date()
            else:
                wizard.new_end_date = False

    @api.onchange('contribution_id')
    def _onchange_contribution_id(self):
        if self.contribution_id:
            self.payment_pending = self.contribution_id.status == 'pending'

    def _get_renewal_context(self):
        self.ensure_one()
        context = {
            'membership_period_renewal': True,
            'membership_period_renewal_date': self.renewal_date,
            'membership_period_pending_payment': self.payment_pending,
        }
        if self.contribution_id:
            context['membership_period_contribution_id'] = self.contribution_id.id
        return context

    def _prepare_renewal_vals(self):
        """Suspended, terminated and cancelled memberships keep their status.

        A renewal paid by a pending single contribution leaves the membership
        pending, so the new period stays inactive until the payment completes.
        """
        self.ensure_one()
        vals = {'end_date': self.new_end_date}
        if self.membership_id.state in RENEWABLE_STATES:
            if self.payment_pending and not self.contribution_id.contribution_recur_id:
                vals['state'] = 'pending'
            else:
                vals['state'] = 'active'
        return vals

    def action_renew_membership(self):
        """Execute the membership renewal"""
        self.ensure_one()

        if not self.new_end_date:
            raise UserError(_("Lifetime memberships do not need to be renewed."))

        membership = self.membership_id
        if membership.end_date and self.new_end_date <= membership.end_date:
            raise ValidationError(_("The new end date must be after the current end date."))

        membership.with_context(**self._get_renewal_context()).write(self._prepare_renewal_vals())
        _logger.info(f"Membership {membership.name} renewed until {membership.end_date}")

        if self.notes:
            membership.message_post(
                body=_("Renewal processed: %s") % self.notes,
                message_type='comment'
            )

        # Return to membership form
        return {
            'type': 'ir.actions.act_window',
            'name': _('Membership Renewed'),
            'res_model': 'membership.membership',
            'res_id': membership.id,
            'view_mode': 'form',
            'target': 'current'
        }
