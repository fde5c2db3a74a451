# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from odoo import models, fields, api, _
from odoo.exceptions import ValidationError

CONTRIBUTION_STATUSES = [
    ('pending', 'Pending'),
    ('in_progress', 'In Progress'),
    ('completed', 'Completed'),
    ('partially_paid', 'Partially Paid'),
    ('overdue', 'Overdue'),
    ('failed', 'Failed'),
    ('cancelled', 'Cancelled'),
    ('refunded', 'Refunded'),
]


class MembershipPaymentProcessor(models.Model):
    _name = 'membership.payment.processor'
    _description = 'Membership Payment Processor'
    _order = 'name'

    name = fields.Char(string='Name', required=True)
    active = fields.Boolean(string='Active', default=True)


class MembershipContributionRecur(models.Model):
    """Recurring contribution: a payment plan paid in installments."""

    _name = 'membership.contribution.recur'
    _description = 'Recurring Contribution'
    _inherit = ['mail.thread']
    _order = 'start_date desc, id desc'

    name = fields.Char(string='Reference', required=True, default=lambda self: _('Payment Plan'))
    partner_id = fields.Many2one('res.partner', string='Contributor', required=True)
    amount = fields.Float(string='Installment Amount', digits='Product Price', default=0.0)
    start_date = fields.Date(string='Start Date', default=fields.Date.context_today)

    installments = fields.Integer(
        string='Installments',
        default=0,
        help='Number of scheduled installments. Zero for an open-ended recurring contribution'
    )

    status = fields.Selection(
        CONTRIBUTION_STATUSES,
        string='Status',
        default='pending',
        required=True,
        tracking=True
    )

    payment_processor_id = fields.Many2one(
        'membership.payment.processor',
        string='Payment Processor',
        help='Empty for offline (pay later) plans'
    )

    contribution_ids = fields.One2many(
        'membership.contribution',
        'contribution_recur_id',
        string='Installment Payments'
    )

    line_item_ids = fields.One2many(
        'membership.line.item',
        'contribution_recur_id',
        string='Line Items'
    )

    contribution_count = fields.Integer(
        string='Installments Created',
        compute='_compute_contribution_count'
    )

    @api.depends('contribution_ids')
    def _compute_contribution_count(self):
        for plan in self:
            plan.contribution_count = len(plan.contribution_ids)

    @api.constrains('installments')
    def _check_installments(self):
        for plan in self:
            if plan.installments < 0:
                raise ValidationError(_("Installments cannot be negative"))

    def _get_latest_due_contribution(self, as_of=None):
        """Most recent installment received on or before ``as_of`` (today by default)"""
        self.ensure_one()
        as_of = as_of or fields.Date.context_today(self)
        return self.env['membership.contribution'].search([
            ('contribution_recur_id', '=', self.id),
            ('receive_date', '<=', as_of),
        ], order='receive_date desc, id desc', limit=1)


class MembershipContribution(models.Model):
    _name = 'membership.contribution'
    _description = 'Contribution'
    _inherit = ['mail.thread']
    _order = 'receive_date desc, id desc'

    name = fields.Char(string='Reference', required=True, default=lambda self: _('Contribution'))
    partner_id = fields.Many2one('res.partner', string='Contributor', required=True)
    amount = fields.Float(string='Amount', digits='Product Price', default=0.0)

    receive_date = fields.Date(
        string='Receive Date',
        required=True,
        default=fields.Date.context_today,
        tracking=True
    )

    status = fields.Selection(
        CONTRIBUTION_STATUSES,
        string='Status',
        default='pending',
        required=True,
        tracking=True
    )

    contribution_recur_id = fields.Many2one(
        'membership.contribution.recur',
        string='Payment Plan',
        ondelete='restrict',
        index=True
    )

    membership_payment_ids = fields.One2many(
        'membership.payment',
        'contribution_id',
        string='Membership Payments'
    )

    def action_complete(self):
        self.write({'status': 'completed'})
        return True
