# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from odoo import models, fields, api, _
from odoo.exceptions import ValidationError


class MembershipPeriod(models.Model):
    """One contiguous, inclusive segment of a membership's coverage.

    Active periods of a membership never overlap. Inactive (pending) periods
    wait for their backing payment and may leave gaps in the coverage.
    """

    _name = 'membership.period'
    _description = 'Membership Period'
    _inherit = ['mail.thread']
    _order = 'membership_id, start_date, id'
    _rec_name = 'membership_id'

    _sql_constraints = [
        ('valid_period_range', 'check(end_date >= start_date)',
         'Period end date cannot be before its start date'),
        ('single_payment_link',
         'check(contribution_id IS NULL OR contribution_recur_id IS NULL)',
         'A period is funded either by a contribution or by a payment plan, not both'),
    ]

    membership_id = fields.Many2one(
        'membership.membership',
        string='Membership',
        required=True,
        ondelete='cascade',
        index=True
    )

    partner_id = fields.Many2one(
        related='membership_id.partner_id',
        string='Member',
        store=True
    )

    membership_type_id = fields.Many2one(
        related='membership_id.membership_type_id',
        string='Membership Type'
    )

    start_date = fields.Date(
        string='Start Date',
        required=True,
        tracking=True
    )

    end_date = fields.Date(
        string='End Date',
        required=True,
        tracking=True
    )

    is_active = fields.Boolean(
        string='Active',
        default=True,
        tracking=True,
        help='Inactive periods are pending their payment and do not count as coverage'
    )

    # Payment link
    contribution_id = fields.Many2one(
        'membership.contribution',
        string='Contribution',
        ondelete='set null',
        index=True
    )

    contribution_recur_id = fields.Many2one(
        'membership.contribution.recur',
        string='Payment Plan',
        ondelete='set null',
        index=True
    )

    payment_link_type = fields.Selection([
        ('none', 'None'),
        ('contribution', 'Contribution'),
        ('contribution_recur', 'Payment Plan'),
    ], string='Funded By',
       compute='_compute_payment_link_type',
       store=True)

    @api.depends('contribution_id', 'contribution_recur_id')
    def _compute_payment_link_type(self):
        for period in self:
            if period.contribution_recur_id:
                period.payment_link_type = 'contribution_recur'
            elif period.contribution_id:
                period.payment_link_type = 'contribution'
            else:
                period.payment_link_type = 'none'

    @api.depends('membership_id', 'start_date', 'end_date')
    def _compute_display_name(self):
        for period in self:
            period.display_name = f"{period.membership_id.name}: {period.start_date} - {period.end_date}"

    @api.constrains('membership_id', 'start_date', 'end_date', 'is_active')
    def _check_active_overlap(self):
        for period in self.filtered('is_active'):
            if period._get_overlapping_active_periods():
                raise ValidationError(_(
                    "Active period %(start)s - %(end)s overlaps another active period of membership %(membership)s",
                    start=period.start_date,
                    end=period.end_date,
                    membership=period.membership_id.name,
                ))

    def _get_overlapping_active_periods(self):
        self.ensure_one()
        return self.search([
            ('id', '!=', self.id),
            ('membership_id', '=', self.membership_id.id),
            ('is_active', '=', True),
            ('start_date', '<=', self.end_date),
            ('end_date', '>=', self.start_date),
        ])

    # Boundary queries

    @api.model
    def _get_first_active_period(self, membership):
        return self.search([
            ('membership_id', '=', membership.id),
            ('is_active', '=', True),
        ], order='start_date asc, id asc', limit=1)

    @api.model
    def _get_last_active_period(self, membership):
        return self.search([
            ('membership_id', '=', membership.id),
            ('is_active', '=', True),
        ], order='start_date desc, id desc', limit=1)

    @api.model
    def _get_last_period(self, membership):
        return self.search([
            ('membership_id', '=', membership.id),
        ], order='start_date desc, id desc', limit=1)

    @api.model
    def _find_by_payment_link(self, contribution=None, contribution_recur=None):
        """Periods funded by the given contribution and/or payment plan"""
        domain = []
        if contribution:
            domain.append(('contribution_id', '=', contribution.id))
        if contribution_recur:
            domain.append(('contribution_recur_id', '=', contribution_recur.id))
        if not domain:
            return self.browse()
        if len(domain) == 2:
            domain.insert(0, '|')
        return self.search(domain)

    @api.model
    def _prepare_payment_link_vals(self, contribution):
        """Link a period to the payment plan of the contribution, or to the contribution itself"""
        if not contribution:
            return {}
        if contribution.contribution_recur_id:
            return {'contribution_recur_id': contribution.contribution_recur_id.id}
        return {'contribution_id': contribution.id}

    def action_activate(self):
        self.write({'is_active': True})
        return True

    def action_deactivate(self):
        self.write({'is_active': False})
        return True
