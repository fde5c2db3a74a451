# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from odoo import models, fields, api

# Statuses that do not count as a paid-up membership
INACTIVE_MEMBERSHIP_STATES = ('pending', 'cancelled')


class MembershipMembership(models.Model):
    _name = 'membership.membership'
    _description = 'Membership Record'
    _inherit = ['mail.thread']
    _order = 'join_date desc, name'

    _sql_constraints = [
        ('unique_membership_number', 'unique(name)', 'Membership number must be unique'),
        ('valid_date_range', 'check(end_date IS NULL OR start_date IS NULL OR end_date >= start_date)',
         'End date must be after start date'),
    ]

    name = fields.Char(
        string='Membership Number',
        required=True,
        copy=False,
        default='New',
        tracking=True
    )

    partner_id = fields.Many2one(
        'res.partner',
        string='Member',
        required=True,
        ondelete='cascade',
        tracking=True
    )

    membership_type_id = fields.Many2one(
        'membership.type',
        string='Membership Type',
        required=True,
        ondelete='restrict',
        tracking=True
    )

    # Closed set of lifecycle statuses
    state = fields.Selection([
        ('pending', 'Pending'),
        ('active', 'Active'),
        ('grace', 'Grace Period'),
        ('suspended', 'Suspended'),
        ('terminated', 'Terminated'),
        ('cancelled', 'Cancelled')
    ], string='Status',
       default='pending',
       required=True,
       tracking=True)

    join_date = fields.Date(
        string='Member Since',
        required=True,
        default=fields.Date.context_today,
        tracking=True
    )

    start_date = fields.Date(
        string='Start Date',
        tracking=True
    )

    end_date = fields.Date(
        string='End Date',
        help='Membership expiration date. Empty for lifetime memberships',
        tracking=True
    )

    contribution_recur_id = fields.Many2one(
        'membership.contribution.recur',
        string='Payment Plan',
        ondelete='set null',
        help='Recurring contribution paying for this membership'
    )

    payment_ids = fields.One2many(
        'membership.payment',
        'membership_id',
        string='Payments'
    )

    notes = fields.Text(string='Internal Notes')

    @api.depends('name', 'partner_id.name', 'membership_type_id.name')
    def _compute_display_name(self):
        for record in self:
            if record.name and record.name != 'New':
                record.display_name = f"{record.name} - {record.partner_id.name}"
            else:
                record.display_name = f"{record.membership_type_id.name} - {record.partner_id.name}"

    @api.model_create_multi
    def create(self, vals_list):
        """Assign membership numbers from the sequence"""
        for vals in vals_list:
            if vals.get('name', 'New') == 'New':
                vals['name'] = self.env['ir.sequence'].next_by_code('membership.membership') or 'New'
        return super().create(vals_list)

    def is_paid_up(self):
        """True unless the membership is pending payment or cancelled"""
        self.ensure_one()
        return self.state not in INACTIVE_MEMBERSHIP_STATES
