# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from odoo import models, fields, api, _
from odoo.exceptions import ValidationError


class MembershipType(models.Model):
    _name = 'membership.type'
    _description = 'Membership Type Configuration'
    _inherit = ['mail.thread']
    _order = 'sequence, name'
    _rec_name = 'name'

    _sql_constraints = [
        ('code_unique', 'unique(code)', 'Membership type code must be unique'),
        ('positive_price', 'check(price >= 0)', 'Price must be positive or zero'),
    ]

    name = fields.Char(
        string='Membership Type Name',
        required=True,
        help='Display name for membership type',
        tracking=True,
        translate=True
    )

    code = fields.Char(
        string='Unique Code',
        required=True,
        size=20,
        help='Internal reference code for integration and reporting',
        tracking=True
    )

    sequence = fields.Integer(
        string='Display Order',
        default=10
    )

    active = fields.Boolean(
        string='Active',
        default=True,
        tracking=True
    )

    price = fields.Float(
        string='Membership Fee',
        digits='Product Price',
        default=0.0,
        tracking=True
    )

    # Term length, drives period end dates
    duration_unit = fields.Selection([
        ('day', 'Day'),
        ('month', 'Month'),
        ('year', 'Year'),
        ('lifetime', 'Lifetime'),
    ], string='Duration Unit',
       required=True,
       default='year',
       tracking=True,
       help='Calendar unit of one membership term')

    duration_interval = fields.Integer(
        string='Duration Interval',
        required=True,
        default=1,
        tracking=True,
        help='Number of duration units in one membership term. Ignored for lifetime memberships'
    )

    is_lifetime = fields.Boolean(
        string='Lifetime Membership',
        compute='_compute_is_lifetime',
        store=True
    )

    membership_ids = fields.One2many(
        'membership.membership',
        'membership_type_id',
        string='Memberships'
    )

    membership_count = fields.Integer(
        string='Active Memberships',
        compute='_compute_membership_count'
    )

    @api.depends('duration_unit')
    def _compute_is_lifetime(self):
        for record in self:
            record.is_lifetime = record.duration_unit == 'lifetime'

    def _compute_membership_count(self):
        for record in self:
            record.membership_count = self.env['membership.membership'].search_count([
                ('membership_type_id', '=', record.id),
                ('state', 'in', ['active', 'grace'])
            ])

    @api.constrains('duration_unit', 'duration_interval')
    def _check_duration(self):
        for record in self:
            if record.duration_unit != 'lifetime' and record.duration_interval <= 0:
                raise ValidationError(_("Duration interval must be a positive number"))

    @api.constrains('code')
    def _check_code_format(self):
        for record in self:
            if record.code and not record.code.replace('_', '').replace('-', '').isalnum():
                raise ValidationError(_("Code can only contain letters, numbers, hyphens and underscores"))

    @api.model_create_multi
    def create(self, vals_list):
        """Auto-generate a code from the name when none is given"""
        for vals in vals_list:
            if not vals.get('code'):
                base_code = vals.get('name', 'TYPE').upper().replace(' ', '_')[:15]
                code = base_code
                counter = 1
                while self.search_count([('code', '=', code)]):
                    code = f"{base_code}_{counter}"
                    counter += 1
                vals['code'] = code
        return super().create(vals_list)

