# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from odoo import models, fields


class MembershipLineItem(models.Model):
    """Recurring line item of a payment plan.

    ``membership_type_id`` is the price catalogue entry the line was sold
    from; ``membership_id`` is the membership the line is attributed to.
    """

    _name = 'membership.line.item'
    _description = 'Recurring Line Item'
    _order = 'id'

    label = fields.Char(string='Label')
    amount = fields.Float(string='Amount', digits='Product Price', default=0.0)

    contribution_recur_id = fields.Many2one(
        'membership.contribution.recur',
        string='Payment Plan',
        required=True,
        ondelete='cascade',
        index=True
    )

    membership_type_id = fields.Many2one(
        'membership.type',
        string='Membership Type',
        ondelete='set null'
    )

    membership_id = fields.Many2one(
        'membership.membership',
        string='Membership',
        ondelete='set null'
    )
