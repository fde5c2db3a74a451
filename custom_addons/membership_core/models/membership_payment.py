# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from odoo import models, fields


class MembershipPayment(models.Model):
    _name = 'membership.payment'
    _description = 'Membership Payment'
    _order = 'id desc'

    membership_id = fields.Many2one(
        'membership.membership',
        string='Membership',
        required=True,
        ondelete='cascade',
        index=True
    )
    contribution_id = fields.Many2one(
        'membership.contribution',
        string='Contribution',
        required=True,
        ondelete='cascade',
        index=True
    )

    partner_id = fields.Many2one(related='membership_id.partner_id', string='Member', store=True)
    contribution_status = fields.Selection(related='contribution_id.status', string='Payment Status')
    contribution_recur_id = fields.Many2one(
        related='contribution_id.contribution_recur_id',
        string='Payment Plan'
    )
