# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from datetime import date

from odoo import fields
from odoo.tests.common import TransactionCase


class MembershipPeriodCommon(TransactionCase):
    """Membership types, a member and record factories for period tests"""

    def setUp(self):
        super().setUp()
        self.Membership = self.env['membership.membership']
        self.Period = self.env['membership.period']
        self.Contribution = self.env['membership.contribution']
        self.ICPSudo = self.env['ir.config_parameter'].sudo()

        self.annual_type = self.env['membership.type'].create({
            'name': 'Annual Period Test',
            'code': 'PERIOD_ANNUAL',
            'duration_unit': 'year',
            'duration_interval': 1,
        })
        self.monthly_type = self.env['membership.type'].create({
            'name': 'Monthly Period Test',
            'code': 'PERIOD_MONTHLY',
            'duration_unit': 'month',
            'duration_interval': 1,
        })
        self.lifetime_type = self.env['membership.type'].create({
            'name': 'Lifetime Period Test',
            'code': 'PERIOD_LIFETIME',
            'duration_unit': 'lifetime',
            'duration_interval': 0,
        })

        self.partner = self.env['res.partner'].create({
            'name': 'Jane Member',
            'email': 'jane.member@example.com',
        })
        self.today = fields.Date.context_today(self.Period)

    def _create_membership(self, **vals):
        values = {
            'partner_id': self.partner.id,
            'membership_type_id': self.annual_type.id,
            'state': 'active',
            'join_date': date(2023, 1, 1),
            'start_date': date(2023, 1, 1),
            'end_date': date(2023, 12, 31),
        }
        values.update(vals)
        return self.Membership.create(values)

    def _create_plan(self, installments=12, processor=None):
        return self.env['membership.contribution.recur'].create({
            'partner_id': self.partner.id,
            'installments': installments,
            'amount': 10.0,
            'payment_processor_id': processor.id if processor else False,
        })

    def _create_contribution(self, status='completed', receive_date=None, plan=None):
        return self.Contribution.create({
            'partner_id': self.partner.id,
            'amount': 120.0,
            'status': status,
            'receive_date': receive_date or date(2023, 1, 1),
            'contribution_recur_id': plan.id if plan else False,
        })

    def _periods(self, membership, active_only=False):
        domain = [('membership_id', '=', membership.id)]
        if active_only:
            domain.append(('is_active', '=', True))
        return self.Period.search(domain, order='start_date, id')

    def _assert_active_periods_disjoint(self, membership):
        periods = self._periods(membership, active_only=True)
        for previous, following in zip(periods, periods[1:]):
            self.assertGreater(following.start_date, previous.end_date)
