# -*- coding: utf-8 -*-
# Part of Association Management Software (AMS)
# License LGPL-3.0 or later (http://www.gnu.org/licenses/lgpl.html)

from datetime import date

from odoo.exceptions import MissingError

from odoo.addons.membership_period.models.membership_payment import PaymentEventScope
from .common import MembershipPeriodCommon


class TestPaymentEvent(MembershipPeriodCommon):

    def setUp(self):
        super().setUp()
        self.MembershipPayment = self.env['membership.payment']
        self.membership = self._create_membership()
        self.initial_period = self._periods(self.membership)

    def _pay(self, contribution, membership=None, **context):
        return self.MembershipPayment.with_context(**context).create({
            'membership_id': (membership or self.membership).id,
            'contribution_id': contribution.id,
        })

    def test_completed_payment_links_last_period(self):
        contribution = self._create_contribution(status='completed')
        self._pay(contribution)

        self.assertEqual(self._periods(self.membership), self.initial_period)
        self.assertEqual(self.initial_period.contribution_id, contribution)

    def test_linked_period_is_not_relinked(self):
        first = self._create_contribution(status='completed')
        second = self._create_contribution(status='completed')
        self._pay(first)
        self._pay(second)
        self.assertEqual(self.initial_period.contribution_id, first)

    def test_pending_payment_creates_inactive_period(self):
        contribution = self._create_contribution(status='pending')
        self._pay(contribution)

        periods = self._periods(self.membership)
        self.assertEqual(len(periods), 2)
        pending = periods[1]
        self.assertFalse(pending.is_active)
        self.assertEqual(pending.start_date, date(2024, 1, 1))
        self.assertEqual(pending.end_date, date(2024, 12, 31))
        self.assertEqual(pending.contribution_id, contribution)
        self.assertFalse(self.initial_period.contribution_id)

    def test_pending_membership_reuses_initial_period(self):
        membership = self._create_membership(
            state='pending',
            join_date=date(2023, 4, 1),
            start_date=False,
            end_date=False,
            membership_type_id=self.monthly_type.id,
        )
        contribution = self._create_contribution(status='pending')
        self._pay(contribution, membership=membership)

        period = self._periods(membership)
        self.assertEqual(len(period), 1)
        self.assertEqual(period.start_date, date(2023, 4, 1))
        self.assertEqual(period.end_date, date(2023, 4, 30))
        self.assertFalse(period.is_active)
        self.assertEqual(period.contribution_id, contribution)

    def test_membership_created_for_pending_payment_keeps_one_period(self):
        contribution = self._create_contribution(status='pending')
        membership = self.Membership.with_context(
            membership_period_contribution_id=contribution.id
        ).create({
            'partner_id': self.partner.id,
            'membership_type_id': self.annual_type.id,
            'state': 'active',
            'join_date': date(2023, 1, 1),
        })
        self._pay(contribution, membership=membership)

        period = self._periods(membership)
        self.assertEqual(len(period), 1)
        self.assertFalse(period.is_active)
        self.assertEqual(period.contribution_id, contribution)

    def test_first_installment_reuses_plan_period(self):
        plan = self._create_plan(installments=12)
        installment = self._create_contribution(status='pending', plan=plan)
        membership = self.Membership.with_context(
            membership_period_contribution_id=installment.id
        ).create({
            'partner_id': self.partner.id,
            'membership_type_id': self.annual_type.id,
            'join_date': date(2023, 1, 1),
        })
        self._pay(installment, membership=membership)

        period = self._periods(membership)
        self.assertEqual(len(period), 1)
        self.assertEqual(period.contribution_recur_id, plan)

    def test_pending_period_starts_at_join_date_without_coverage(self):
        earlier = self._create_contribution(status='pending')
        membership = self.Membership.with_context(
            membership_period_contribution_id=earlier.id
        ).create({
            'partner_id': self.partner.id,
            'membership_type_id': self.monthly_type.id,
            'join_date': date(2023, 4, 1),
        })
        contribution = self._create_contribution(status='pending')
        self._pay(contribution, membership=membership)

        periods = self._periods(membership)
        self.assertEqual(len(periods), 2)
        self.assertEqual(periods.mapped('start_date'), [date(2023, 4, 1), date(2023, 4, 1)])
        self.assertEqual(periods.filtered(lambda p: p.contribution_id == contribution).end_date, date(2023, 4, 30))
        self.assertFalse(any(periods.mapped('is_active')))

    def test_known_period_is_deactivated(self):
        contribution = self._create_contribution(status='pending')
        self._pay(contribution, membership_period_id=self.initial_period.id)

        self.assertEqual(self._periods(self.membership), self.initial_period)
        self.assertFalse(self.initial_period.is_active)
        self.assertEqual(self.initial_period.contribution_id, contribution)

    def test_first_installment_creates_period(self):
        plan = self._create_plan(installments=12)
        installment = self._create_contribution(status='pending', plan=plan)
        self._pay(installment)

        periods = self._periods(self.membership)
        self.assertEqual(len(periods), 2)
        self.assertFalse(periods[1].is_active)
        self.assertEqual(periods[1].contribution_recur_id, plan)
        self.assertEqual(periods[1].payment_link_type, 'contribution_recur')

    def test_later_installment_creates_no_period(self):
        plan = self._create_plan(installments=12)
        self._create_contribution(status='completed', plan=plan, receive_date=date(2023, 1, 1))
        second = self._create_contribution(status='pending', plan=plan, receive_date=date(2023, 2, 1))
        self._pay(second)

        self.assertEqual(self._periods(self.membership), self.initial_period)
        self.assertEqual(self.initial_period.contribution_recur_id, plan)

    def test_installment_of_linked_plan_is_standalone(self):
        plan = self._create_plan(installments=12)
        self.membership.contribution_recur_id = plan
        self._create_contribution(status='completed', plan=plan, receive_date=date(2023, 1, 1))
        second = self._create_contribution(status='pending', plan=plan, receive_date=date(2023, 2, 1))
        self._pay(second)

        self.assertEqual(len(self._periods(self.membership)), 2)

    def test_duplicate_delivery_in_scope_is_skipped(self):
        scope = PaymentEventScope()
        contribution = self._create_contribution(status='pending')
        payment = self._pay(contribution, payment_event_scope=scope)
        self.assertIn(payment.id, scope)

        self.assertFalse(payment._process_payment_event(scope))
        self.assertEqual(len(self._periods(self.membership)), 2)

    def test_redelivery_in_new_scope_is_processed(self):
        contribution = self._create_contribution(status='pending')
        payment = self._pay(contribution)

        pending = self._periods(self.membership)[1]

        self.assertTrue(payment._process_payment_event(PaymentEventScope()))
        self.assertEqual(self._periods(self.membership)[1:], pending)
        self.assertFalse(pending.is_active)

    def test_line_item_moved_to_paid_membership(self):
        other = self._create_membership(membership_type_id=self.monthly_type.id)
        sibling = self._create_membership()
        plan = self._create_plan(installments=12)
        LineItem = self.env['membership.line.item']
        annual_line = LineItem.create({
            'contribution_recur_id': plan.id,
            'membership_type_id': self.annual_type.id,
            'membership_id': other.id,
        })
        second_annual_line = LineItem.create({
            'contribution_recur_id': plan.id,
            'membership_type_id': self.annual_type.id,
            'membership_id': sibling.id,
        })
        monthly_line = LineItem.create({
            'contribution_recur_id': plan.id,
            'membership_type_id': self.monthly_type.id,
            'membership_id': other.id,
        })

        installment = self._create_contribution(status='completed', plan=plan)
        self._pay(installment)

        self.assertEqual(annual_line.membership_id, self.membership)
        self.assertEqual(second_annual_line.membership_id, sibling)
        self.assertEqual(monthly_line.membership_id, other)

    def test_unattributed_line_items_are_ignored(self):
        plan = self._create_plan(installments=12)
        line = self.env['membership.line.item'].create({
            'contribution_recur_id': plan.id,
            'membership_type_id': self.annual_type.id,
        })
        self._pay(self._create_contribution(status='completed', plan=plan))
        self.assertFalse(line.membership_id)

    def test_lifetime_membership_gets_no_pending_period(self):
        membership = self._create_membership(
            membership_type_id=self.lifetime_type.id, end_date=False
        )
        self._pay(self._create_contribution(status='pending'), membership=membership)
        self.assertFalse(self._periods(membership))

    def test_deleted_payment_raises(self):
        payment = self._pay(self._create_contribution(status='completed'))
        payment.unlink()
        with self.assertRaises(MissingError):
            payment._process_payment_event(PaymentEventScope())

    def test_scope_counts_deliveries(self):
        scope = PaymentEventScope()
        self.assertEqual(scope.register(7), 1)
        self.assertEqual(scope.register(7), 2)
        self.assertEqual(scope.register(8), 1)
        self.assertNotIn(9, scope)
