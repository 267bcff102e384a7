"""
Service layer unit tests for remittances app.

Tests cover:
- Unremitted cash with and without a verified cutoff
- Submission rules and verification
- Bus summaries and totals
"""

import pytest
from decimal import Decimal

from apps.remittances.models import CashRemittance, RemittanceStatus
from apps.remittances.services import (
    get_unremitted_cash_revenue,
    get_remittance_status,
    get_bus_summaries,
    submit_remittance,
    verify_remittance,
    get_remittance_history,
    get_total_remitted,
    list_pending_remittances,
)
from apps.remittances.services.exceptions import (
    InvalidRemittanceAmountError,
    RemittanceAlreadyPendingError,
    RemittanceNotAllowedError,
    RemittanceNotFoundError,
    RemittanceAlreadyVerifiedError,
    NothingToRemitError,
)
from apps.trips.services import record_cash_trip
from apps.wallet.models import Notification, NotificationType


@pytest.mark.django_db
class TestUnremittedCash:

    def test_counts_all_cash_without_verified_remittance(self, route_with_fares):
        assert get_unremitted_cash_revenue(route=route_with_fares) == Decimal('50.00')

    def test_pending_remittance_does_not_move_cutoff(self, route_with_fares, conductor):
        submit_remittance(conductor=conductor, route=route_with_fares, amount='50')

        assert get_unremitted_cash_revenue(route=route_with_fares) == Decimal('50.00')

    def test_verified_remittance_is_cutoff(self, route_with_fares, conductor, staff_user):
        remittance = submit_remittance(conductor=conductor, route=route_with_fares, amount='50')
        verify_remittance(remittance_id=remittance.id, staff_user=staff_user)

        assert get_unremitted_cash_revenue(route=route_with_fares) == Decimal('0.00')

        record_cash_trip(conductor=conductor, passenger_name='Dan', origin='Cubao', destination='Ortigas', kilometer=5)
        assert get_unremitted_cash_revenue(route=route_with_fares) == Decimal('20.00')


@pytest.mark.django_db
class TestSubmitRemittance:

    def test_submit_creates_pending(self, route_with_fares, conductor):
        remittance = submit_remittance(
            conductor=conductor, route=route_with_fares, amount='50.00', notes=' handed to cashier '
        )

        assert remittance.status == RemittanceStatus.PENDING
        assert remittance.bus_number == 'ABC123'
        assert remittance.amount == Decimal('50.00')
        assert remittance.notes == 'handed to cashier'
        assert get_remittance_status(route=route_with_fares) == remittance

    def test_only_one_pending_per_route(self, route_with_fares, conductor):
        submit_remittance(conductor=conductor, route=route_with_fares, amount='20')

        with pytest.raises(RemittanceAlreadyPendingError):
            submit_remittance(conductor=conductor, route=route_with_fares, amount='30')
        assert CashRemittance.objects.count() == 1

    def test_other_conductors_route(self, route, other_conductor):
        with pytest.raises(RemittanceNotAllowedError):
            submit_remittance(conductor=other_conductor, route=route, amount='20')

    def test_amount_must_be_positive(self, route, conductor):
        for bad_amount in ['0', '-5', 'abc']:
            with pytest.raises(InvalidRemittanceAmountError):
                submit_remittance(conductor=conductor, route=route, amount=bad_amount)

    def test_route_without_cash_fares(self, route, conductor):
        with pytest.raises(NothingToRemitError):
            submit_remittance(conductor=conductor, route=route, amount='20')
        assert not CashRemittance.objects.exists()

    def test_nothing_new_since_verified_remittance(self, route_with_fares, conductor, staff_user):
        first = submit_remittance(conductor=conductor, route=route_with_fares, amount='50')
        verify_remittance(remittance_id=first.id, staff_user=staff_user)

        with pytest.raises(NothingToRemitError):
            submit_remittance(conductor=conductor, route=route_with_fares, amount='50')
        assert CashRemittance.objects.count() == 1


@pytest.mark.django_db
class TestVerifyRemittance:

    def test_verify_stamps_and_notifies(self, route_with_fares, conductor, staff_user):
        remittance = submit_remittance(conductor=conductor, route=route_with_fares, amount='50')

        verified = verify_remittance(remittance_id=remittance.id, staff_user=staff_user)

        assert verified.status == RemittanceStatus.REMITTED
        assert verified.verified_by == staff_user
        assert verified.verified_at is not None
        notification = Notification.objects.get(user=conductor)
        assert notification.type == NotificationType.REMITTANCE

    def test_verify_twice(self, route_with_fares, conductor, staff_user):
        remittance = submit_remittance(conductor=conductor, route=route_with_fares, amount='50')
        verify_remittance(remittance_id=remittance.id, staff_user=staff_user)

        with pytest.raises(RemittanceAlreadyVerifiedError):
            verify_remittance(remittance_id=remittance.id, staff_user=staff_user)

    def test_verify_unknown(self, staff_user):
        with pytest.raises(RemittanceNotFoundError):
            verify_remittance(remittance_id='not-a-uuid', staff_user=staff_user)

    def test_new_submission_after_verification(self, route_with_fares, conductor, staff_user):
        first = submit_remittance(conductor=conductor, route=route_with_fares, amount='50')
        verify_remittance(remittance_id=first.id, staff_user=staff_user)

        record_cash_trip(conductor=conductor, passenger_name='Dan', origin='Cubao', destination='Ortigas', kilometer=5)
        second = submit_remittance(conductor=conductor, route=route_with_fares, amount='10')

        assert list(get_remittance_history(conductor=conductor)) == [second, first]
        assert list(list_pending_remittances()) == [second]
        assert get_total_remitted(conductor=conductor) == Decimal('50.00')


@pytest.mark.django_db
class TestBusSummaries:

    def test_summary_before_remitting(self, route_with_fares, conductor):
        summary, = get_bus_summaries(conductor=conductor)

        assert summary['bus_number'] == 'ABC123'
        assert summary['trip_count'] == 3
        assert summary['total_revenue'] == Decimal('70.00')
        assert summary['cash_trip_count'] == 2
        assert summary['cash_revenue'] == Decimal('50.00')
        assert summary['qr_trip_count'] == 1
        assert summary['qr_revenue'] == Decimal('20.00')
        assert summary['unremitted_cash'] == Decimal('50.00')
        assert summary['remittance_status'] == 'none'
        assert summary['can_remit'] is True

    def test_summary_while_pending(self, route_with_fares, conductor):
        submit_remittance(conductor=conductor, route=route_with_fares, amount='50')

        summary, = get_bus_summaries(conductor=conductor)

        assert summary['remittance_status'] == 'pending'
        assert summary['can_remit'] is False

    def test_route_without_fares_cannot_remit(self, route, conductor):
        summary, = get_bus_summaries(conductor=conductor)

        assert summary['total_revenue'] == Decimal('0.00')
        assert summary['can_remit'] is False

    def test_total_remitted_without_records(self, conductor):
        assert get_total_remitted(conductor=conductor) == Decimal('0.00')
