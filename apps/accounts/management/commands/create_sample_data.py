"""
Management command to create sample data for testing the API.

Usage:
    python manage.py create_sample_data

This creates:
- 1 operator (staff) account
- 2 passengers with PINs and funded wallets
- 2 conductors with routes, cash and QR fares
- 1 inspector with an inspection on record
- Discounts for Student, Senior citizen and PWD passengers
- A verified and a pending cash remittance
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from decimal import Decimal
import random

from apps.accounts.models import User, UserRole
from apps.accounts.services import verify_pin
from apps.fares.models import Discount, PassengerType
from apps.inspections.models import InspectionRecord
from apps.inspections.services import mark_bus_cleared
from apps.remittances.models import CashRemittance
from apps.remittances.services import submit_remittance, verify_remittance
from apps.routes.models import BusRoute
from apps.routes.services import start_route, end_route
from apps.trips.models import PaymentRequest, Trip
from apps.trips.services import create_payment_request, approve_payment_request, record_cash_trip
from apps.wallet.models import Notification, Transaction, TransactionType
from apps.wallet.services import record_transaction


STOPS = [
    ('Cubao', 'Ortigas', 5),
    ('Cubao', 'Guadalupe', 9),
    ('Ortigas', 'Ayala', 7),
    ('Guadalupe', 'Taft', 12),
    ('Cubao', 'Baclaran', 18),
]

CASH_PASSENGERS = ['Andres Reyes', 'Liza Soberano', 'Mang Tomas', 'Carmela Uy', 'Dodong Lim']


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        self.create_discounts()
        self.fund_wallets(users)
        routes = self.create_routes(users)
        self.create_trips(users, routes)
        self.create_remittances(users, routes)
        self.create_inspections(users, routes)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts (PIN 1234 for passengers):')
        self.stdout.write('  operator@example.com / admin123 (staff)')
        self.stdout.write('  maria@example.com / password123 (passenger)')
        self.stdout.write('  jose@example.com / password123 (passenger)')
        self.stdout.write('  pedro@example.com / password123 (conductor)')
        self.stdout.write('  ramon@example.com / password123 (conductor)')
        self.stdout.write('  ines@example.com / password123 (inspector)')

    def clear_data(self):
        """Clear all data from the database."""
        InspectionRecord.objects.all().delete()
        CashRemittance.objects.all().delete()
        Trip.objects.all().delete()
        PaymentRequest.objects.all().delete()
        Notification.objects.all().delete()
        Transaction.objects.all().delete()
        BusRoute.objects.all().delete()
        Discount.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()

    def _user(self, email, username, first_name, last_name, role=UserRole.PASSENGER, **extra):
        user, _ = User.objects.get_or_create(
            email=email,
            defaults={
                'username': username,
                'first_name': first_name,
                'last_name': last_name,
                'role': role,
                **extra,
            }
        )
        user.set_password('password123')
        user.save()
        return user

    def create_users(self):
        self.stdout.write('  Creating users...')

        operator = self._user('operator@example.com', 'operator', 'Olga', 'Perez', is_staff=True)
        operator.set_password('admin123')
        operator.save()

        maria = self._user('maria@example.com', 'maria', 'Maria', 'Clara', phone_number='09171234567')
        jose = self._user('jose@example.com', 'jose', 'Jose', 'Rizal', phone_number='09181234567')
        for passenger in (maria, jose):
            passenger.set_pin('1234')
            passenger.save(update_fields=['pin_hash'])

        return {
            'operator': operator,
            'maria': maria,
            'jose': jose,
            'pedro': self._user('pedro@example.com', 'pedro', 'Pedro', 'Santos', UserRole.CONDUCTOR),
            'ramon': self._user('ramon@example.com', 'ramon', 'Ramon', 'Bautista', UserRole.CONDUCTOR),
            'ines': self._user('ines@example.com', 'ines', 'Ines', 'Ramos', UserRole.INSPECTOR),
        }

    def create_discounts(self):
        self.stdout.write('  Creating discounts...')

        for passenger_type in (PassengerType.STUDENT, PassengerType.SENIOR_CITIZEN, PassengerType.PWD):
            Discount.objects.update_or_create(
                passenger_type=passenger_type,
                defaults={
                    'discount_percentage': Decimal('20.00'),
                    'description': f'Statutory fare discount for {passenger_type}',
                }
            )

    def fund_wallets(self, users):
        self.stdout.write('  Funding wallets...')

        for key, amount in (('maria', Decimal('500.00')), ('jose', Decimal('250.00'))):
            record_transaction(
                user=users[key],
                type=TransactionType.CASH_IN,
                amount=amount,
                description='Sample cash in',
            )

    def create_routes(self, users):
        self.stdout.write('  Creating routes...')

        # Ramon finished one run before starting the current one
        old = start_route(conductor=users['ramon'], bus_number='NAC-4410', origin='Cubao', destination='Baclaran')
        end_route(conductor=users['ramon'])

        return {
            'pedro': start_route(conductor=users['pedro'], bus_number='ABC-1234', origin='Cubao', destination='Baclaran'),
            'ramon_old': old,
            'ramon': start_route(conductor=users['ramon'], bus_number='NAC-4410', origin='Baclaran', destination='Cubao'),
        }

    def create_trips(self, users, routes):
        self.stdout.write('  Creating trips...')

        for conductor_key in ('pedro', 'ramon'):
            conductor = users[conductor_key]
            for name in random.sample(CASH_PASSENGERS, 3):
                origin, destination, km = random.choice(STOPS)
                record_cash_trip(
                    conductor=conductor,
                    passenger_name=name,
                    origin=origin,
                    destination=destination,
                    kilometer=km,
                    passenger_type=random.choice(PassengerType.values),
                )

        # QR fares paid from passenger wallets
        for passenger_key, passenger_type in (('maria', PassengerType.STUDENT), ('jose', PassengerType.REGULAR)):
            passenger = users[passenger_key]
            origin, destination, km = random.choice(STOPS)
            request = create_payment_request(
                conductor=users['pedro'],
                passenger_id=passenger.id,
                origin=origin,
                destination=destination,
                kilometer=km,
                passenger_type=passenger_type,
            )
            approve_payment_request(
                passenger=passenger,
                request_id=request.id,
                pin_token=verify_pin(user=passenger, pin='1234'),
            )

    def create_remittances(self, users, routes):
        self.stdout.write('  Creating remittances...')

        verified = submit_remittance(
            conductor=users['ramon'],
            route=routes['ramon'],
            amount=Decimal('150.00'),
            notes='End of morning shift',
        )
        verify_remittance(remittance_id=verified.id, staff_user=users['operator'])

        submit_remittance(
            conductor=users['pedro'],
            route=routes['pedro'],
            amount=Decimal('80.00'),
        )

    def create_inspections(self, users, routes):
        self.stdout.write('  Creating inspections...')

        mark_bus_cleared(
            inspector=users['ines'],
            route=routes['pedro'],
            origin='Cubao',
            destination='Ortigas',
            notes='All fares accounted for',
        )
