"""
Test utilities and factories for creating test data
"""
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from farmhub.core.backends.memory import MemoryBackend
from farmhub.core.exceptions import BackendError
from farmhub.core.roles import Role
from farmhub.core.session import Profile
from farmhub.fields.models import Field, Crop
from farmhub.livestock.models import Livestock
from farmhub.inventory.models import Input, Product, Harvest
from farmhub.parties.models import Customer
from farmhub.tasks.models import Task
from farmhub.sales.models import Sale
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
import random
import string

User = get_user_model()


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def create_user(username=None, email=None, password='testpass123', role=Role.STAFF, full_name=None, phone=None):
        """Create a test user with a farm profile"""
        if not username:
            username = f'testuser_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{username}@test.com'
        return User.objects.create_user(
            username=username,
            email=email,
            password=password,
            role=role,
            full_name=full_name or f'Test {username}',
            phone=phone,
        )

    @staticmethod
    def create_field(name=None, size=None, status='active', irrigation_system=None):
        """Create a test field"""
        return Field.objects.create(
            name=name or f'Field_{TestDataFactory.random_string(6)}',
            size=size if size is not None else Decimal('10.00'),
            location='Plot 1',
            soil_type='loam',
            irrigation_system=irrigation_system,
            status=status,
        )

    @staticmethod
    def create_crop(field=None, name=None, status='planted', area=None):
        """Create a test crop"""
        today = timezone.localdate()
        return Crop.objects.create(
            name=name or f'Crop_{TestDataFactory.random_string(6)}',
            variety='SC403',
            planting_date=today - timedelta(days=30),
            expected_harvest_date=today + timedelta(days=90),
            field=field,
            status=status,
            area=area if area is not None else Decimal('5.00'),
        )

    @staticmethod
    def create_livestock(tag=None, type='cattle', health_status='healthy'):
        """Create a test animal"""
        return Livestock.objects.create(
            type=type,
            breed='Boran',
            tag=tag or f'TAG-{TestDataFactory.random_string(4).upper()}',
            gender='female',
            health_status=health_status,
            vaccinations=['FMD'],
        )

    @staticmethod
    def create_input(name=None, quantity_in_stock=None, reorder_level=None, cost_per_unit=None):
        """Create a test input"""
        return Input.objects.create(
            name=name or f'Input_{TestDataFactory.random_string(6)}',
            type='fertilizer',
            supplier='Agro Supplies',
            quantity_in_stock=quantity_in_stock if quantity_in_stock is not None else Decimal('100.00'),
            unit='kg',
            cost_per_unit=cost_per_unit if cost_per_unit is not None else Decimal('12.50'),
            reorder_level=reorder_level if reorder_level is not None else Decimal('20.00'),
        )

    @staticmethod
    def create_product(name=None, price_per_unit=None, quantity_available=None, status='available', type='crop'):
        """Create a test product"""
        return Product.objects.create(
            name=name or f'Product_{TestDataFactory.random_string(6)}',
            type=type,
            description='Fresh from the farm',
            price_per_unit=price_per_unit if price_per_unit is not None else Decimal('25.00'),
            unit='kg',
            quantity_available=quantity_available if quantity_available is not None else Decimal('50.00'),
            status=status,
        )

    @staticmethod
    def create_harvest(crop=None, field=None, harvested_by=None, quantity=None, quality='good', harvest_date=None):
        """Create a test harvest"""
        return Harvest.objects.create(
            crop=crop,
            field=field,
            harvest_date=harvest_date or timezone.localdate(),
            quantity=quantity if quantity is not None else Decimal('200.00'),
            unit='kg',
            quality=quality,
            storage_location='Barn A',
            harvested_by=harvested_by,
        )

    @staticmethod
    def create_customer(name=None, phone=None, email=None):
        """Create a test customer"""
        if not name:
            name = f'Customer_{TestDataFactory.random_string(6)}'
        return Customer.objects.create(
            name=name,
            phone=phone,
            email=email,
            address='Lusaka',
        )

    @staticmethod
    def create_task(title=None, assigned_to=None, assigned_by=None, status='pending', priority='medium', due_date=None):
        """Create a test task"""
        return Task.objects.create(
            title=title or f'Task_{TestDataFactory.random_string(6)}',
            assigned_to=assigned_to,
            assigned_by=assigned_by,
            status=status,
            priority=priority,
            due_date=due_date or timezone.localdate() + timedelta(days=7),
        )

    @staticmethod
    def create_sale(product=None, customer=None, quantity=None, price_per_unit=None, customer_name=None,
                    payment_method='cash', payment_status='paid', delivery_status='pending', sale_date=None):
        """Create a test sale"""
        quantity = quantity if quantity is not None else Decimal('2.00')
        price_per_unit = price_per_unit if price_per_unit is not None else Decimal('25.00')
        return Sale.objects.create(
            product=product,
            customer=customer,
            customer_name=customer_name or (customer.name if customer else 'Walk-in buyer'),
            quantity=quantity,
            price_per_unit=price_per_unit,
            total_amount=quantity * price_per_unit,
            sale_date=sale_date or timezone.localdate(),
            payment_method=payment_method,
            payment_status=payment_status,
            delivery_status=delivery_status,
        )


def make_profile(role=Role.STAFF, full_name='Test User', phone=None, profile_id='00000000-0000-0000-0000-000000000001'):
    """A signed-in profile without any backend behind it"""
    return Profile(id=profile_id, username=str(role.value), full_name=full_name, role=role, phone=phone)


class FakeBackend(MemoryBackend):
    """In-memory backend that records its calls and can be made to fail"""

    def __init__(self):
        super().__init__()
        self.fail_on = set()
        self.calls = []

    def _record(self, operation, target):
        self.calls.append((operation, target))
        if operation in self.fail_on or (operation, target) in self.fail_on:
            raise BackendError(f'{operation} on {target} failed', status=500)

    def select(self, table, joins=()):
        self._record('select', table)
        return super().select(table, joins)

    def insert(self, table, values, joins=()):
        self._record('insert', table)
        return super().insert(table, values, joins)

    def update(self, table, row_id, values, joins=()):
        self._record('update', table)
        return super().update(table, row_id, values, joins)

    def delete(self, table, row_id):
        self._record('delete', table)
        return super().delete(table, row_id)

    def sign_in(self, email, password):
        self._record('sign_in', email)
        return super().sign_in(email, password)

    def sign_out(self, tokens):
        self._record('sign_out', tokens.user_id)
        return super().sign_out(tokens)

    def mutations(self):
        return [call for call in self.calls if call[0] in ('insert', 'update', 'delete')]


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
