"""
Test suite for Inventory module
Tests: Inputs, Products, Harvests, stock status and expiry warnings
"""
from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework import status

from farmhub.core.roles import Role
from farmhub.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from .models import Input, Harvest
from .screens import is_expiring_soon, stock_status


class StockStatusTests(TestCase):
    """Test stock level and expiry helpers"""

    def test_stock_status(self):
        self.assertEqual(stock_status({'quantity_in_stock': 0, 'reorder_level': 10}), 'Out of Stock')
        self.assertEqual(stock_status({'quantity_in_stock': 10, 'reorder_level': 10}), 'Low Stock')
        self.assertEqual(stock_status({'quantity_in_stock': 11, 'reorder_level': 10}), 'In Stock')
        self.assertEqual(stock_status({'quantity_in_stock': None, 'reorder_level': None}), 'Out of Stock')

    def test_expiring_soon(self):
        """Only expiry dates within the coming week count"""
        today = timezone.localdate()
        self.assertTrue(is_expiring_soon(str(today + timedelta(days=3))))
        self.assertTrue(is_expiring_soon(str(today + timedelta(days=7))))
        self.assertFalse(is_expiring_soon(str(today + timedelta(days=8))))
        self.assertFalse(is_expiring_soon(str(today)))
        self.assertFalse(is_expiring_soon(str(today - timedelta(days=1))))
        self.assertFalse(is_expiring_soon(None))


class InputTests(TestCase):
    """Test input endpoints"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_user(role=Role.STAFF))

    def test_create_input(self):
        """Test creating an input with default stock levels"""
        data = {
            'name': 'Urea',
            'type': 'fertilizer',
            'supplier': 'Agro Supplies',
            'unit': 'kg',
            'cost_per_unit': '15.75',
            'expiry_date': '',
        }
        response = self.client.post('/api/v1/inputs/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['quantity_in_stock'], 0.0)
        self.assertIsNone(response.data['expiry_date'])
        self.assertEqual(Input.objects.get().cost_per_unit, Decimal('15.75'))

    def test_negative_values_rejected(self):
        """Test stock, cost and reorder level must not be negative"""
        data = {
            'name': 'Urea', 'type': 'fertilizer', 'supplier': 'Agro', 'unit': 'kg',
            'quantity_in_stock': '-1', 'cost_per_unit': '-2', 'reorder_level': '-3',
        }
        response = self.client.post('/api/v1/inputs/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['quantity_in_stock'], 'Quantity must be 0 or greater')
        self.assertEqual(response.data['cost_per_unit'], 'Cost per unit must be 0 or greater')
        self.assertEqual(response.data['reorder_level'], 'Reorder level must be 0 or greater')

    def test_inputs_screen(self):
        """Test stock status per row and inventory value"""
        TestDataFactory.create_input(quantity_in_stock=Decimal('5'), reorder_level=Decimal('20'), cost_per_unit=Decimal('2'))
        TestDataFactory.create_input(quantity_in_stock=Decimal('0'), reorder_level=Decimal('20'), cost_per_unit=Decimal('2'))
        response = self.client.get('/api/v1/views/inputs/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(sorted(row['stock_status'] for row in response.data['rows']), ['Low Stock', 'Out of Stock'])
        self.assertEqual(response.data['summary']['low_stock'], 2)
        self.assertEqual(response.data['summary']['out_of_stock'], 1)
        self.assertEqual(response.data['summary']['total_value'], 10.0)


class ProductTests(TestCase):
    """Test product endpoints"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_user(role=Role.MANAGER))

    def test_price_must_be_positive(self):
        data = {'name': 'Tomatoes', 'type': 'vegetable', 'unit': 'kg', 'price_per_unit': '0'}
        response = self.client.post('/api/v1/products/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['price_per_unit'], 'Price per unit must be greater than 0')

    def test_create_product(self):
        data = {'name': 'Tomatoes', 'type': 'vegetable', 'unit': 'kg', 'price_per_unit': '12', 'quantity_available': '40'}
        response = self.client.post('/api/v1/products/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'available')
        self.assertEqual(response.data['description'], '')

    def test_products_screen_flags_expiring(self):
        product = TestDataFactory.create_product(quantity_available=Decimal('10'), price_per_unit=Decimal('3'))
        product.expiry_date = timezone.localdate() + timedelta(days=2)
        product.save()
        response = self.client.get('/api/v1/views/products/')
        self.assertTrue(response.data['rows'][0]['expiring_soon'])
        self.assertEqual(response.data['summary']['expiring_soon'], 1)
        self.assertEqual(response.data['summary']['total_value'], 30.0)


class HarvestTests(TestCase):
    """Test harvest endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user(role=Role.STAFF, full_name='Jane Banda')
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.field = TestDataFactory.create_field(name='North Field')
        self.crop = TestDataFactory.create_crop(field=self.field, name='Maize')

    def test_create_harvest(self):
        """Test recording a harvest with its relations"""
        data = {
            'crop_id': str(self.crop.id),
            'field_id': str(self.field.id),
            'harvest_date': str(timezone.localdate()),
            'quantity': '250',
            'unit': 'kg',
            'storage_location': 'Barn A',
            'harvested_by': str(self.user.id),
        }
        response = self.client.post('/api/v1/harvests/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['quality'], 'good')
        self.assertEqual(response.data['crop']['name'], 'Maize')
        self.assertEqual(response.data['harvested_by_profile']['full_name'], 'Jane Banda')
        self.assertEqual(Harvest.objects.get().harvested_by, self.user)

    def test_quantity_must_be_positive(self):
        data = {'harvest_date': str(timezone.localdate()), 'quantity': '0', 'unit': 'kg', 'storage_location': 'Barn'}
        response = self.client.post('/api/v1/harvests/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['quantity'], 'Quantity must be greater than 0')

    def test_unknown_references_rejected(self):
        """Test harvests pointing at a crop or harvester that does not exist"""
        data = {
            'crop_id': '00000000-0000-0000-0000-0000000000c1',
            'harvest_date': str(timezone.localdate()),
            'quantity': '250',
            'unit': 'kg',
            'storage_location': 'Barn A',
        }
        response = self.client.post('/api/v1/harvests/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['crop_id'], 'Selected crop does not exist')

        data.update(crop_id=str(self.crop.id), harvested_by='00000000-0000-0000-0000-0000000000b2')
        response = self.client.post('/api/v1/harvests/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('harvested_by', response.data)
        self.assertEqual(Harvest.objects.count(), 0)

    def test_oversized_quantity_rejected(self):
        """Test quantities beyond the column's precision never reach the table"""
        data = {'harvest_date': str(timezone.localdate()), 'quantity': '99999999999', 'unit': 'kg', 'storage_location': 'Barn'}
        response = self.client.post('/api/v1/harvests/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('quantity', response.data)
        self.assertEqual(Harvest.objects.count(), 0)
        self.assertEqual(self.client.get('/api/v1/views/harvests/').status_code, status.HTTP_200_OK)


    def test_placeholders_for_missing_relations(self):
        """Test harvests whose crop, field and harvester are gone"""
        TestDataFactory.create_harvest(crop=self.crop, field=self.field, harvested_by=self.user)
        TestDataFactory.create_harvest()
        self.crop.delete()
        response = self.client.get('/api/v1/views/harvests/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        for row in response.data['rows']:
            self.assertEqual(row['crop_name'], 'Unknown Crop')
        names = sorted(row['field_name'] for row in response.data['rows'])
        self.assertEqual(names, ['North Field', 'Unknown Field'])
        harvesters = sorted(row['harvested_by_name'] for row in response.data['rows'])
        self.assertEqual(harvesters, ['Jane Banda', 'Unknown'])
        self.assertEqual(response.data['summary']['total_harvests'], 2)
        self.assertEqual(response.data['summary']['quality_distribution'], {'good': 2})
