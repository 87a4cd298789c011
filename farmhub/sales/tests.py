"""
Test suite for Sales module
Tests: Sales, Marketplace orders, My Orders
"""
from decimal import Decimal
from unittest import mock

from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework import status

from farmhub.core.backends.rest import RestBackend
from farmhub.core.exceptions import BackendError, TransactionUnsupported
from farmhub.core.roles import Role
from farmhub.core.store import DataStore
from farmhub.core.test_utils import AuthenticatedAPIClient, FakeBackend, TestDataFactory, make_profile
from farmhub.inventory.models import Product
from .models import Sale
from .orders import OrderRejected, place_order
from .screens import orders_for


class SaleTests(TestCase):
    """Test sale endpoints"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_user(role=Role.STAFF))
        self.product = TestDataFactory.create_product(name='Tomatoes')

    def test_total_defaults_to_quantity_times_price(self):
        data = {
            'product_id': str(self.product.id),
            'customer_name': 'Market Stall 7',
            'quantity': '3',
            'price_per_unit': '4.5',
            'sale_date': str(timezone.localdate()),
            'payment_method': 'mobile_money',
        }
        response = self.client.post('/api/v1/sales/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['total_amount'], 13.5)
        self.assertEqual(response.data['product']['name'], 'Tomatoes')
        self.assertEqual(Sale.objects.get().total_amount, Decimal('13.50'))

    def test_product_and_quantity_required(self):
        data = {'customer_name': 'Stall', 'quantity': '0', 'price_per_unit': '4', 'sale_date': str(timezone.localdate())}
        response = self.client.post('/api/v1/sales/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['product_id'], 'Product is required')
        self.assertEqual(response.data['quantity'], 'Quantity must be greater than 0')

    def test_oversized_amounts_rejected(self):
        """Test amounts too large for their columns leave the table untouched"""
        data = {
            'product_id': str(self.product.id),
            'customer_name': 'Bulk buyer',
            'quantity': '9999999999',
            'price_per_unit': '9999999999',
            'sale_date': str(timezone.localdate()),
        }
        response = self.client.post('/api/v1/sales/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['total_amount'], 'Total amount is too large')

        data.update(quantity='1', price_per_unit='1e13')
        response = self.client.post('/api/v1/sales/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('price_per_unit', response.data)
        self.assertFalse(Sale.objects.exists())
        self.assertEqual(self.client.get('/api/v1/views/sales/').status_code, status.HTTP_200_OK)

    def test_unknown_product_reference(self):
        data = {
            'product_id': '00000000-0000-0000-0000-0000000000f1',
            'customer_name': 'Stall',
            'quantity': '1',
            'price_per_unit': '4',
            'sale_date': str(timezone.localdate()),
        }
        response = self.client.post('/api/v1/sales/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['product_id'], 'Selected product does not exist')

    def test_sales_screen(self):
        TestDataFactory.create_sale(product=self.product, quantity=Decimal('2'), price_per_unit=Decimal('10'))
        TestDataFactory.create_sale(quantity=Decimal('1'), price_per_unit=Decimal('5'), payment_status='pending')
        response = self.client.get('/api/v1/views/sales/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        summary = response.data['summary']
        self.assertEqual(summary['total_sales'], 2)
        self.assertEqual(summary['total_revenue'], 25.0)
        self.assertEqual(summary['paid_sales'], 1)
        self.assertEqual(summary['average_sale'], 12.5)
        products = sorted(row['product_name'] for row in response.data['rows'])
        self.assertEqual(products, ['Tomatoes', 'Unknown Product'])


class PlaceOrderTests(TestCase):
    """Test placing marketplace orders against the in-memory backend"""

    def setUp(self):
        self.backend = FakeBackend()
        self.store = DataStore(self.backend)
        self.profile = make_profile(Role.CUSTOMER, full_name='Grace Mwale', phone='+260971000004')
        self.product = self.backend.insert('products', {
            'name': 'Tomatoes', 'type': 'vegetable', 'unit': 'kg',
            'price_per_unit': 5, 'quantity_available': 10, 'status': 'available',
        })

    def test_order_is_pending_sale(self):
        sale = place_order(self.store, self.profile, self.product['id'], 2, decrement_stock=False)
        self.assertEqual(sale['customer_name'], 'Grace Mwale')
        self.assertEqual(sale['customer_phone'], '+260971000004')
        self.assertEqual(sale['total_amount'], 10.0)
        self.assertEqual(sale['payment_method'], 'pending')
        self.assertEqual(sale['payment_status'], 'pending')
        self.assertEqual(sale['notes'], 'Order from marketplace by Grace Mwale')
        self.assertEqual(self.backend.get('products', self.product['id'])['quantity_available'], 10)

    def test_order_decrements_stock(self):
        place_order(self.store, self.profile, self.product['id'], 4, decrement_stock=True)
        self.assertEqual(self.backend.get('products', self.product['id'])['quantity_available'], 6.0)

    def test_failed_stock_update_rolls_back_sale(self):
        self.backend.fail_on.add(('update', 'products'))
        with self.assertRaises(BackendError):
            place_order(self.store, self.profile, self.product['id'], 4, decrement_stock=True)
        self.assertEqual(self.backend.select('sales'), [])
        self.assertEqual(self.store.sales, [])

    def test_quantity_above_stock(self):
        with self.assertRaises(OrderRejected) as ctx:
            place_order(self.store, self.profile, self.product['id'], 11, decrement_stock=False)
        self.assertEqual(ctx.exception.errors, {'quantity': 'Only 10 kg available'})
        self.assertEqual(self.backend.select('sales'), [])

    def test_unavailable_product(self):
        self.backend.update('products', self.product['id'], {'status': 'sold'})
        with self.assertRaises(OrderRejected) as ctx:
            place_order(self.store, self.profile, self.product['id'], 1, decrement_stock=False)
        self.assertIn('product_id', ctx.exception.errors)

    def test_rest_backend_cannot_decrement(self):
        """Stock decrement needs a transaction the hosted row API lacks"""
        http = mock.Mock()
        response = mock.Mock(status_code=200, content=b'x')
        response.json.return_value = [self.product]
        http.request.return_value = response
        store = DataStore(RestBackend(base_url='https://farm.example', api_key='anon', session=http))
        with self.assertRaises(TransactionUnsupported):
            place_order(store, self.profile, self.product['id'], 1, decrement_stock=True)
        self.assertEqual(http.request.call_count, 1)

    def test_orders_for_ignores_empty_identity(self):
        sales = [{'customer_name': '', 'customer_phone': None}, {'customer_name': 'Grace Mwale'}]
        anonymous = make_profile(Role.CUSTOMER, full_name='', phone=None)
        self.assertEqual(orders_for(sales, anonymous), [])
        self.assertEqual(len(orders_for(sales, self.profile)), 1)


class MarketplaceTests(TestCase):
    """Test marketplace endpoints"""

    def setUp(self):
        self.customer = TestDataFactory.create_user(role=Role.CUSTOMER, full_name='Grace Mwale', phone='+260971000004')
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.customer)
        self.product = TestDataFactory.create_product(
            name='Tomatoes', price_per_unit=Decimal('5'), quantity_available=Decimal('10'), type='vegetable',
        )

    def order(self, quantity='2', **extra):
        data = {'product_id': str(self.product.id), 'quantity': quantity, **extra}
        return self.client.post('/api/v1/marketplace/orders/', data, format='json')

    def test_place_order(self):
        response = self.order()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['sale']['total_amount'], 10.0)
        self.assertIn('Order placed successfully', response.data['message'])
        sale = Sale.objects.get()
        self.assertEqual(sale.product, self.product)
        self.assertEqual(sale.customer_name, 'Grace Mwale')
        self.product.refresh_from_db()
        self.assertEqual(self.product.quantity_available, Decimal('10.00'))

    @override_settings(FARMHUB_DECREMENT_STOCK_ON_SALE=True)
    def test_place_order_decrements_stock(self):
        response = self.order('3')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Product.objects.get().quantity_available, Decimal('7.00'))

    def test_order_too_large(self):
        response = self.order('25')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['quantity'], 'Only 10 kg available')
        self.assertEqual(Sale.objects.count(), 0)

    def test_unknown_product(self):
        response = self.client.post('/api/v1/marketplace/orders/', {
            'product_id': '00000000-0000-0000-0000-00000000dead', 'quantity': '1',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_staff_cannot_order(self):
        self.client.authenticate_user(TestDataFactory.create_user(role=Role.STAFF))
        response = self.order()
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_marketplace_screen(self):
        TestDataFactory.create_product(name='Sold out', quantity_available=Decimal('0'))
        TestDataFactory.create_product(name='Reserved', status='reserved')
        response = self.client.get('/api/v1/views/marketplace/', {'search': 'tom'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['name'] for row in response.data['rows']], ['Tomatoes'])
        self.assertEqual(response.data['customer']['name'], 'Grace Mwale')
        self.assertTrue(response.data['can_modify'])

    def test_my_orders(self):
        self.order()
        TestDataFactory.create_sale(product=self.product, customer_name='Someone Else')
        response = self.client.get('/api/v1/views/my-orders/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['rows']), 1)
        self.assertEqual(response.data['rows'][0]['product_name'], 'Tomatoes')
        self.assertEqual(response.data['summary']['total_spent'], 10.0)
        self.assertEqual(response.data['summary']['pending_orders'], 1)

        dashboard = self.client.get('/api/v1/views/dashboard/')
        stats = {stat['title']: stat['value'] for stat in dashboard.data['stats']}
        self.assertEqual(stats['My Orders'], 1)
