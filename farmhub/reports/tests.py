"""
Test suite for Reports module
Tests: Dashboard per role, Reports & Analytics periods, top products and crops
"""
from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework import status

from farmhub.core.roles import Role
from farmhub.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from .screens import greeting, period_days


class ReportHelperTests(TestCase):

    def test_greeting(self):
        self.assertEqual(greeting(8), 'Good morning')
        self.assertEqual(greeting(12), 'Good afternoon')
        self.assertEqual(greeting(17), 'Good evening')

    def test_period_days(self):
        self.assertEqual(period_days('90'), ('90', 90))
        self.assertEqual(period_days(None), ('30', 30))
        self.assertEqual(period_days('14'), ('30', 30))


class DashboardTests(TestCase):
    """Test the role dashboards"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()

    def stats(self, user):
        self.client.authenticate_user(user)
        response = self.client.get('/api/v1/views/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        return response.data, {stat['title']: stat['value'] for stat in response.data['stats']}

    def test_admin_dashboard(self):
        TestDataFactory.create_field()
        TestDataFactory.create_crop(status='growing')
        TestDataFactory.create_crop(status='harvested')
        TestDataFactory.create_input(quantity_in_stock=Decimal('1'), reorder_level=Decimal('5'))
        TestDataFactory.create_sale(quantity=Decimal('2'), price_per_unit=Decimal('1000'))
        data, stats = self.stats(TestDataFactory.create_user(role=Role.ADMIN))
        self.assertEqual(data['title'], 'Admin Dashboard')
        self.assertEqual(stats['Total Fields'], 1)
        self.assertEqual(stats['Active Crops'], 1)
        self.assertEqual(stats['Low Stock Alerts'], 1)
        self.assertEqual(stats['Total Revenue'], 'K2,000.00')
        self.assertEqual(stats['Recent Sales'], 1)

    def test_staff_dashboard_counts_own_open_tasks(self):
        worker = TestDataFactory.create_user(role=Role.STAFF)
        TestDataFactory.create_task(assigned_to=worker)
        TestDataFactory.create_task(assigned_to=worker, status='completed')
        TestDataFactory.create_task()
        TestDataFactory.create_crop(status='planted')
        data, stats = self.stats(worker)
        self.assertEqual(stats['My Tasks'], 1)
        self.assertEqual(stats['Active Crops'], 1)
        self.assertEqual(len(data['recent_activity']), 3)

    def test_manager_dashboard(self):
        TestDataFactory.create_crop()
        TestDataFactory.create_livestock()
        _, stats = self.stats(TestDataFactory.create_user(role=Role.MANAGER))
        self.assertEqual(stats['Active Operations'], 2)

    def test_customer_dashboard(self):
        TestDataFactory.create_product(type='vegetable')
        TestDataFactory.create_product(type='fruit')
        TestDataFactory.create_task()
        data, stats = self.stats(TestDataFactory.create_user(role=Role.CUSTOMER))
        self.assertEqual(stats['Available Products'], 2)
        self.assertEqual(stats['Product Types'], 2)
        self.assertEqual(stats['My Orders'], 0)
        self.assertEqual(data['recent_activity'], [])


class ReportsTests(TestCase):
    """Test the reports screen"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_user(role=Role.MANAGER))
        today = timezone.localdate()
        self.maize = TestDataFactory.create_product(name='Maize')
        self.beans = TestDataFactory.create_product(name='Beans')
        TestDataFactory.create_sale(product=self.maize, quantity=Decimal('10'), price_per_unit=Decimal('5'))
        TestDataFactory.create_sale(product=self.beans, quantity=Decimal('1'), price_per_unit=Decimal('20'),
                                    payment_method='mobile_money', sale_date=today - timedelta(days=20))
        TestDataFactory.create_sale(product=self.beans, quantity=Decimal('1'), price_per_unit=Decimal('99'),
                                    sale_date=today - timedelta(days=60))
        TestDataFactory.create_sale(product=self.maize, quantity=Decimal('1'), price_per_unit=Decimal('77'),
                                    sale_date=today + timedelta(days=3))
        crop = TestDataFactory.create_crop(name='Maize crop')
        TestDataFactory.create_harvest(crop=crop, quantity=Decimal('300'))
        TestDataFactory.create_harvest(quantity=Decimal('50'), harvest_date=today - timedelta(days=100))

    def test_default_period(self):
        response = self.client.get('/api/v1/views/reports/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['period'], '30')
        summary = response.data['summary']
        self.assertEqual(summary['sales_count'], 2)
        self.assertEqual(summary['total_revenue'], 70.0)
        self.assertEqual(summary['average_sale_value'], 35.0)
        self.assertEqual(summary['harvest_quantity'], 300.0)
        self.assertEqual([p['name'] for p in response.data['top_products']], ['Maize', 'Beans'])
        self.assertEqual(response.data['top_crops'][0]['name'], 'Maize crop')
        methods = {m['method']: m['percentage'] for m in response.data['payment_methods']}
        self.assertEqual(methods, {'cash': 50.0, 'mobile_money': 50.0})

    def test_longer_period(self):
        response = self.client.get('/api/v1/views/reports/', {'period': '365'})
        summary = response.data['summary']
        self.assertEqual(summary['sales_count'], 3)
        self.assertEqual(summary['harvest_count'], 2)
        self.assertEqual(response.data['top_products'][0]['name'], 'Beans')

    def test_empty_reports(self):
        response = self.client.get('/api/v1/views/reports/', {'period': '7'})
        self.assertEqual(response.data['summary']['sales_count'], 1)
        self.assertEqual(response.data['farm_overview']['total_fields'], 0)

    def test_staff_restricted(self):
        self.client.authenticate_user(TestDataFactory.create_user(role=Role.STAFF))
        response = self.client.get('/api/v1/views/reports/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['message'], "You don't have permission to view reports.")
