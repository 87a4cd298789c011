"""
Test suite for Livestock module
"""
from django.test import TestCase
from rest_framework import status

from farmhub.core.forms import validate_form
from farmhub.core.roles import Role
from farmhub.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from .models import Livestock


class LivestockTests(TestCase):
    """Test livestock endpoints and screen"""

    def setUp(self):
        self.user = TestDataFactory.create_user(role=Role.STAFF)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_animal(self):
        """Test registering an animal"""
        data = {
            'type': 'cattle',
            'breed': 'Boran',
            'tag': 'COW-001',
            'gender': 'female',
            'weight': '',
            'vaccinations': ['FMD', ' Anthrax ', '', 'FMD'],
        }
        response = self.client.post('/api/v1/livestock/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['health_status'], 'healthy')
        self.assertIsNone(response.data['weight'])
        self.assertEqual(Livestock.objects.get().vaccinations, ['FMD', 'Anthrax'])

    def test_required_values(self):
        """Test missing type, breed, tag and gender"""
        values, errors = validate_form('livestock', {'weight': '0'})
        self.assertIsNone(values)
        self.assertEqual(errors['type'], 'Animal type is required')
        self.assertEqual(errors['breed'], 'Breed is required')
        self.assertEqual(errors['tag'], 'Tag is required')
        self.assertEqual(errors['gender'], 'Gender is required')
        self.assertEqual(errors['weight'], 'Weight must be greater than 0')

    def test_oversized_weight_rejected(self):
        """Test weights that do not fit the column"""
        data = {'type': 'cattle', 'breed': 'Boran', 'tag': 'COW-002', 'gender': 'male', 'weight': '1234567'}
        response = self.client.post('/api/v1/livestock/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('weight', response.data)
        self.assertFalse(Livestock.objects.exists())
        self.assertEqual(self.client.get('/api/v1/livestock/').status_code, status.HTTP_200_OK)

    def test_livestock_screen(self):
        """Test the livestock screen display columns and summary"""
        TestDataFactory.create_livestock(tag='COW-001')
        TestDataFactory.create_livestock(tag='GOAT-001', type='goats', health_status='sick')
        response = self.client.get('/api/v1/views/livestock/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        summary = response.data['summary']
        self.assertEqual(summary['total_animals'], 2)
        self.assertEqual(summary['healthy'], 1)
        self.assertEqual(summary['sick'], 1)
        self.assertEqual(summary['by_type'], {'cattle': 1, 'goats': 1})
        row = response.data['rows'][0]
        self.assertEqual(row['weight_display'], 'Not recorded')
        self.assertEqual(row['reproduction_display'], 'None')

    def test_customer_cannot_list_livestock(self):
        """Test customers are denied"""
        self.client.authenticate_user(TestDataFactory.create_user(role=Role.CUSTOMER))
        response = self.client.get('/api/v1/livestock/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
