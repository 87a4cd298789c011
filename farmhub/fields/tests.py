"""
Test suite for Fields module
Tests: Fields, Crops, Field Management & Crop Management screens
"""
from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework import status

from farmhub.core.roles import Role
from farmhub.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from .models import Field, Crop


class FieldTests(TestCase):
    """Test field endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user(role=Role.MANAGER)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_field(self):
        """Test creating a field with the default status"""
        data = {
            'name': 'North Field',
            'size': '12.5',
            'location': 'Plot 4',
            'soil_type': 'clay',
        }
        response = self.client.post('/api/v1/fields/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['name'], 'North Field')
        self.assertEqual(response.data['status'], 'active')
        self.assertEqual(response.data['size'], 12.5)
        self.assertEqual(Field.objects.count(), 1)

    def test_create_field_validation(self):
        """Test required values and positive size"""
        response = self.client.post('/api/v1/fields/', {'name': '', 'size': '-3'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['name'], 'Field name is required')
        self.assertEqual(response.data['size'], 'Field size must be greater than 0')
        self.assertEqual(response.data['location'], 'Location is required')
        self.assertEqual(Field.objects.count(), 0)

    def test_oversized_size_rejected(self):
        """Test sizes that do not fit the column are rejected, not stored"""
        data = {'name': 'Huge', 'size': '1e20', 'location': 'Plot 4', 'soil_type': 'clay'}
        response = self.client.post('/api/v1/fields/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('size', response.data)
        self.assertEqual(Field.objects.count(), 0)

        field = TestDataFactory.create_field()
        response = self.client.patch(f'/api/v1/fields/{field.id}/', {'size': '123456789.5'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.get('/api/v1/fields/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]['size'], 10.0)

    def test_list_fields(self):
        """Test listing fields, newest first"""
        old = TestDataFactory.create_field(name='Old Field')
        Field.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=1))
        TestDataFactory.create_field(name='New Field')
        response = self.client.get('/api/v1/fields/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['name'] for row in response.data], ['New Field', 'Old Field'])

    def test_update_field(self):
        """Test partially updating a field"""
        field = TestDataFactory.create_field()
        response = self.client.patch(f'/api/v1/fields/{field.id}/', {'status': 'resting'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        field.refresh_from_db()
        self.assertEqual(field.status, 'resting')

    def test_delete_field(self):
        """Test deleting a field"""
        field = TestDataFactory.create_field()
        response = self.client.delete(f'/api/v1/fields/{field.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Field.objects.filter(id=field.id).exists())

    def test_fields_screen(self):
        """Test the field management screen summary"""
        TestDataFactory.create_field(size=Decimal('10'), irrigation_system='drip')
        TestDataFactory.create_field(size=Decimal('5.5'), status='resting')
        response = self.client.get('/api/v1/views/fields/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['summary']['total_fields'], 2)
        self.assertEqual(response.data['summary']['active_fields'], 1)
        self.assertEqual(response.data['summary']['total_acreage'], 15.5)
        self.assertEqual(response.data['summary']['irrigated_fields'], 1)
        self.assertEqual(sorted(row['irrigation'] for row in response.data['rows']), ['Rain-fed', 'drip'])


class CropTests(TestCase):
    """Test crop endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user(role=Role.STAFF)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.field = TestDataFactory.create_field(name='North Field')

    def crop_data(self, **overrides):
        today = timezone.localdate()
        data = {
            'name': 'Maize',
            'variety': 'SC403',
            'planting_date': str(today),
            'expected_harvest_date': str(today + timedelta(days=120)),
            'field_id': str(self.field.id),
            'area': '4',
        }
        data.update(overrides)
        return data

    def test_create_crop(self):
        """Test creating a crop linked to a field"""
        response = self.client.post('/api/v1/crops/', self.crop_data(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'planted')
        self.assertEqual(response.data['field']['name'], 'North Field')
        self.assertEqual(Crop.objects.get().field, self.field)

    def test_harvest_date_must_follow_planting(self):
        """Test expected harvest date ordering"""
        today = timezone.localdate()
        data = self.crop_data(expected_harvest_date=str(today))
        response = self.client.post('/api/v1/crops/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['expected_harvest_date'], 'Harvest date must be after planting date')

    def test_crop_without_field(self):
        """Test crops without a field show a placeholder"""
        response = self.client.post('/api/v1/crops/', self.crop_data(field_id=''), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(response.data['field'])

        response = self.client.get('/api/v1/views/crops/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['rows'][0]['field_name'], 'No field assigned')

    def test_deleted_field_shows_placeholder(self):
        """Test crops keep rendering after their field is deleted"""
        TestDataFactory.create_crop(field=self.field, name='Beans')
        self.field.delete()
        response = self.client.get('/api/v1/views/crops/')
        self.assertEqual(response.data['rows'][0]['field_name'], 'No field assigned')
        self.assertEqual(response.data['summary']['active_crops'], 1)

    def test_staff_can_view_but_not_change_fields(self):
        """Test staff field permissions"""
        response = self.client.get('/api/v1/views/fields/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['can_modify'])
        response = self.client.delete(f'/api/v1/fields/{self.field.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_patch_planting_date_past_stored_harvest(self):
        """Test a partial update is checked against the stored harvest date"""
        crop = TestDataFactory.create_crop(field=self.field)
        late = crop.expected_harvest_date + timedelta(days=10)
        response = self.client.patch(f'/api/v1/crops/{crop.id}/', {'planting_date': str(late)}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['expected_harvest_date'], 'Harvest date must be after planting date')
        crop.refresh_from_db()
        self.assertEqual(crop.planting_date, timezone.localdate() - timedelta(days=30))

    def test_patch_harvest_date_before_stored_planting(self):
        """Test moving the harvest date before the stored planting date"""
        crop = TestDataFactory.create_crop(field=self.field)
        early = crop.planting_date - timedelta(days=1)
        response = self.client.patch(f'/api/v1/crops/{crop.id}/', {'expected_harvest_date': str(early)}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        crop.refresh_from_db()
        self.assertEqual(crop.expected_harvest_date, timezone.localdate() + timedelta(days=90))

        later = crop.expected_harvest_date + timedelta(days=5)
        response = self.client.patch(f'/api/v1/crops/{crop.id}/', {'expected_harvest_date': str(later)}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_patch_missing_crop(self):
        """Test patching an unknown crop"""
        response = self.client.patch('/api/v1/crops/00000000-0000-0000-0000-00000000dead/',
                                     {'status': 'growing'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_unknown_field_reference(self):
        """Test a crop pointing at a field that does not exist"""
        data = self.crop_data(field_id='00000000-0000-0000-0000-00000000dead')
        response = self.client.post('/api/v1/crops/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['field_id'], 'Selected field does not exist')
        self.assertEqual(Crop.objects.count(), 0)

        crop = TestDataFactory.create_crop(field=self.field)
        response = self.client.patch(f'/api/v1/crops/{crop.id}/', {'field_id': data['field_id']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        crop.refresh_from_db()
        self.assertEqual(crop.field, self.field)

    def test_oversized_area_rejected(self):
        """Test areas beyond the column's precision are rejected"""
        response = self.client.post('/api/v1/crops/', self.crop_data(area='123456789012'), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('area', response.data)
        response = self.client.post('/api/v1/crops/', self.crop_data(area='4.125'), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Crop.objects.count(), 0)
        self.assertEqual(self.client.get('/api/v1/crops/').status_code, status.HTTP_200_OK)
