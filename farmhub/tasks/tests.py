"""
Test suite for Tasks module
"""
from datetime import timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework import status

from farmhub.core.roles import Role
from farmhub.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from .screens import is_overdue


class TaskTests(TestCase):
    """Test task endpoints and screen"""

    def setUp(self):
        self.manager = TestDataFactory.create_user(role=Role.MANAGER, full_name='Mary Phiri')
        self.worker = TestDataFactory.create_user(role=Role.STAFF, full_name='John Zulu')
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.manager)

    def test_create_task(self):
        """Test assigning a task"""
        data = {
            'title': 'Spray maize',
            'assigned_to': str(self.worker.id),
            'assigned_by': str(self.manager.id),
            'due_date': str(timezone.localdate() + timedelta(days=2)),
            'field_id': '',
        }
        response = self.client.post('/api/v1/tasks/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'pending')
        self.assertEqual(response.data['priority'], 'medium')
        self.assertEqual(response.data['assigned_to_profile']['full_name'], 'John Zulu')
        self.assertIsNone(response.data['field_id'])

    def test_title_and_due_date_required(self):
        response = self.client.post('/api/v1/tasks/', {'priority': 'high'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['title'], 'Task title is required')
        self.assertEqual(response.data['due_date'], 'Due date is required')

    def test_overdue(self):
        yesterday = str(timezone.localdate() - timedelta(days=1))
        self.assertTrue(is_overdue({'status': 'pending', 'due_date': yesterday}))
        self.assertFalse(is_overdue({'status': 'completed', 'due_date': yesterday}))
        self.assertFalse(is_overdue({'status': 'pending', 'due_date': str(timezone.localdate())}))

    def test_tasks_screen_placeholders(self):
        """Test unassigned tasks and system-created tasks"""
        TestDataFactory.create_task(title='Fix fence')
        response = self.client.get('/api/v1/views/tasks/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        row = response.data['rows'][0]
        self.assertEqual(row['assigned_to_name'], 'Unassigned')
        self.assertEqual(row['assigned_by_name'], 'System')
        self.assertFalse(row['overdue'])

    def test_staff_only_see_own_tasks(self):
        """Test staff task rows are limited to their assignments"""
        TestDataFactory.create_task(title='Mine', assigned_to=self.worker, assigned_by=self.manager)
        TestDataFactory.create_task(title='Not mine', assigned_to=self.manager)
        self.client.authenticate_user(self.worker)
        response = self.client.get('/api/v1/views/tasks/')
        self.assertEqual([row['title'] for row in response.data['rows']], ['Mine'])
        self.assertEqual(response.data['rows'][0]['assigned_by_name'], 'Mary Phiri')
        self.assertEqual(response.data['summary']['pending'], 2)

    def test_deleted_assignee(self):
        """Test tasks whose assignee was removed"""
        TestDataFactory.create_task(title='Orphan', assigned_to=self.worker)
        self.worker.delete()
        response = self.client.get('/api/v1/views/tasks/')
        self.assertEqual(response.data['rows'][0]['assigned_to_name'], 'Unassigned')
