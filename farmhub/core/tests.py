"""
Test suite for the core module
Tests: Roles & Navigation, Session Store, Data Store, View Composer, Forms, Auth API, Screens API, Seeding, REST backend
"""
from io import StringIO
from unittest import mock

import requests

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from farmhub.core.backends.memory import MemoryBackend
from farmhub.core.backends.rest import RestBackend, select_clause
from farmhub.core.composer import ViewComposer
from farmhub.core.exceptions import AuthenticationError, BackendError, RowNotFound, TransactionUnsupported
from farmhub.core.forms import submit_form, validate_form
from farmhub.core.roles import Action, Role, accessible_views, can, navigation_for
from farmhub.core.schema import ENTITY_KINDS, Relation, get_entity
from farmhub.core.session import SessionStore
from farmhub.core.store import DataStore
from farmhub.core.test_utils import AuthenticatedAPIClient, FakeBackend, TestDataFactory, make_profile

User = get_user_model()


def field_values(name='North Field', size='12.5'):
    return {'name': name, 'size': size, 'location': 'Plot 9', 'soil_type': 'loam'}


class RoleTests(TestCase):
    """Test the capability table and navigation"""

    def test_customer_navigation(self):
        """Customers only reach the dashboard, marketplace and their orders"""
        ids = [item['id'] for item in navigation_for(Role.CUSTOMER)]
        self.assertEqual(ids, ['dashboard', 'marketplace', 'my-orders'])

    def test_staff_navigation_keeps_groups(self):
        """Staff see grouped field and inventory views but no office views"""
        navigation = navigation_for('staff')
        groups = {item['id']: item for item in navigation}
        self.assertIn('fields', groups)
        self.assertEqual([child['id'] for child in groups['fields']['children']], ['fields', 'crops'])
        self.assertNotIn('reports', groups)
        self.assertNotIn('customers', groups)

    def test_accessible_views(self):
        """Admins reach every farm view but not the customer-only ones"""
        views = accessible_views(Role.ADMIN)
        self.assertIn('reports', views)
        self.assertIn('customers', views)
        self.assertNotIn('marketplace', views)
        self.assertNotIn('my-orders', views)

    def test_navigation_matches_capabilities(self):
        """Every selectable navigation entry is viewable by the role"""
        for role in Role:
            for view in accessible_views(role):
                self.assertTrue(can(role, Action.VIEW, view), f'{role} -> {view}')

    def test_staff_cannot_modify_fields(self):
        """Staff can view fields but not change them"""
        self.assertTrue(can(Role.STAFF, Action.VIEW, 'fields'))
        self.assertFalse(can(Role.STAFF, Action.MODIFY, 'fields'))
        self.assertTrue(can(Role.STAFF, Action.MODIFY, 'crops'))

    def test_unknown_role_or_view(self):
        """Unknown roles and views are denied"""
        self.assertFalse(can(None, Action.VIEW, 'dashboard'))
        self.assertFalse(can('farmer', Action.VIEW, 'dashboard'))
        self.assertFalse(can(Role.ADMIN, Action.VIEW, 'payroll'))
        self.assertEqual(navigation_for(None), [])


class SessionStoreTests(TestCase):
    """Test sign-in and sign-out through the auth backend"""

    def setUp(self):
        self.backend = FakeBackend()
        self.profile_row = self.backend.create_account('admin@farm.zm', 'admin123', {
            'username': 'admin', 'full_name': 'System Administrator', 'role': 'admin',
        })
        self.session = SessionStore(self.backend, demo_login=True)

    def test_demo_login(self):
        """Demo usernames sign in with their mapped email"""
        self.assertTrue(self.session.login('admin', 'admin123'))
        self.assertTrue(self.session.is_authenticated)
        self.assertEqual(self.session.role, Role.ADMIN)
        self.assertEqual(self.session.profile.full_name, 'System Administrator')
        self.assertIn(('sign_in', 'admin@farm.zm'), self.backend.calls)

    def test_login_with_email(self):
        """A username containing @ is used as the email"""
        self.assertTrue(self.session.login('admin@farm.zm', 'admin123'))

    def test_wrong_password(self):
        """Rejected credentials leave the session signed out"""
        self.assertFalse(self.session.login('admin', 'wrong'))
        self.assertFalse(self.session.is_authenticated)
        self.assertIsNone(self.session.role)

    def test_unknown_username_skips_backend(self):
        """Usernames without an account mapping never reach the backend"""
        self.assertFalse(self.session.login('farmer', 'admin123'))
        self.assertEqual([call for call in self.backend.calls if call[0] == 'sign_in'], [])

    def test_demo_login_disabled(self):
        """Without the demo mapping, demo usernames are unknown"""
        session = SessionStore(self.backend, demo_login=False)
        self.assertFalse(session.login('admin', 'admin123'))

    def test_missing_profile_row(self):
        """Valid credentials without a profile row are treated as a failed login"""
        self.backend.delete('profiles', self.profile_row['id'])
        self.assertFalse(self.session.login('admin', 'admin123'))
        self.assertIsNone(self.session.tokens)
        self.assertIsNone(self.session.access_token)

    def test_backend_unreachable(self):
        """A failing auth service is reported as a failed login"""
        self.backend.fail_on.add('sign_in')
        self.assertFalse(self.session.login('admin', 'admin123'))

    def test_logout(self):
        """Logout clears the profile and invalidates the token"""
        self.session.login('admin', 'admin123')
        token = self.session.access_token
        self.session.logout()
        self.assertFalse(self.session.is_authenticated)
        self.assertIsNone(self.session.access_token)
        self.assertFalse(SessionStore(self.backend).restore(token))

    def test_restore(self):
        """An access token re-hydrates the same profile"""
        self.session.login('admin', 'admin123')
        restored = SessionStore(self.backend)
        self.assertTrue(restored.restore(self.session.access_token))
        self.assertEqual(restored.profile.id, self.session.profile.id)
        self.assertFalse(SessionStore(self.backend).restore('not-a-token'))


class DataStoreTests(TestCase):
    """Test collection loading and mutations"""

    def setUp(self):
        self.backend = FakeBackend()
        self.store = DataStore(self.backend)

    def test_load_all_is_idempotent(self):
        """Refreshing twice yields the same collections"""
        self.backend.insert('fields', field_values())
        self.store.load_all()
        first = {name: list(rows) for name, rows in self.store._collections.items()}
        self.store.refresh()
        self.assertEqual(first, self.store._collections)
        self.assertEqual(len(self.store.fields), 1)
        self.assertTrue(self.store.loaded)

    def test_load_all_failure(self):
        """One failing collection is reported after the others loaded"""
        self.backend.insert('fields', field_values())
        self.backend.fail_on.add(('select', 'sales'))
        with self.assertRaises(BackendError):
            self.store.load_all()
        self.assertEqual(len(self.store.fields), 1)
        self.assertFalse(self.store.loaded)

    def test_add_prepends_and_resolves_relations(self):
        """New rows come first and joins resolve to relations"""
        field = self.store.add('fields', field_values())
        self.store.add('fields', field_values('South Field'))
        self.assertEqual(self.store.fields[0]['name'], 'South Field')

        crop = self.store.add('crops', {
            'name': 'Maize', 'variety': 'SC403', 'planting_date': '2024-01-01',
            'expected_harvest_date': '2024-05-01', 'field_id': field['id'], 'area': 3,
        })
        self.assertIsInstance(crop['field'], Relation)
        self.assertEqual(crop['field']['name'], 'North Field')

    def test_dangling_relation(self):
        """A join to a deleted row resolves to None"""
        field = self.store.add('fields', field_values())
        self.store.add('crops', {'name': 'Maize', 'field_id': field['id']})
        self.store.delete('fields', field['id'])
        self.store.load_all()
        self.assertIsNone(self.store.crops[0]['field'])

    def test_update_and_delete(self):
        """Update replaces the row, delete removes it"""
        field = self.store.add('fields', field_values())
        updated = self.store.update('fields', field['id'], {'status': 'resting'})
        self.assertEqual(updated['status'], 'resting')
        self.assertEqual(self.store.get('fields', field['id'])['status'], 'resting')
        self.store.delete('fields', field['id'])
        self.assertEqual(self.store.fields, [])

    def test_failed_insert_leaves_collection(self):
        """Local state only changes after the backend accepted the write"""
        self.backend.fail_on.add('insert')
        with self.assertRaises(BackendError):
            self.store.add('fields', field_values())
        self.assertEqual(self.store.fields, [])

    def test_fetch_one_missing(self):
        """Fetching an unknown id raises RowNotFound"""
        with self.assertRaises(RowNotFound):
            self.store.fetch_one('products', '00000000-0000-0000-0000-00000000dead')

    def test_atomic_rolls_back(self):
        """A failing transaction restores backend and local rows"""
        with self.assertRaises(ValueError):
            with self.store.atomic():
                self.store.add('fields', field_values())
                raise ValueError('abort')
        self.assertEqual(self.store.fields, [])
        self.assertEqual(self.backend.select('fields'), [])

    def test_memory_backend_keeps_no_call_history(self):
        """Repeated reads and writes leave nothing behind on the memory backend"""
        backend = MemoryBackend()
        store = DataStore(backend)
        row = store.add('fields', field_values())
        for _ in range(3):
            store.refresh()
            store.update('fields', row['id'], {'status': 'resting'})
        self.assertFalse(hasattr(backend, 'calls'))

    def test_fake_backend_records_sign_out(self):
        """The test backend records every call, sign-out included"""
        self.backend.create_account('staff@farm.zm', 'staff123', {'username': 'staff', 'role': 'staff'})
        tokens = self.backend.sign_in('staff@farm.zm', 'staff123')
        self.backend.sign_out(tokens)
        self.assertEqual(self.backend.calls[-2:], [('sign_in', 'staff@farm.zm'), ('sign_out', tokens.user_id)])


class ViewComposerTests(TestCase):
    """Test view selection and access restriction"""

    def compose(self, role, view_id, params=None):
        session = SessionStore(MemoryBackend())
        session.profile = make_profile(role)
        return ViewComposer(session, DataStore(MemoryBackend())).compose(view_id, params)

    def test_restricted_view(self):
        """Customers opening reports get the restricted payload"""
        payload = self.compose(Role.CUSTOMER, 'reports')
        self.assertTrue(payload['access_restricted'])
        self.assertEqual(payload['title'], 'Access Restricted')
        self.assertEqual(payload['message'], "You don't have permission to view reports.")

    def test_unknown_view_falls_back_to_dashboard(self):
        """Unknown view ids render the dashboard"""
        payload = self.compose(Role.MANAGER, 'payroll')
        self.assertEqual(payload['view'], 'dashboard')
        self.assertEqual(payload['title'], 'Manager Dashboard')

    def test_can_modify_flag(self):
        """Read-only views are marked as such"""
        self.assertFalse(self.compose(Role.STAFF, 'fields')['can_modify'])
        self.assertTrue(self.compose(Role.STAFF, 'crops')['can_modify'])
        self.assertTrue(self.compose(Role.MANAGER, 'fields')['can_modify'])


class FormTests(TestCase):
    """Test form validation and submission"""

    def setUp(self):
        self.backend = FakeBackend()
        self.store = DataStore(self.backend)

    def test_submit_field(self):
        """A valid field is added with its default status"""
        result = submit_form('fields', field_values(), self.store)
        self.assertTrue(result.ok)
        self.assertEqual(result.row['status'], 'active')
        self.assertEqual(result.row['size'], 12.5)
        self.assertEqual(self.store.fields[0]['name'], 'North Field')

    def test_required_and_positive(self):
        """Missing names and zero sizes are rejected with their messages"""
        values, errors = validate_form('fields', {**field_values(), 'name': '', 'size': '0'})
        self.assertIsNone(values)
        self.assertEqual(errors['name'], 'Field name is required')
        self.assertEqual(errors['size'], 'Field size must be greater than 0')

    def test_blank_optional_input_is_null(self):
        """Blank optional dates and references become None"""
        values, errors = validate_form('inputs', {
            'name': 'Urea', 'type': 'fertilizer', 'supplier': 'Agro', 'unit': 'kg',
            'cost_per_unit': '10', 'expiry_date': '',
        })
        self.assertEqual(errors, {})
        self.assertIsNone(values['expiry_date'])
        self.assertEqual(values['quantity_in_stock'], 0)

    def test_empty_form_blocked_for_every_kind(self):
        """Every kind has required values; empty forms never reach the backend"""
        for kind in ENTITY_KINDS:
            result = submit_form(kind.name, {}, self.store)
            self.assertFalse(result.ok, kind.name)
            self.assertTrue(result.errors, kind.name)
        self.assertEqual(self.backend.mutations(), [])

    def test_negative_numbers_rejected(self):
        """Declared non-negative numbers reject negative input"""
        numeric = [
            ('fields', 'size'), ('crops', 'area'), ('livestock', 'weight'),
            ('inputs', 'quantity_in_stock'), ('inputs', 'cost_per_unit'), ('inputs', 'reorder_level'),
            ('products', 'price_per_unit'), ('products', 'quantity_available'),
            ('harvests', 'quantity'), ('sales', 'quantity'), ('sales', 'price_per_unit'),
            ('sales', 'total_amount'),
        ]
        for kind, name in numeric:
            _, errors = validate_form(kind, {name: '-1'})
            self.assertIn(name, errors, f'{kind}.{name}')

    def test_numbers_bounded_by_their_columns(self):
        """Too many digits or decimal places are rejected before reaching the backend"""
        numeric = [
            ('fields', 'size'), ('crops', 'area'), ('livestock', 'weight'),
            ('inputs', 'quantity_in_stock'), ('inputs', 'cost_per_unit'), ('inputs', 'reorder_level'),
            ('products', 'price_per_unit'), ('products', 'quantity_available'),
            ('harvests', 'quantity'), ('sales', 'quantity'), ('sales', 'price_per_unit'),
            ('sales', 'total_amount'),
        ]
        for kind, name in numeric:
            for value in ('1e15', '1.234'):
                _, errors = validate_form(kind, {name: value})
                self.assertIn(name, errors, f'{kind}.{name}={value}')
        _, errors = validate_form('livestock', {'weight': '1234567'})
        self.assertIn('weight', errors)
        _, errors = validate_form('fields', {'size': '123456789'})
        self.assertIn('size', errors)

    def test_computed_sale_total_bounded(self):
        """A quantity x price product too large for the total column is rejected"""
        values, errors = validate_form('sales', {
            'product_id': '00000000-0000-0000-0000-0000000000aa', 'customer_name': 'Bulk buyer',
            'quantity': '9999999999', 'price_per_unit': '9999999999', 'sale_date': '2024-03-01',
        })
        self.assertIsNone(values)
        self.assertEqual(errors['total_amount'], 'Total amount is too large')

        values, errors = validate_form('sales', {
            'product_id': '00000000-0000-0000-0000-0000000000aa', 'customer_name': 'Buyer',
            'quantity': '2.5', 'price_per_unit': '3.33', 'sale_date': '2024-03-01',
        })
        self.assertEqual(errors, {})
        self.assertEqual(str(values['total_amount']), '8.32')

    def test_rejected_form_does_not_call_backend(self):
        """Invalid forms never reach the backend"""
        result = submit_form('fields', {}, self.store)
        self.assertFalse(result.ok)
        self.assertEqual(self.backend.mutations(), [])

    def test_backend_failure(self):
        """Backend failures become a general form error"""
        self.backend.fail_on.add('insert')
        result = submit_form('fields', field_values(), self.store)
        self.assertFalse(result.ok)
        self.assertEqual(result.errors, {'general': 'Failed to save field. Please try again.'})
        self.assertIsNotNone(result.backend_error)

    def test_partial_update(self):
        """Partial submissions only change the given values"""
        row = submit_form('fields', field_values(), self.store).row
        result = submit_form('fields', {'status': 'maintenance'}, self.store, instance_id=row['id'], partial=True)
        self.assertTrue(result.ok)
        self.assertEqual(result.row['status'], 'maintenance')
        self.assertEqual(result.row['name'], 'North Field')

    def test_partial_update_checks_stored_dates(self):
        """One-date partial updates are ordered against the stored other date"""
        row = submit_form('crops', {
            'name': 'Maize', 'variety': 'SC403', 'planting_date': '2024-01-01',
            'expected_harvest_date': '2024-05-01', 'area': '3',
        }, self.store).row
        result = submit_form('crops', {'planting_date': '2024-06-01'}, self.store, instance_id=row['id'], partial=True)
        self.assertFalse(result.ok)
        self.assertEqual(result.errors, {'expected_harvest_date': 'Harvest date must be after planting date'})
        self.assertEqual(self.backend.get('crops', row['id'])['planting_date'], '2024-01-01')

        result = submit_form('crops', {'planting_date': '2024-02-01'}, self.store, instance_id=row['id'], partial=True)
        self.assertTrue(result.ok)

    def test_partial_update_of_missing_row(self):
        """Partial updates of unknown ids report RowNotFound"""
        result = submit_form('fields', {'status': 'resting'}, self.store,
                             instance_id='00000000-0000-0000-0000-00000000dead', partial=True)
        self.assertFalse(result.ok)
        self.assertIsInstance(result.backend_error, RowNotFound)
        self.assertEqual(self.backend.mutations(), [])


class AuthAPITests(TestCase):
    """Test login, logout and token endpoints"""

    def setUp(self):
        call_command('seed_demo_users', stdout=StringIO())
        self.client = APIClient()

    def login(self, username='admin', password='admin123'):
        return self.client.post('/api/v1/auth/login/', {'username': username, 'password': password}, format='json')

    def test_login(self):
        """Demo accounts sign in and receive their navigation"""
        response = self.login()
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['role'], 'admin')
        self.assertIn('access', response.data)
        self.assertIn('reports', [item['id'] for item in response.data['navigation']])

    def test_login_invalid_password(self):
        """Wrong passwords are rejected"""
        response = self.login(password='nope')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['error'], 'Invalid username or password')

    def test_login_missing_fields(self):
        """Both username and password are required"""
        response = self.client.post('/api/v1/auth/login/', {'username': 'admin'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Please enter both username and password')

    def test_me_requires_authentication(self):
        """Unauthenticated requests are rejected"""
        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me(self):
        """The current profile comes back with its capabilities"""
        access = self.login('staff', 'staff123').data['access']
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {access}')
        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['username'], 'staff')
        self.assertFalse(response.data['capabilities']['fields']['modify'])

    def test_logout_invalidates_refresh(self):
        """After logout the refresh token can no longer be used"""
        tokens = self.login().data
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        response = self.client.post('/api/v1/auth/logout/', {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_205_RESET_CONTENT)

        self.client.credentials()
        response = self.client.post('/api/v1/auth/refresh/', {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refresh(self):
        """A refresh token is exchanged for a new pair"""
        tokens = self.login().data
        response = self.client.post('/api/v1/auth/refresh/', {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)

    def test_health(self):
        response = self.client.get('/api/v1/health/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['backend'], 'orm')


class ScreenAPITests(TestCase):
    """Test composed screens and entity endpoints over HTTP"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()

    def test_customer_restricted_from_reports(self):
        """Restricted views answer 403 with the restricted payload"""
        self.client.authenticate_user(TestDataFactory.create_user(role=Role.CUSTOMER))
        response = self.client.get('/api/v1/views/reports/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(response.data['access_restricted'])

    def test_staff_dashboard(self):
        """Each role gets its own dashboard"""
        self.client.authenticate_user(TestDataFactory.create_user(role=Role.STAFF, full_name='Jane Banda'))
        response = self.client.get('/api/v1/views/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['title'], 'Staff Dashboard')
        self.assertTrue(response.data['greeting'].endswith('Jane Banda!'))
        self.assertEqual([s['title'] for s in response.data['stats']][0], 'My Tasks')

    def test_navigation(self):
        self.client.authenticate_user(TestDataFactory.create_user(role=Role.MANAGER))
        response = self.client.get('/api/v1/navigation/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertNotIn('marketplace', [item['id'] for item in response.data])

    def test_staff_cannot_create_field(self):
        """Modify permission is enforced per view"""
        self.client.authenticate_user(TestDataFactory.create_user(role=Role.STAFF))
        response = self.client.post('/api/v1/fields/', field_values(), format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_unknown_row(self):
        self.client.authenticate_user(TestDataFactory.create_user(role=Role.MANAGER))
        response = self.client.get('/api/v1/fields/00000000-0000-0000-0000-00000000dead/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_logged_out_client(self):
        self.client.authenticate_user(TestDataFactory.create_user())
        self.client.logout()
        response = self.client.get('/api/v1/views/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class SeedDemoUsersTests(TestCase):
    """Test the seed_demo_users management command"""

    def test_creates_demo_users(self):
        out = StringIO()
        call_command('seed_demo_users', stdout=out)
        self.assertEqual(User.objects.count(), 4)
        self.assertEqual(User.objects.get(username='customer').role, Role.CUSTOMER)
        self.assertTrue(User.objects.get(email='manager@farm.zm').check_password('manager123'))
        self.assertIn('4 demo users created', out.getvalue())

    def test_rerun_keeps_passwords(self):
        """Re-running updates profiles without resetting changed passwords"""
        call_command('seed_demo_users', stdout=StringIO())
        user = User.objects.get(username='staff')
        user.set_password('changed-pass')
        user.save()
        call_command('seed_demo_users', stdout=StringIO())
        self.assertEqual(User.objects.count(), 4)
        self.assertTrue(User.objects.get(username='staff').check_password('changed-pass'))

        call_command('seed_demo_users', '--reset-passwords', stdout=StringIO())
        self.assertTrue(User.objects.get(username='staff').check_password('staff123'))


class RestBackendTests(TestCase):
    """Test the hosted row API client against a mocked HTTP session"""

    def setUp(self):
        self.http = mock.Mock()
        self.backend = RestBackend(base_url='https://farm.example/', api_key='anon-key', session=self.http)

    def respond(self, status_code=200, payload=None):
        response = mock.Mock(status_code=status_code, content=b'x' if payload is not None else b'')
        response.json.return_value = payload
        self.http.request.return_value = response

    def test_select_clause(self):
        self.assertEqual(select_clause(()), '*')
        self.assertEqual(select_clause(get_entity('sales').joins), '*,product:product_id(name,unit),customer:customer_id(name)')

    def test_select_orders_newest_first(self):
        self.respond(payload=[{'id': '1'}])
        rows = self.backend.bind('user-token').select('crops', get_entity('crops').joins)
        self.assertEqual(rows, [{'id': '1'}])
        args, kwargs = self.http.request.call_args
        self.assertEqual(args, ('GET', 'https://farm.example/rest/v1/crops'))
        self.assertEqual(kwargs['params']['order'], 'created_at.desc')
        self.assertEqual(kwargs['headers']['Authorization'], 'Bearer user-token')
        self.assertEqual(kwargs['headers']['apikey'], 'anon-key')

    def test_sign_in(self):
        self.respond(payload={'access_token': 'a', 'refresh_token': 'r', 'user': {'id': 'u1'}})
        tokens = self.backend.sign_in('admin@farm.zm', 'admin123')
        self.assertEqual(tokens.user_id, 'u1')
        self.assertEqual(self.http.request.call_args[1]['params'], {'grant_type': 'password'})

    def test_rejected_credentials(self):
        self.respond(400, {'error_description': 'Invalid login credentials'})
        with self.assertRaises(AuthenticationError) as ctx:
            self.backend.sign_in('admin@farm.zm', 'nope')
        self.assertEqual(ctx.exception.message, 'Invalid login credentials')

    def test_row_errors(self):
        self.respond(500, {'message': 'boom'})
        with self.assertRaises(BackendError) as ctx:
            self.backend.select('fields')
        self.assertEqual(ctx.exception.status, 500)
        self.assertNotIsInstance(ctx.exception, AuthenticationError)

    def test_update_missing_row(self):
        self.respond(payload=[])
        with self.assertRaises(RowNotFound):
            self.backend.update('fields', 'missing', {'status': 'resting'})

    def test_unreachable(self):
        self.http.request.side_effect = requests.exceptions.ConnectionError('down')
        with self.assertRaises(BackendError):
            self.backend.select('fields')

    def test_no_transactions(self):
        with self.assertRaises(TransactionUnsupported):
            with self.backend.atomic():
                pass

    def test_requires_configuration(self):
        with self.assertRaises(BackendError):
            RestBackend(base_url='', api_key='')
