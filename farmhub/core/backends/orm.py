"""
Backend rendered locally through the Django ORM.

Tables map to models, joins to select_related, sign-in to Django password
checks plus a simplejwt token pair, and sign-out blacklists the refresh token.
"""
import logging

from django.apps import apps
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken, RefreshToken

from farmhub.core.exceptions import AuthenticationError, BackendError, InvalidReference, RowNotFound
from farmhub.core.schema import jsonable
from .base import AuthBackend, AuthTokens, RowBackend

logger = logging.getLogger('farmhub.core.backends')

TABLE_MODELS = {
    'profiles': 'core.User',
    'fields': 'fields.Field',
    'crops': 'fields.Crop',
    'livestock': 'livestock.Livestock',
    'inputs': 'inventory.Input',
    'products': 'inventory.Product',
    'harvests': 'inventory.Harvest',
    'customers': 'parties.Customer',
    'tasks': 'tasks.Task',
    'sales': 'sales.Sale',
}

# Only these profile columns leave the backend
PROFILE_COLUMNS = ('id', 'username', 'role', 'full_name', 'email', 'phone', 'created_at', 'updated_at')


def column_name(model_field):
    return model_field.db_column or model_field.attname


class OrmBackend(AuthBackend, RowBackend):
    name = 'orm'

    def _model(self, table):
        try:
            return apps.get_model(TABLE_MODELS[table])
        except KeyError:
            raise BackendError(f'Unknown table: {table}', status=404)

    def _columns(self, model):
        """Map wire column names to model attribute names."""
        return {column_name(f): f.attname for f in model._meta.concrete_fields}

    def _relation_name(self, model, column):
        for model_field in model._meta.concrete_fields:
            if model_field.is_relation and column_name(model_field) == column:
                return model_field.name
        raise BackendError(f'{model.__name__} has no relation on column {column}')

    def _queryset(self, table, joins):
        model = self._model(table)
        queryset = model.objects.all()
        if joins:
            queryset = queryset.select_related(*(self._relation_name(model, join.column) for join in joins))
        return queryset.order_by('-created_at')

    def _row(self, table, instance, joins):
        row = {}
        for model_field in instance._meta.concrete_fields:
            column = column_name(model_field)
            if table == 'profiles' and column not in PROFILE_COLUMNS:
                continue
            row[column] = jsonable(getattr(instance, model_field.attname))
        for join in joins:
            related = getattr(instance, self._relation_name(type(instance), join.column))
            row[join.alias] = {name: jsonable(getattr(related, name)) for name in join.fields} if related else None
        return row

    def _attributes(self, model, values):
        columns = self._columns(model)
        attributes = {}
        for key, value in values.items():
            if key not in columns:
                raise BackendError(f'{model.__name__} has no column {key}', status=400)
            attributes[columns[key]] = value
        self._check_references(model, attributes)
        return attributes

    def _check_references(self, model, attributes):
        for model_field in model._meta.concrete_fields:
            value = attributes.get(model_field.attname)
            if not model_field.is_relation or value is None:
                continue
            if not model_field.related_model.objects.filter(pk=value).exists():
                label = model_field.related_model._meta.verbose_name
                raise InvalidReference(f'Selected {label} does not exist', column=column_name(model_field))

    def _lookup(self, queryset, row_id):
        try:
            return queryset.get(pk=row_id)
        except (queryset.model.DoesNotExist, ValidationError, ValueError):
            raise RowNotFound(f'{queryset.model._meta.db_table} row {row_id} not found', status=404)

    def select(self, table, joins=()):
        try:
            return [self._row(table, instance, joins) for instance in self._queryset(table, joins)]
        except DatabaseError as e:
            raise BackendError(f'Failed to read {table}: {e}') from e

    def get(self, table, row_id, joins=()):
        try:
            return self._row(table, self._lookup(self._queryset(table, joins), row_id), joins)
        except RowNotFound:
            return None
        except DatabaseError as e:
            raise BackendError(f'Failed to read {table}: {e}') from e

    def insert(self, table, values, joins=()):
        model = self._model(table)
        try:
            with transaction.atomic():
                instance = model.objects.create(**self._attributes(model, values))
            return self._row(table, self._queryset(table, joins).get(pk=instance.pk), joins)
        except DatabaseError as e:
            logger.error(f"Insert into {table} failed: {str(e)}", exc_info=True)
            raise BackendError(f'Failed to insert into {table}: {e}') from e

    def update(self, table, row_id, values, joins=()):
        model = self._model(table)
        instance = self._lookup(model.objects.all(), row_id)
        try:
            with transaction.atomic():
                for attname, value in self._attributes(model, values).items():
                    setattr(instance, attname, value)
                instance.save()
            return self._row(table, self._queryset(table, joins).get(pk=instance.pk), joins)
        except DatabaseError as e:
            logger.error(f"Update of {table} row {row_id} failed: {str(e)}", exc_info=True)
            raise BackendError(f'Failed to update {table}: {e}') from e

    def delete(self, table, row_id):
        model = self._model(table)
        instance = self._lookup(model.objects.all(), row_id)
        try:
            instance.delete()
        except DatabaseError as e:
            logger.error(f"Delete of {table} row {row_id} failed: {str(e)}", exc_info=True)
            raise BackendError(f'Failed to delete from {table}: {e}') from e

    def atomic(self):
        return transaction.atomic()

    # Auth

    def sign_in(self, email, password):
        User = get_user_model()
        user = User.objects.filter(email__iexact=email).first()
        if user is None or not user.is_active or not user.check_password(password):
            raise AuthenticationError('Invalid login credentials', status=400)
        refresh = RefreshToken.for_user(user)
        return AuthTokens(access=str(refresh.access_token), refresh=str(refresh), user_id=str(user.pk))

    def sign_out(self, tokens):
        try:
            RefreshToken(tokens.refresh).blacklist()
        except TokenError as e:
            raise AuthenticationError(f'Token is invalid or expired: {e}', status=401) from e

    def refresh(self, refresh_token):
        try:
            refresh = RefreshToken(refresh_token)
            user_id = refresh['user_id']
            # single-use refresh tokens
            refresh.blacklist()
        except (TokenError, KeyError) as e:
            raise AuthenticationError('Token is invalid or expired.', status=401) from e
        user = get_user_model().objects.filter(pk=user_id, is_active=True).first()
        if user is None:
            raise AuthenticationError('Token is invalid. User no longer exists.', status=401)
        new_refresh = RefreshToken.for_user(user)
        return AuthTokens(access=str(new_refresh.access_token), refresh=str(new_refresh), user_id=str(user.pk))

    def resolve_token(self, access_token):
        try:
            return str(AccessToken(access_token)['user_id'])
        except (TokenError, KeyError) as e:
            raise AuthenticationError('Token is invalid or expired.', status=401) from e
