"""
Building blocks for the entity form schemas.

Every form schema is a plain DRF Serializer: it only validates. Persisting
goes through the data store, which hands the validated values to the backend.
"""
from collections.abc import Mapping

from rest_framework import serializers


class GreaterThanZero:
    def __init__(self, message):
        self.message = message

    def __call__(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError(self.message)


class NotNegative:
    def __init__(self, message):
        self.message = message

    def __call__(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError(self.message)


def messages(message):
    return {'required': message, 'blank': message, 'null': message}


def required_text(message, **kwargs):
    return serializers.CharField(error_messages=messages(message), **kwargs)


def optional_text(**kwargs):
    return serializers.CharField(required=False, allow_blank=True, allow_null=True, **kwargs)


def required_date(message):
    return serializers.DateField(error_messages=messages(message))


def optional_date():
    return serializers.DateField(required=False, allow_null=True)


def optional_ref():
    """Nullable foreign key column."""
    return serializers.UUIDField(required=False, allow_null=True)


def amount(message, max_digits=12, positive=False, **kwargs):
    """Decimal input with two places, bounded like its column; `positive` rejects 0."""
    validator = GreaterThanZero(message) if positive else NotNegative(message)
    return serializers.DecimalField(
        max_digits=max_digits, decimal_places=2,
        validators=[validator],
        error_messages={**messages(message), 'invalid': message},
        **kwargs
    )


def choice(choices, **kwargs):
    return serializers.ChoiceField(choices=choices, **kwargs)


class FormSerializer(serializers.Serializer):
    """Empty inputs on non-text fields mean "not set"."""

    def to_internal_value(self, data):
        if isinstance(data, Mapping):
            cleaned = {key: data[key] for key in data}
            for name, field in self.fields.items():
                if cleaned.get(name) != '' or isinstance(field, serializers.CharField):
                    continue
                if field.allow_null:
                    cleaned[name] = None
                else:
                    del cleaned[name]
            data = cleaned
        return super().to_internal_value(data)

    def current(self, attrs, name):
        """Submitted value, else the stored row's value on a partial update."""
        if name in attrs:
            return attrs[name]
        if self.instance is not None and self.instance.get(name) is not None:
            return self.fields[name].to_internal_value(self.instance[name])
        return None
