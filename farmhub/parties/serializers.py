from rest_framework import serializers

from farmhub.core.validators import FormSerializer, optional_text, required_text


class CustomerFormSerializer(FormSerializer):
    name = required_text('Customer name is required', max_length=200)
    email = serializers.EmailField(
        required=False, allow_blank=True, allow_null=True,
        error_messages={'invalid': 'Please enter a valid email address'},
    )
    phone = optional_text(max_length=20)
    address = optional_text()

    def validate_email(self, value):
        return value or None
