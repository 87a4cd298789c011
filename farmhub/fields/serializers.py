from rest_framework import serializers

from farmhub.core.validators import (
    FormSerializer, amount, choice, optional_ref, optional_text, required_date, required_text,
)
from .models import Field, Crop


class FieldFormSerializer(FormSerializer):
    name = required_text('Field name is required', max_length=200)
    size = amount('Field size must be greater than 0', max_digits=10, positive=True)
    location = required_text('Location is required', max_length=255)
    soil_type = required_text('Soil type is required', max_length=50)
    irrigation_system = optional_text(max_length=100)
    status = choice(Field.STATUS_CHOICES, default='active')


class CropFormSerializer(FormSerializer):
    name = required_text('Crop name is required', max_length=200)
    variety = required_text('Variety is required', max_length=200)
    planting_date = required_date('Planting date is required')
    expected_harvest_date = required_date('Expected harvest date is required')
    field_id = optional_ref()
    status = choice(Crop.STATUS_CHOICES, default='planted')
    area = amount('Area must be greater than 0', max_digits=10, positive=True)
    notes = optional_text()

    def validate(self, attrs):
        planted = self.current(attrs, 'planting_date')
        expected = self.current(attrs, 'expected_harvest_date')
        if planted and expected and planted >= expected:
            raise serializers.ValidationError({
                'expected_harvest_date': 'Harvest date must be after planting date'
            })
        return attrs
