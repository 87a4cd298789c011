from rest_framework import serializers

from farmhub.core.validators import (
    FormSerializer, amount, choice, optional_date, optional_text, required_text, messages,
)
from .models import Livestock


class LivestockFormSerializer(FormSerializer):
    type = choice(Livestock.TYPE_CHOICES, error_messages=messages('Animal type is required'))
    breed = required_text('Breed is required', max_length=100)
    tag = required_text('Tag is required', max_length=50)
    date_of_birth = optional_date()
    gender = choice(Livestock.GENDER_CHOICES, error_messages=messages('Gender is required'))
    weight = amount('Weight must be greater than 0', max_digits=8, positive=True, required=False, allow_null=True)
    health_status = choice(Livestock.HEALTH_STATUS_CHOICES, default='healthy')
    vaccinations = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False, default=list)
    reproduction_status = choice(
        Livestock.REPRODUCTION_STATUS_CHOICES, required=False, allow_blank=True, allow_null=True,
    )
    notes = optional_text()

    def validate_vaccinations(self, value):
        # trimmed, no blanks, no repeats
        cleaned = []
        for vaccination in value:
            vaccination = vaccination.strip()
            if vaccination and vaccination not in cleaned:
                cleaned.append(vaccination)
        return cleaned
