from decimal import Decimal

from rest_framework import serializers

from farmhub.core.validators import (
    FormSerializer, amount, choice, messages, optional_ref, optional_text, required_date, required_text,
)
from .models import Sale

CENTS = Decimal('0.01')
# total_amount is stored in a 14/2 column
MAX_TOTAL = Decimal(10) ** 12


def sale_total(quantity, price_per_unit):
    return (quantity * price_per_unit).quantize(CENTS)


class SaleFormSerializer(FormSerializer):
    product_id = serializers.UUIDField(error_messages={**messages('Product is required'), 'invalid': 'Product is required'})
    customer_id = optional_ref()
    customer_name = required_text('Customer name is required', max_length=200)
    customer_phone = optional_text(max_length=20)
    quantity = amount('Quantity must be greater than 0', positive=True)
    price_per_unit = amount('Price per unit must be 0 or greater')
    total_amount = amount('Total amount must be 0 or greater', max_digits=14, required=False, allow_null=True)
    sale_date = required_date('Sale date is required')
    payment_method = choice(Sale.PAYMENT_METHOD_CHOICES, default='cash')
    payment_status = choice(Sale.PAYMENT_STATUS_CHOICES, default='pending')
    delivery_status = choice(Sale.DELIVERY_STATUS_CHOICES, default='pending')
    notes = optional_text()

    def validate(self, attrs):
        # total defaults to quantity x unit price
        if attrs.get('total_amount') is None and 'quantity' in attrs and 'price_per_unit' in attrs:
            total = sale_total(attrs['quantity'], attrs['price_per_unit'])
            if total >= MAX_TOTAL:
                raise serializers.ValidationError({'total_amount': 'Total amount is too large'})
            attrs['total_amount'] = total
        elif 'total_amount' in attrs and attrs['total_amount'] is None:
            del attrs['total_amount']
        return attrs


class PlaceOrderSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = amount('Quantity must be greater than 0', positive=True)
    customer_name = serializers.CharField(required=False, allow_blank=True, max_length=200)
    customer_phone = serializers.CharField(required=False, allow_blank=True, max_length=20)
    address = serializers.CharField(required=False, allow_blank=True)
