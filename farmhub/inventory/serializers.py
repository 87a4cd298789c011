from farmhub.core.validators import (
    FormSerializer, amount, choice, optional_date, optional_ref, optional_text, required_date,
    required_text, messages,
)
from .models import Input, Product, Harvest


class InputFormSerializer(FormSerializer):
    name = required_text('Input name is required', max_length=200)
    type = choice(Input.TYPE_CHOICES, error_messages=messages('Input type is required'))
    supplier = required_text('Supplier is required', max_length=200)
    quantity_in_stock = amount('Quantity must be 0 or greater', default=0)
    unit = required_text('Unit is required', max_length=30)
    cost_per_unit = amount('Cost per unit must be 0 or greater')
    reorder_level = amount('Reorder level must be 0 or greater', default=0)
    expiry_date = optional_date()


class ProductFormSerializer(FormSerializer):
    name = required_text('Product name is required', max_length=200)
    type = required_text('Product type is required', max_length=50)
    description = optional_text()
    price_per_unit = amount('Price per unit must be greater than 0', positive=True)
    unit = required_text('Unit is required', max_length=30)
    quantity_available = amount('Quantity must be 0 or greater', default=0)
    harvest_date = optional_date()
    expiry_date = optional_date()
    status = choice(Product.STATUS_CHOICES, default='available')

    def validate_description(self, value):
        return value or ''


class HarvestFormSerializer(FormSerializer):
    crop_id = optional_ref()
    field_id = optional_ref()
    harvest_date = required_date('Harvest date is required')
    quantity = amount('Quantity must be greater than 0', positive=True)
    unit = required_text('Unit is required', max_length=30)
    quality = choice(Harvest.QUALITY_CHOICES, default='good')
    storage_location = required_text('Storage location is required', max_length=200)
    harvested_by = optional_ref()
    notes = optional_text()
