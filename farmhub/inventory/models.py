import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models


class Input(models.Model):
    """Farm inputs kept in stock (seed, fertilizer, chemicals, equipment)"""
    TYPE_CHOICES = [
        ('seed', 'Seed'),
        ('fertilizer', 'Fertilizer'),
        ('pesticide', 'Pesticide'),
        ('herbicide', 'Herbicide'),
        ('equipment', 'Equipment'),
        ('other', 'Other'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    supplier = models.CharField(max_length=200)
    quantity_in_stock = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    unit = models.CharField(max_length=30)
    cost_per_unit = models.DecimalField(max_digits=12, decimal_places=2)
    reorder_level = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    expiry_date = models.DateField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'inputs'
        ordering = ['-created_at']


class Product(models.Model):
    """Farm produce offered for sale"""
    STATUS_CHOICES = [
        ('available', 'Available'),
        ('sold', 'Sold'),
        ('reserved', 'Reserved'),
        ('damaged', 'Damaged'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    type = models.CharField(max_length=50)
    description = models.TextField(blank=True, default='')
    price_per_unit = models.DecimalField(max_digits=12, decimal_places=2)
    unit = models.CharField(max_length=30)
    quantity_available = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    harvest_date = models.DateField(blank=True, null=True)
    expiry_date = models.DateField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='available')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'products'
        ordering = ['-created_at']


class Harvest(models.Model):
    """Harvest records per crop and field"""
    QUALITY_CHOICES = [
        ('excellent', 'Excellent'),
        ('good', 'Good'),
        ('fair', 'Fair'),
        ('poor', 'Poor'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    crop = models.ForeignKey('fields.Crop', on_delete=models.SET_NULL, null=True, blank=True, related_name='harvests')
    field = models.ForeignKey('fields.Field', on_delete=models.SET_NULL, null=True, blank=True, related_name='harvests')
    harvest_date = models.DateField()
    quantity = models.DecimalField(max_digits=12, decimal_places=2)
    unit = models.CharField(max_length=30)
    quality = models.CharField(max_length=20, choices=QUALITY_CHOICES, default='good')
    storage_location = models.CharField(max_length=200)
    harvested_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        db_column='harvested_by', related_name='harvests',
    )
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Harvest {self.harvest_date} - {self.quantity} {self.unit}"

    class Meta:
        db_table = 'harvests'
        ordering = ['-created_at']
