import uuid

from django.db import models


class Field(models.Model):
    """Farm fields (plots of land)"""
    STATUS_CHOICES = [
        ('active', 'Active'),
        ('resting', 'Resting'),
        ('maintenance', 'Maintenance'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    size = models.DecimalField(max_digits=10, decimal_places=2, help_text='Size in acres')
    location = models.CharField(max_length=255)
    soil_type = models.CharField(max_length=50)
    irrigation_system = models.CharField(max_length=100, blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'fields'
        ordering = ['-created_at']


class Crop(models.Model):
    """Crops planted on a field"""
    STATUS_CHOICES = [
        ('planted', 'Planted'),
        ('growing', 'Growing'),
        ('flowering', 'Flowering'),
        ('harvested', 'Harvested'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    variety = models.CharField(max_length=200)
    planting_date = models.DateField()
    expected_harvest_date = models.DateField()
    field = models.ForeignKey(Field, on_delete=models.SET_NULL, null=True, blank=True, related_name='crops')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='planted')
    area = models.DecimalField(max_digits=10, decimal_places=2, help_text='Area in acres')
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} ({self.variety})"

    class Meta:
        db_table = 'crops'
        ordering = ['-created_at']
