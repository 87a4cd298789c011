import uuid

from django.db import models


class Livestock(models.Model):
    """Individual animals, identified by ear tag"""
    TYPE_CHOICES = [
        ('cattle', 'Cattle'),
        ('goats', 'Goats'),
        ('sheep', 'Sheep'),
        ('pigs', 'Pigs'),
        ('chickens', 'Chickens'),
        ('other', 'Other'),
    ]
    GENDER_CHOICES = [
        ('male', 'Male'),
        ('female', 'Female'),
    ]
    HEALTH_STATUS_CHOICES = [
        ('healthy', 'Healthy'),
        ('sick', 'Sick'),
        ('quarantine', 'Quarantine'),
        ('deceased', 'Deceased'),
    ]
    REPRODUCTION_STATUS_CHOICES = [
        ('pregnant', 'Pregnant'),
        ('lactating', 'Lactating'),
        ('breeding', 'Breeding'),
        ('none', 'None'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    breed = models.CharField(max_length=100)
    tag = models.CharField(max_length=50)
    date_of_birth = models.DateField(blank=True, null=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    weight = models.DecimalField(max_digits=8, decimal_places=2, blank=True, null=True, help_text='Weight in kg')
    health_status = models.CharField(max_length=20, choices=HEALTH_STATUS_CHOICES, default='healthy')
    vaccinations = models.JSONField(default=list, blank=True)
    reproduction_status = models.CharField(max_length=20, choices=REPRODUCTION_STATUS_CHOICES, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.tag} ({self.type})"

    class Meta:
        db_table = 'livestock'
        ordering = ['-created_at']
        verbose_name_plural = 'livestock'
