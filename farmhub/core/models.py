import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models

from farmhub.core.roles import Role


class User(AbstractUser):
    """Sign-in account and farm profile in one row"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.STAFF)
    full_name = models.CharField(max_length=200)
    phone = models.CharField(max_length=20, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.full_name or self.username

    class Meta:
        db_table = 'profiles'
        ordering = ['-created_at']
