from farmhub.core.validators import (
    FormSerializer, choice, optional_date, optional_ref, optional_text, required_date, required_text,
)
from .models import Task


class TaskFormSerializer(FormSerializer):
    title = required_text('Task title is required', max_length=200)
    description = optional_text()
    assigned_to = optional_ref()
    assigned_by = optional_ref()
    priority = choice(Task.PRIORITY_CHOICES, default='medium')
    status = choice(Task.STATUS_CHOICES, default='pending')
    due_date = required_date('Due date is required')
    start_date = optional_date()
    completed_date = optional_date()
    field_id = optional_ref()
    crop_id = optional_ref()
    livestock_id = optional_ref()
    notes = optional_text()

    def validate_description(self, value):
        return value or ''
