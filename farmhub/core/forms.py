"""
Form submission: validate with the kind's schema, then mutate through the store.
"""
import logging
from dataclasses import dataclass, field

from farmhub.core.exceptions import BackendError, InvalidReference
from farmhub.core.schema import get_entity

logger = logging.getLogger('farmhub.core.forms')


@dataclass
class FormResult:
    ok: bool
    row: dict = None
    errors: dict = field(default_factory=dict)
    backend_error: BackendError = None


def first_errors(errors):
    """Collapse DRF's error lists to one message per field."""
    flat = {}
    for name, messages in errors.items():
        if isinstance(messages, (list, tuple)) and messages:
            message = messages[0]
        else:
            message = messages
        flat['general' if name == 'non_field_errors' else name] = str(message)
    return flat


def validate_form(kind, data, partial=False, instance=None):
    """Return (values, errors) for `data` against the kind's schema.

    `instance` is the stored row a partial update applies to; cross-field
    checks fall back to its values for fields the update leaves out.
    """
    serializer = get_entity(kind).form_class(instance, data=data, partial=partial)
    if not serializer.is_valid():
        return None, first_errors(serializer.errors)
    return serializer.validated_data, {}


def submit_form(kind, data, store, instance_id=None, partial=False):
    """Validate then add (or update when `instance_id` is given)."""
    entity = get_entity(kind)
    try:
        instance = store.fetch_one(entity.name, instance_id) if instance_id is not None and partial else None
    except BackendError as e:
        logger.warning(f"Cannot load {entity.label} {instance_id}: {e.message}")
        return FormResult(ok=False, errors={'general': f'{entity.label.capitalize()} not found.'}, backend_error=e)

    values, errors = validate_form(kind, data, partial=partial, instance=instance)
    if errors:
        logger.debug(f"Rejected {entity.label} form: {errors}")
        return FormResult(ok=False, errors=errors)

    try:
        if instance_id is None:
            row = store.add(entity.name, dict(values))
        else:
            row = store.update(entity.name, instance_id, dict(values))
    except InvalidReference as e:
        logger.debug(f"Rejected {entity.label} form: {e.column} -> {e.message}")
        return FormResult(ok=False, errors={e.column: e.message})
    except BackendError as e:
        logger.error(f"Error saving {entity.label}: {e.message}", exc_info=True)
        return FormResult(
            ok=False,
            errors={'general': f'Failed to save {entity.label}. Please try again.'},
            backend_error=e,
        )
    return FormResult(ok=True, row=row)
