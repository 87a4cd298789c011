from farmhub.core.roles import Role
from farmhub.core.screens import as_date, column, relation_value, render_rows, today

PRIORITIES = ('low', 'medium', 'high', 'urgent')


def is_overdue(task):
    if task.get('status') in ('completed', 'cancelled'):
        return False
    due = as_date(task.get('due_date'))
    return due is not None and due < today()


def open_tasks_for(tasks, profile_id):
    return [
        t for t in tasks
        if str(t.get('assigned_to')) == str(profile_id) and t.get('status') in ('pending', 'in-progress')
    ]


def tasks_screen(context):
    tasks = context.store.tasks
    visible = tasks
    if context.role == Role.STAFF:
        # staff only see their own assignments
        visible = [t for t in tasks if str(t.get('assigned_to')) == str(context.profile.id)]

    return {
        'title': 'Task Management',
        'columns': [
            column('title', 'Task'),
            column('assigned_to_name', 'Assigned To'),
            column('priority', 'Priority'),
            column('status', 'Status'),
            column('due_date', 'Due Date'),
            column('assigned_by_name', 'Assigned By'),
            column('created_at', 'Created'),
        ],
        'rows': render_rows(visible, lambda row: {
            'assigned_to_name': relation_value(row, 'assigned_to_profile', 'full_name', 'Unassigned'),
            'assigned_by_name': relation_value(row, 'assigned_by_profile', 'full_name', 'System'),
            'overdue': is_overdue(row),
        }),
        'summary': {
            'pending': sum(1 for t in tasks if t.get('status') == 'pending'),
            'in_progress': sum(1 for t in tasks if t.get('status') == 'in-progress'),
            'completed': sum(1 for t in tasks if t.get('status') == 'completed'),
            'overdue': sum(1 for t in tasks if is_overdue(t)),
            'by_priority': {p: sum(1 for t in tasks if t.get('priority') == p) for p in PRIORITIES},
        },
    }
