"""
View composer: maps the selected navigation id to a rendered screen.
"""
import logging

from django.utils.module_loading import import_string

from farmhub.core.roles import Action, can
from farmhub.core.screens import ScreenContext

logger = logging.getLogger('farmhub.core.composer')

DEFAULT_VIEW = 'dashboard'

SCREENS = {
    'dashboard': 'farmhub.reports.screens.dashboard_screen',
    'fields': 'farmhub.fields.screens.fields_screen',
    'crops': 'farmhub.fields.screens.crops_screen',
    'livestock': 'farmhub.livestock.screens.livestock_screen',
    'inputs': 'farmhub.inventory.screens.inputs_screen',
    'products': 'farmhub.inventory.screens.products_screen',
    'harvests': 'farmhub.inventory.screens.harvests_screen',
    'sales': 'farmhub.sales.screens.sales_screen',
    'tasks': 'farmhub.tasks.screens.tasks_screen',
    'reports': 'farmhub.reports.screens.reports_screen',
    'customers': 'farmhub.parties.screens.customers_screen',
    'marketplace': 'farmhub.sales.screens.marketplace_screen',
    'my-orders': 'farmhub.sales.screens.my_orders_screen',
}

RESTRICTED_MESSAGES = {
    'customers': "You don't have permission to view customer data.",
    'sales': "You don't have permission to view sales data.",
    'tasks': "You don't have permission to view tasks.",
    'reports': "You don't have permission to view reports.",
}


def restricted_payload(view_id):
    return {
        'view': view_id,
        'title': 'Access Restricted',
        'access_restricted': True,
        'can_modify': False,
        'message': RESTRICTED_MESSAGES.get(view_id, "You don't have permission to view this page."),
    }


class ViewComposer:
    """One current view per session; starts on the dashboard."""

    def __init__(self, session, store):
        self.session = session
        self.store = store
        self.current = DEFAULT_VIEW

    def select(self, view_id):
        if view_id not in SCREENS:
            logger.debug(f"Unknown view '{view_id}', falling back to {DEFAULT_VIEW}")
            view_id = DEFAULT_VIEW
        self.current = view_id
        return view_id

    def render(self, params=None):
        view_id = self.current
        role = self.session.role
        if not can(role, Action.VIEW, view_id):
            username = self.session.profile.username if self.session.profile else 'anonymous'
            logger.warning(f"User '{username}' denied access to view '{view_id}'")
            return restricted_payload(view_id)

        context = ScreenContext(
            profile=self.session.profile,
            store=self.store,
            params=dict(params or {}),
            can_modify=can(role, Action.MODIFY, view_id),
        )
        payload = import_string(SCREENS[view_id])(context)
        return {
            'view': view_id,
            'access_restricted': False,
            'can_modify': context.can_modify,
            **payload,
        }

    def compose(self, view_id, params=None):
        self.select(view_id)
        return self.render(params)
