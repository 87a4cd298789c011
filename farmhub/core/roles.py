"""
Roles, capabilities and navigation.

A single capability table decides which roles may open each view and which
may change its rows. The navigation tree is derived from that table, so the
sidebar and the per-view checks can never disagree.
"""
from dataclasses import dataclass, field
from enum import Enum

from django.db import models


class Role(models.TextChoices):
    ADMIN = 'admin', 'Administrator'
    MANAGER = 'manager', 'Farm Manager'
    STAFF = 'staff', 'Farm Worker'
    CUSTOMER = 'customer', 'Customer'


class Action(Enum):
    VIEW = 'view'
    MODIFY = 'modify'


ALL_ROLES = frozenset(Role)
FARM_ROLES = frozenset({Role.ADMIN, Role.MANAGER, Role.STAFF})
OFFICE_ROLES = frozenset({Role.ADMIN, Role.MANAGER})
NOBODY = frozenset()

CAPABILITIES = {
    'dashboard': {Action.VIEW: ALL_ROLES, Action.MODIFY: NOBODY},
    'fields': {Action.VIEW: FARM_ROLES, Action.MODIFY: OFFICE_ROLES},
    'crops': {Action.VIEW: FARM_ROLES, Action.MODIFY: FARM_ROLES},
    'livestock': {Action.VIEW: FARM_ROLES, Action.MODIFY: FARM_ROLES},
    'inputs': {Action.VIEW: FARM_ROLES, Action.MODIFY: FARM_ROLES},
    'products': {Action.VIEW: FARM_ROLES, Action.MODIFY: FARM_ROLES},
    'harvests': {Action.VIEW: FARM_ROLES, Action.MODIFY: FARM_ROLES},
    'sales': {Action.VIEW: FARM_ROLES, Action.MODIFY: FARM_ROLES},
    'tasks': {Action.VIEW: FARM_ROLES, Action.MODIFY: FARM_ROLES},
    'reports': {Action.VIEW: OFFICE_ROLES, Action.MODIFY: NOBODY},
    'customers': {Action.VIEW: OFFICE_ROLES, Action.MODIFY: OFFICE_ROLES},
    'marketplace': {Action.VIEW: frozenset({Role.CUSTOMER}), Action.MODIFY: frozenset({Role.CUSTOMER})},
    'my-orders': {Action.VIEW: frozenset({Role.CUSTOMER}), Action.MODIFY: NOBODY},
}


def as_role(value):
    """Coerce a role string (or Role) to Role, None when unknown."""
    if value is None:
        return None
    try:
        return Role(value)
    except ValueError:
        return None


def can(role, action, view):
    """Return True if `role` may perform `action` on `view`."""
    role = as_role(role)
    if role is None:
        return False
    rules = CAPABILITIES.get(view)
    if rules is None:
        return False
    return role in rules[action]


def capabilities_for(role):
    """Map every view id to the actions `role` may perform on it."""
    return {
        view: {action.value: can(role, action, view) for action in Action}
        for view in CAPABILITIES
    }


@dataclass(frozen=True)
class NavItem:
    id: str
    label: str
    children: tuple = field(default_factory=tuple)

    def roles(self):
        if self.children:
            roles = set()
            for child in self.children:
                roles |= child.roles()
            return frozenset(roles)
        return CAPABILITIES[self.id][Action.VIEW]


NAVIGATION = (
    NavItem('dashboard', 'Dashboard'),
    NavItem('fields', 'Field Management', children=(
        NavItem('fields', 'Fields'),
        NavItem('crops', 'Crops'),
    )),
    NavItem('livestock', 'Livestock'),
    NavItem('inventory', 'Inventory', children=(
        NavItem('inputs', 'Inputs'),
        NavItem('products', 'Products'),
        NavItem('harvests', 'Harvests'),
    )),
    NavItem('sales', 'Sales'),
    NavItem('tasks', 'Tasks'),
    NavItem('reports', 'Reports'),
    NavItem('customers', 'Customers'),
    NavItem('marketplace', 'Marketplace'),
    NavItem('my-orders', 'My Orders'),
)


def navigation_for(role):
    """Navigation tree filtered to what `role` can reach, as plain dicts."""
    role = as_role(role)
    if role is None:
        return []

    def render(item):
        if role not in item.roles():
            return None
        node = {'id': item.id, 'label': item.label}
        if item.children:
            node['children'] = [child for child in map(render, item.children) if child]
        return node

    return [node for node in map(render, NAVIGATION) if node]


def accessible_views(role):
    """Set of selectable view ids for `role` (group headers excluded)."""
    views = set()

    def collect(nodes):
        for node in nodes:
            if 'children' in node:
                collect(node['children'])
            else:
                views.add(node['id'])

    collect(navigation_for(role))
    return views
