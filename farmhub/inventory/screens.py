"""
Inputs, products and harvests screens.
"""
from farmhub.core.screens import (
    as_date, column, count_by, days_ago, money, number, on_or_after, relation_value, render_rows, today,
)

EXPIRY_WARNING_DAYS = 7


def stock_status(item):
    quantity = number(item.get('quantity_in_stock'))
    if quantity <= 0:
        return 'Out of Stock'
    if quantity <= number(item.get('reorder_level')):
        return 'Low Stock'
    return 'In Stock'


def is_expiring_soon(value):
    """Expiry within the next week (already expired does not count)."""
    expiry = as_date(value)
    if expiry is None:
        return False
    days_left = (expiry - today()).days
    return 0 < days_left <= EXPIRY_WARNING_DAYS


def inputs_screen(context):
    inputs = context.store.inputs
    return {
        'title': 'Input Management',
        'columns': [
            column('name', 'Input Name'),
            column('type', 'Type'),
            column('quantity_in_stock', 'Stock'),
            column('cost_per_unit', 'Cost per Unit'),
            column('reorder_level', 'Reorder Level'),
            column('expiry_date', 'Expiry Date'),
            column('created_at', 'Added'),
        ],
        'rows': render_rows(inputs, lambda row: {'stock_status': stock_status(row)}),
        'summary': {
            'total_inputs': len(inputs),
            'low_stock': sum(1 for i in inputs if number(i.get('quantity_in_stock')) <= number(i.get('reorder_level'))),
            'out_of_stock': sum(1 for i in inputs if number(i.get('quantity_in_stock')) <= 0),
            'total_value': money(sum(
                number(i.get('quantity_in_stock')) * number(i.get('cost_per_unit')) for i in inputs
            )),
        },
    }


def products_screen(context):
    products = context.store.products
    return {
        'title': 'Product Management',
        'columns': [
            column('name', 'Product Name'),
            column('price_per_unit', 'Price'),
            column('quantity_available', 'Available'),
            column('harvest_date', 'Harvest Date'),
            column('expiry_date', 'Expiry Date'),
            column('status', 'Status'),
            column('created_at', 'Added'),
        ],
        'rows': render_rows(products, lambda row: {'expiring_soon': is_expiring_soon(row.get('expiry_date'))}),
        'summary': {
            'total_products': len(products),
            'available': sum(1 for p in products if p.get('status') == 'available'),
            'expiring_soon': sum(1 for p in products if is_expiring_soon(p.get('expiry_date'))),
            'total_value': money(sum(
                number(p.get('quantity_available')) * number(p.get('price_per_unit')) for p in products
            )),
        },
    }


def harvests_screen(context):
    harvests = context.store.harvests
    since = days_ago(30)
    return {
        'title': 'Harvest Management',
        'columns': [
            column('harvest_date', 'Harvest Date'),
            column('crop_name', 'Crop'),
            column('field_name', 'Field'),
            column('quantity', 'Quantity'),
            column('quality', 'Quality'),
            column('storage_location', 'Storage'),
            column('harvested_by_name', 'Harvested By'),
        ],
        'rows': render_rows(harvests, lambda row: {
            'crop_name': relation_value(row, 'crop', 'name', 'Unknown Crop'),
            'field_name': relation_value(row, 'field', 'name', 'Unknown Field'),
            'harvested_by_name': relation_value(row, 'harvested_by_profile', 'full_name', 'Unknown'),
        }),
        'summary': {
            'total_harvests': len(harvests),
            'total_quantity': round(sum(number(h.get('quantity')) for h in harvests), 2),
            'recent_harvests': sum(1 for h in harvests if on_or_after(h.get('harvest_date'), since)),
            'quality_distribution': count_by(harvests, 'quality'),
        },
    }
