"""
Sales, marketplace and my-orders screens.
"""
from farmhub.core.screens import (
    column, count_by, days_ago, money, number, on_or_after, relation_value, render_rows,
)
from farmhub.inventory.screens import is_expiring_soon


def sale_display(row):
    customer = row.get('customer')
    return {
        'product_name': relation_value(row, 'product', 'name', 'Unknown Product'),
        'product_unit': relation_value(row, 'product', 'unit', 'units'),
        'customer_display': (customer.get('name') if customer else None) or row.get('customer_name') or 'Walk-in',
    }


def sales_screen(context):
    sales = context.store.sales
    recent = [s for s in sales if on_or_after(s.get('sale_date'), days_ago(30))]
    recent_revenue = sum(number(s.get('total_amount')) for s in recent)
    return {
        'title': 'Sales Management',
        'columns': [
            column('sale_date', 'Sale Date'),
            column('product_name', 'Product'),
            column('customer_display', 'Customer'),
            column('quantity', 'Quantity'),
            column('price_per_unit', 'Unit Price'),
            column('total_amount', 'Total'),
            column('payment_method', 'Payment Method'),
            column('payment_status', 'Payment'),
            column('delivery_status', 'Delivery'),
        ],
        'rows': render_rows(sales, sale_display),
        'summary': {
            'total_sales': len(sales),
            'total_revenue': money(sum(number(s.get('total_amount')) for s in sales)),
            'paid_sales': sum(1 for s in sales if s.get('payment_status') == 'paid'),
            'pending_deliveries': sum(1 for s in sales if s.get('delivery_status') == 'pending'),
            'recent_sales': len(recent),
            'recent_revenue': money(recent_revenue),
            'average_sale': money(recent_revenue / len(recent)) if recent else 0.0,
            'payment_methods': count_by(sales, 'payment_method'),
        },
    }


def marketplace_products(products, search='', product_type=''):
    search = (search or '').strip().lower()
    return [
        p for p in products
        if p.get('status') == 'available'
        and number(p.get('quantity_available')) > 0
        and (not search or search in (p.get('name') or '').lower())
        and (not product_type or p.get('type') == product_type)
    ]


def marketplace_screen(context):
    products = context.store.products
    available = marketplace_products(products, context.param('search', ''), context.param('type', ''))
    return {
        'title': 'Marketplace',
        'columns': [
            column('name', 'Product'),
            column('type', 'Type'),
            column('description', 'Description'),
            column('price_per_unit', 'Price'),
            column('quantity_available', 'Available'),
            column('expiry_date', 'Expiry Date'),
        ],
        'rows': render_rows(available, lambda row: {'expiring_soon': is_expiring_soon(row.get('expiry_date'))}),
        'product_types': sorted({p.get('type') for p in products if p.get('type')}),
        'filters': {'search': context.param('search', ''), 'type': context.param('type', '')},
        'customer': {
            'name': context.profile.full_name,
            'phone': context.profile.phone or '',
        },
        'summary': {
            'available_products': len(available),
        },
    }


def orders_for(sales, profile):
    """Sales placed by this customer: matched on full name or phone."""
    return [
        s for s in sales
        if (profile.full_name and s.get('customer_name') == profile.full_name)
        or (profile.phone and s.get('customer_phone') == profile.phone)
    ]


def my_orders_screen(context):
    orders = orders_for(context.store.sales, context.profile)
    return {
        'title': 'My Orders',
        'columns': [
            column('sale_date', 'Order Date'),
            column('product_name', 'Product'),
            column('quantity', 'Quantity'),
            column('price_per_unit', 'Unit Price'),
            column('total_amount', 'Total'),
            column('payment_status', 'Payment'),
            column('delivery_status', 'Delivery'),
        ],
        'rows': render_rows(orders, sale_display),
        'summary': {
            'total_orders': len(orders),
            'total_spent': money(sum(number(o.get('total_amount')) for o in orders)),
            'pending_orders': sum(1 for o in orders if o.get('delivery_status') == 'pending'),
            'completed_orders': sum(1 for o in orders if o.get('delivery_status') in ('delivered', 'picked_up')),
        },
    }
