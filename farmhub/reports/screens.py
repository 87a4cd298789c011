"""
Dashboard and reports screens: aggregates across every collection.
"""
import logging
from collections import defaultdict

from django.utils import timezone

from farmhub.core.roles import Role
from farmhub.core.screens import as_date, days_ago, money, number, on_or_after, relation_value, today
from farmhub.inventory.screens import stock_status
from farmhub.sales.screens import orders_for
from farmhub.tasks.screens import open_tasks_for

logger = logging.getLogger('farmhub.reports')

REPORT_PERIODS = {
    '7': 'Last 7 days',
    '30': 'Last 30 days',
    '90': 'Last 3 months',
    '365': 'Last year',
}
DEFAULT_PERIOD = '30'
TOP_N = 5


def stat(title, value, description):
    return {'title': title, 'value': value, 'description': description}


def greeting(hour):
    if hour < 12:
        return 'Good morning'
    if hour < 17:
        return 'Good afternoon'
    return 'Good evening'


def farm_totals(store):
    since = days_ago(30)
    return {
        'total_fields': len(store.fields),
        'active_crops': sum(1 for c in store.crops if c.get('status') != 'harvested'),
        'healthy_livestock': sum(1 for a in store.livestock if a.get('health_status') == 'healthy'),
        'low_stock_inputs': sum(1 for i in store.inputs if stock_status(i) != 'In Stock'),
        'available_products': sum(1 for p in store.products if p.get('status') == 'available'),
        'pending_tasks': sum(1 for t in store.tasks if t.get('status') in ('pending', 'in-progress')),
        'recent_sales': sum(1 for s in store.sales if on_or_after(s.get('sale_date'), since)),
        'total_revenue': money(sum(number(s.get('total_amount')) for s in store.sales)),
    }


def dashboard_stats(role, profile, store):
    totals = farm_totals(store)
    revenue = f"K{totals['total_revenue']:,.2f}"
    if role == Role.ADMIN:
        return [
            stat('Total Fields', totals['total_fields'], 'Managed fields'),
            stat('Active Crops', totals['active_crops'], 'Currently growing'),
            stat('Healthy Livestock', totals['healthy_livestock'], 'In good health'),
            stat('Low Stock Alerts', totals['low_stock_inputs'], 'Need restocking'),
            stat('Available Products', totals['available_products'], 'Ready for sale'),
            stat('Total Revenue', revenue, 'All-time sales'),
            stat('Recent Sales', totals['recent_sales'], 'Last 30 days'),
            stat('Pending Tasks', totals['pending_tasks'], 'Need attention'),
        ]
    if role == Role.MANAGER:
        return [
            stat('Active Operations', totals['active_crops'] + totals['healthy_livestock'], 'Crops + Livestock'),
            stat('Task Management', totals['pending_tasks'], 'Pending tasks'),
            stat('Production Value', revenue, 'Total sales'),
            stat('Input Alerts', totals['low_stock_inputs'], 'Low stock items'),
            stat('Available Products', totals['available_products'], 'Ready to sell'),
        ]
    if role == Role.STAFF:
        return [
            stat('My Tasks', len(open_tasks_for(store.tasks, profile.id)), 'Assigned to me'),
            stat('Active Crops', totals['active_crops'], 'Currently growing'),
            stat('Livestock Care', totals['healthy_livestock'], 'Animals in care'),
            stat('Input Usage', sum(1 for i in store.inputs if number(i.get('quantity_in_stock')) > 0), 'Available inputs'),
        ]
    return [
        stat('Available Products', totals['available_products'], 'Ready to purchase'),
        stat('My Orders', len(orders_for(store.sales, profile)), 'Total purchases'),
        stat('Recent Sales', totals['recent_sales'], 'Last 30 days'),
        stat('Product Types', len({p.get('type') for p in store.products if p.get('type')}), 'Categories available'),
    ]


def recent_activity(tasks, limit=5):
    return [
        {
            'id': str(t['id']),
            'title': t.get('title'),
            'status': t.get('status'),
            'priority': t.get('priority'),
            'assigned_to_name': relation_value(t, 'assigned_to_profile', 'full_name', 'Unassigned'),
        }
        for t in tasks[:limit]
    ]


def dashboard_screen(context):
    role = context.role
    profile = context.profile
    store = context.store
    now = timezone.localtime()
    return {
        'title': f'{role.value.capitalize()} Dashboard',
        'greeting': f'{greeting(now.hour)}, {profile.full_name}!',
        'date': today().strftime('%d/%m/%Y'),
        'columns': [],
        'rows': [],
        'stats': dashboard_stats(role, profile, store),
        'recent_activity': recent_activity(store.tasks) if role != Role.CUSTOMER else [],
        'summary': farm_totals(store),
    }


def period_days(value):
    value = str(value or DEFAULT_PERIOD)
    if value not in REPORT_PERIODS:
        logger.debug(f"Unknown report period '{value}', using {DEFAULT_PERIOD}")
        value = DEFAULT_PERIOD
    return value, int(value)


def top_products(sales):
    performance = defaultdict(lambda: {'quantity': 0.0, 'revenue': 0.0, 'count': 0})
    for sale in sales:
        entry = performance[relation_value(sale, 'product', 'name', 'Unknown')]
        entry['quantity'] += number(sale.get('quantity'))
        entry['revenue'] += number(sale.get('total_amount'))
        entry['count'] += 1
    ranked = sorted(performance.items(), key=lambda item: item[1]['revenue'], reverse=True)[:TOP_N]
    return [{'name': name, **{k: round(v, 2) for k, v in stats.items()}} for name, stats in ranked]


def top_crops(harvests):
    performance = defaultdict(lambda: {'quantity': 0.0, 'count': 0})
    for harvest in harvests:
        entry = performance[relation_value(harvest, 'crop', 'name', 'Unknown')]
        entry['quantity'] += number(harvest.get('quantity'))
        entry['count'] += 1
    ranked = sorted(performance.items(), key=lambda item: item[1]['quantity'], reverse=True)[:TOP_N]
    return [{'name': name, **{k: round(v, 2) for k, v in stats.items()}} for name, stats in ranked]


def payment_distribution(sales):
    counts = defaultdict(int)
    for sale in sales:
        counts[sale.get('payment_method')] += 1
    return [
        {'method': method, 'count': count, 'percentage': round(count / len(sales) * 100, 1)}
        for method, count in counts.items()
    ]


def in_period(value, since):
    """On or after `since` and not in the future."""
    parsed = as_date(value)
    return parsed is not None and since <= parsed <= today()


def reports_screen(context):
    store = context.store
    period, days = period_days(context.param('period'))
    since = days_ago(days)

    sales = [s for s in store.sales if in_period(s.get('sale_date'), since)]
    harvests = [h for h in store.harvests if in_period(h.get('harvest_date'), since)]
    tasks = [t for t in store.tasks if in_period(t.get('created_at'), since)]
    revenue = sum(number(s.get('total_amount')) for s in sales)

    return {
        'title': 'Reports & Analytics',
        'period': period,
        'periods': [{'value': value, 'label': label} for value, label in REPORT_PERIODS.items()],
        'columns': [],
        'rows': [],
        'summary': {
            'total_revenue': money(revenue),
            'sales_count': len(sales),
            'harvest_quantity': round(sum(number(h.get('quantity')) for h in harvests), 2),
            'harvest_count': len(harvests),
            'completed_tasks': sum(1 for t in tasks if t.get('status') == 'completed'),
            'total_tasks': len(tasks),
            'average_sale_value': money(revenue / len(sales)) if sales else 0.0,
        },
        'top_products': top_products(sales),
        'top_crops': top_crops(harvests),
        'payment_methods': payment_distribution(sales),
        'farm_overview': {
            'total_fields': len(store.fields),
            'active_crops': sum(1 for c in store.crops if c.get('status') != 'harvested'),
            'total_livestock': len(store.livestock),
            'available_products': sum(1 for p in store.products if p.get('status') == 'available'),
            'total_acreage': round(sum(number(f.get('size')) for f in store.fields), 1),
        },
    }
