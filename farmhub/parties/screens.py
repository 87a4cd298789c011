from farmhub.core.screens import column, money, number, render_rows


def customer_orders(sales):
    """Order count and total spent per customer id."""
    totals = {}
    for sale in sales:
        customer_id = sale.get('customer_id')
        if not customer_id:
            continue
        orders, spent = totals.get(str(customer_id), (0, 0.0))
        totals[str(customer_id)] = (orders + 1, spent + number(sale.get('total_amount')))
    return totals


def customers_screen(context):
    customers = context.store.customers
    totals = customer_orders(context.store.sales)

    def orders(row):
        count, spent = totals.get(str(row['id']), (0, 0.0))
        return {'orders': count, 'total_spent': money(spent)}

    total_value = sum(totals.get(str(c['id']), (0, 0.0))[1] for c in customers)
    return {
        'title': 'Customer Management',
        'columns': [
            column('name', 'Customer Name'),
            column('phone', 'Phone'),
            column('email', 'Email'),
            column('address', 'Address'),
            column('orders', 'Orders'),
            column('total_spent', 'Total Spent'),
            column('created_at', 'Customer Since'),
        ],
        'rows': render_rows(customers, orders),
        'summary': {
            'total_customers': len(customers),
            'customers_with_orders': sum(1 for c in customers if str(c['id']) in totals),
            'total_customer_value': money(total_value),
            'average_customer_value': money(total_value / len(customers)) if customers else 0.0,
        },
    }
