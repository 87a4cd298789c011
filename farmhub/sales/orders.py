"""
Marketplace orders placed by customers.
"""
import logging
from decimal import Decimal

from django.conf import settings

from farmhub.core.forms import validate_form
from farmhub.core.screens import number, today
from .serializers import sale_total

logger = logging.getLogger('farmhub.sales')


class OrderRejected(Exception):
    """The order cannot be placed; `errors` maps field names to messages."""

    def __init__(self, errors):
        super().__init__('; '.join(errors.values()))
        self.errors = errors


def order_values(product, profile, quantity, customer_name=None, customer_phone=None):
    name = customer_name or profile.full_name
    quantity = Decimal(str(quantity))
    price = Decimal(str(product['price_per_unit']))
    return {
        'product_id': product['id'],
        'customer_id': None,
        'customer_name': name,
        'customer_phone': customer_phone or profile.phone or None,
        'quantity': quantity,
        'price_per_unit': price,
        'total_amount': sale_total(quantity, price),
        'sale_date': today().isoformat(),
        'payment_method': 'pending',
        'payment_status': 'pending',
        'delivery_status': 'pending',
        'notes': f'Order from marketplace by {name}',
    }


def place_order(store, profile, product_id, quantity, customer_name=None, customer_phone=None,
                decrement_stock=None):
    """Record a pending sale for `profile`; returns the new sale row.

    With `decrement_stock` (default FARMHUB_DECREMENT_STOCK_ON_SALE) the sale
    and the product's stock change run in one backend transaction, which
    raises TransactionUnsupported on backends that cannot provide one.
    """
    if decrement_stock is None:
        decrement_stock = getattr(settings, 'FARMHUB_DECREMENT_STOCK_ON_SALE', False)

    product = store.fetch_one('products', product_id)
    available = number(product.get('quantity_available'))
    if product.get('status') != 'available' or available <= 0:
        raise OrderRejected({'product_id': 'This product is no longer available'})
    if number(quantity) > available:
        raise OrderRejected({'quantity': f"Only {available:g} {product.get('unit', '')} available".rstrip()})

    values, errors = validate_form('sales', order_values(product, profile, quantity, customer_name, customer_phone))
    if errors:
        raise OrderRejected(errors)

    if not decrement_stock:
        sale = store.add('sales', dict(values))
    else:
        with store.atomic():
            sale = store.add('sales', dict(values))
            remaining = Decimal(str(product['quantity_available'])) - values['quantity']
            store.update('products', product['id'], {'quantity_available': remaining})

    logger.info(f"Marketplace order {sale['id']} placed by '{profile.username}' "
                f"for {values['quantity']} x {product.get('name')}")
    return sale
