import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from farmhub.core.context import build_context
from farmhub.core.exceptions import BackendError, RowNotFound, TransactionUnsupported
from farmhub.core.roles import Action, can
from farmhub.core.schema import jsonable
from .orders import OrderRejected, place_order
from .serializers import PlaceOrderSerializer

logger = logging.getLogger('farmhub.sales')


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def marketplace_order(request):
    """Place a marketplace order for the signed-in customer"""
    context = build_context(request)
    if not can(context.session.role, Action.MODIFY, 'marketplace'):
        logger.warning(f"User '{request.user.username}' denied placing a marketplace order")
        return Response({'error': 'Only customers can place marketplace orders'}, status=status.HTTP_403_FORBIDDEN)

    serializer = PlaceOrderSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    data = serializer.validated_data

    try:
        sale = place_order(
            context.store, context.session.profile,
            product_id=data['product_id'],
            quantity=data['quantity'],
            customer_name=data.get('customer_name') or None,
            customer_phone=data.get('customer_phone') or None,
        )
    except OrderRejected as e:
        return Response(e.errors, status=status.HTTP_400_BAD_REQUEST)
    except RowNotFound:
        return Response({'product_id': 'This product is no longer available'}, status=status.HTTP_400_BAD_REQUEST)
    except TransactionUnsupported as e:
        logger.error(f"Marketplace order needs a transaction: {e.message}", exc_info=True)
        return Response({'error': 'Failed to place order. Please try again.'}, status=status.HTTP_501_NOT_IMPLEMENTED)
    except BackendError as e:
        logger.error(f"Error placing order: {e.message}", exc_info=True)
        return Response({'error': 'Failed to place order. Please try again.'}, status=status.HTTP_502_BAD_GATEWAY)

    return Response({
        'sale': jsonable(sale),
        'message': 'Order placed successfully! You will be contacted for payment and delivery details.',
    }, status=status.HTTP_201_CREATED)
