import logging

from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from farmhub.core.context import build_context, build_session, get_backend
from farmhub.core.exceptions import AuthenticationError, BackendError, RowNotFound
from farmhub.core.forms import submit_form
from farmhub.core.roles import Action, can, capabilities_for, navigation_for
from farmhub.core.schema import get_entity, jsonable
from .serializers import LoginSerializer, LogoutSerializer, RefreshSerializer

logger = logging.getLogger('farmhub.core')


def backend_error_response(e, message=None):
    if isinstance(e, RowNotFound):
        return Response({'error': 'Not found'}, status=status.HTTP_404_NOT_FOUND)
    return Response({'error': message or 'The data service is unavailable. Please try again.'},
                    status=status.HTTP_502_BAD_GATEWAY)


def forbidden(view_id, action):
    return Response(
        {'error': f"You don't have permission to {action.value} {view_id}."},
        status=status.HTTP_403_FORBIDDEN,
    )


# Auth views
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def login(request):
    """Sign in with a username and password"""
    serializer = LoginSerializer(data=request.data)
    if not serializer.is_valid():
        return Response({'error': 'Please enter both username and password'}, status=status.HTTP_400_BAD_REQUEST)

    session = build_session()
    if not session.login(serializer.validated_data['username'], serializer.validated_data['password']):
        return Response({'error': 'Invalid username or password'}, status=status.HTTP_401_UNAUTHORIZED)

    return Response({
        'access': session.tokens.access,
        'refresh': session.tokens.refresh,
        'user': session.profile.as_dict(),
        'navigation': navigation_for(session.role),
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """Sign out and invalidate the refresh token"""
    serializer = LogoutSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    request.auth.logout(serializer.validated_data.get('refresh') or None)
    return Response(status=status.HTTP_205_RESET_CONTENT)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def refresh_token(request):
    """Exchange a refresh token for a new token pair"""
    serializer = RefreshSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    try:
        tokens = get_backend().refresh(serializer.validated_data['refresh'])
    except AuthenticationError as e:
        logger.warning(f"Token refresh rejected: {e.message}")
        return Response({'detail': 'Token is invalid or expired.'}, status=status.HTTP_401_UNAUTHORIZED)
    except BackendError as e:
        logger.error(f"Token refresh failed: {e.message}", exc_info=True)
        return backend_error_response(e)
    return Response({'access': tokens.access, 'refresh': tokens.refresh})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def user_me(request):
    """Current profile with its navigation and capabilities"""
    profile = request.user
    return Response({
        'user': profile.as_dict(),
        'navigation': navigation_for(profile.role),
        'capabilities': capabilities_for(profile.role),
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def navigation(request):
    return Response(navigation_for(request.user.role))


# Screens
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def app_view(request, view_id):
    """Compose one screen for the signed-in role"""
    context = build_context(request)
    view_id = context.composer.select(view_id)
    if not can(context.session.role, Action.VIEW, view_id):
        return Response(context.composer.render(), status=status.HTTP_403_FORBIDDEN)

    try:
        context.store.load_all()
    except BackendError as e:
        return backend_error_response(e, 'Failed to load farm data. Please try again.')
    return Response(context.composer.render(request.query_params.dict()))


# Entity views, routed per app with a `kind` kwarg
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def entity_list_create(request, kind):
    """List all rows of a kind or create one"""
    entity = get_entity(kind)
    context = build_context(request)
    role = context.session.role

    if request.method == 'GET':
        if not can(role, Action.VIEW, entity.name):
            return forbidden(entity.name, Action.VIEW)
        try:
            rows = context.store.load(entity.name)
        except BackendError as e:
            logger.error(f"Error listing {entity.name}: {e.message}", exc_info=True)
            return backend_error_response(e)
        return Response(jsonable(rows))

    if not can(role, Action.MODIFY, entity.name):
        logger.warning(f"User '{request.user.username}' denied creating {entity.label}")
        return forbidden(entity.name, Action.MODIFY)
    result = submit_form(entity.name, request.data, context.store)
    if not result.ok:
        if result.backend_error is not None:
            return backend_error_response(result.backend_error, result.errors['general'])
        return Response(result.errors, status=status.HTTP_400_BAD_REQUEST)
    return Response(jsonable(result.row), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def entity_detail(request, kind, pk):
    """Retrieve, update or delete one row"""
    entity = get_entity(kind)
    context = build_context(request)
    role = context.session.role

    if request.method == 'GET':
        if not can(role, Action.VIEW, entity.name):
            return forbidden(entity.name, Action.VIEW)
        try:
            row = context.store.fetch_one(entity.name, pk)
        except BackendError as e:
            return backend_error_response(e)
        return Response(jsonable(row))

    if not can(role, Action.MODIFY, entity.name):
        logger.warning(f"User '{request.user.username}' denied changing {entity.label} {pk}")
        return forbidden(entity.name, Action.MODIFY)

    if request.method == 'DELETE':
        try:
            context.store.delete(entity.name, pk)
        except BackendError as e:
            logger.error(f"Error deleting {entity.label} {pk}: {e.message}", exc_info=True)
            return backend_error_response(e, f'Failed to delete {entity.label}. Please try again.')
        return Response(status=status.HTTP_204_NO_CONTENT)

    result = submit_form(entity.name, request.data, context.store, instance_id=pk,
                         partial=request.method == 'PATCH')
    if not result.ok:
        if result.backend_error is not None:
            return backend_error_response(result.backend_error, result.errors['general'])
        return Response(result.errors, status=status.HTTP_400_BAD_REQUEST)
    return Response(jsonable(result.row))


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health(request):
    return Response({'status': 'ok', 'backend': get_backend().name})
