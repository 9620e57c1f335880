import logging

from rest_framework import viewsets, status, serializers
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter, PolymorphicProxySerializer
from apps.accounts.models import UserRole
from apps.accounts.permissions import IsStudent, IsBusiness
from apps.businesses.models import Business
from .models import Deal
from .serializers import (
    DealSerializer,
    DealListSerializer,
    DealCreateSerializer,
    DealUpdateSerializer,
    DealRedemptionSerializer,
    RedeemRequestSerializer,
    FavoriteStatusSerializer,
    StudentStatisticsSerializer,
    BusinessDashboardSerializer,
)
from .services import (
    create_deal_for_owner,
    get_deal_by_id,
    update_deal,
    delete_deal,
    get_active_deals,
    get_business_deals,
    increment_deal_views,
    search_deals,
    add_favorite,
    remove_favorite,
    toggle_favorite as toggle_favorite_service,
    get_user_favorite_ids,
    get_user_favorites,
    redeem_deal,
    get_user_redemptions,
    get_deal_redemptions,
    get_business_statistics,
    get_student_statistics,
    get_ending_soon_deals,
    DealNotFoundError,
    InvalidDealError,
    InvalidSortError,
    UnauthorizedDealActionError,
    BusinessProfileRequiredError,
)

logger = logging.getLogger(__name__)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class DealPagination(PageNumberPagination):
    """Custom pagination for deals."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _error(message, status_code):
    return Response({'error': str(message)}, status=status_code)


class DealViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Deal operations.

    list: Browse active deals (filters: category, sort, search)
    create: Post a deal (business accounts)
    retrieve: Get a specific deal
    update / partial_update: Edit a deal (owning business)
    destroy: Delete a deal (owning business)
    """

    queryset = Deal.objects.select_related('business')
    serializer_class = DealSerializer
    pagination_class = DealPagination
    lookup_value_regex = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'

    STUDENT_ACTIONS = ('favorite', 'toggle_favorite', 'redeem', 'favorites', 'my_redemptions')
    BUSINESS_ACTIONS = ('create', 'update', 'partial_update', 'destroy', 'redemptions', 'mine')

    def get_permissions(self):
        """Role-gate actions: students save and redeem, businesses publish."""
        if self.action in self.STUDENT_ACTIONS:
            return [IsStudent()]
        if self.action in self.BUSINESS_ACTIONS:
            return [IsBusiness()]
        if self.action == 'dashboard':
            return [IsAuthenticated()]
        return [AllowAny()]

    def get_queryset(self):
        """
        Filter deals based on query parameters.

        Filters (list only):
        - category: Deal category, 'all' for every category
        - sort: newest | popular | ending
        - search: Substring over title, description, business name and discount
        """
        if self.action != 'list':
            return super().get_queryset()

        params = self.request.query_params
        category = params.get('category')
        search = params.get('search')

        if search:
            return search_deals(search=search, category=category)

        try:
            return get_active_deals(category=category, sort_by=params.get('sort', 'newest'))
        except InvalidSortError as e:
            raise ValidationError({'sort': str(e)})

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return DealListSerializer
        if self.action == 'create':
            return DealCreateSerializer
        if self.action in ('update', 'partial_update'):
            return DealUpdateSerializer
        return DealSerializer

    def get_serializer_context(self):
        context = super().get_serializer_context()
        user = self.request.user
        if user.is_authenticated and user.role == UserRole.STUDENT:
            context['favorite_ids'] = set(get_user_favorite_ids(user=user))
        return context

    @extend_schema(
        parameters=[
            OpenApiParameter('category', str, description="Deal category or 'all'"),
            OpenApiParameter('sort', str, description='newest | popular | ending'),
            OpenApiParameter('search', str, description='Search term'),
        ],
        responses={200: DealListSerializer(many=True), 400: ErrorResponseSerializer},
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        request=DealCreateSerializer,
        responses={201: DealSerializer, 400: ErrorResponseSerializer},
    )
    def create(self, request, *args, **kwargs):
        """Post a new deal for the caller's business."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            deal = create_deal_for_owner(owner=request.user, **serializer.validated_data)
        except (InvalidDealError, BusinessProfileRequiredError) as e:
            return _error(e, status.HTTP_400_BAD_REQUEST)

        output_serializer = DealSerializer(deal, context=self.get_serializer_context())
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=DealUpdateSerializer,
        responses={
            200: DealSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
    )
    def update(self, request, *args, **kwargs):
        """Edit a deal. PUT and PATCH both apply only the fields sent."""
        serializer = DealUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            deal = update_deal(
                deal_id=kwargs.get('pk'),
                user=request.user,
                **serializer.validated_data
            )
        except DealNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)
        except UnauthorizedDealActionError as e:
            return _error(e, status.HTTP_403_FORBIDDEN)
        except InvalidDealError as e:
            return _error(e, status.HTTP_400_BAD_REQUEST)

        return Response(DealSerializer(deal, context=self.get_serializer_context()).data)

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    @extend_schema(responses={204: None, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer})
    def destroy(self, request, *args, **kwargs):
        """Delete a deal."""
        try:
            delete_deal(deal_id=kwargs.get('pk'), user=request.user)
        except DealNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)
        except UnauthorizedDealActionError as e:
            return _error(e, status.HTTP_403_FORBIDDEN)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={204: None})
    @action(detail=True, methods=['post'], url_path='view', url_name='view')
    def record_view(self, request, pk=None):
        """Count a view of the deal."""
        increment_deal_views(deal_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        request=None,
        responses={200: FavoriteStatusSerializer, 201: FavoriteStatusSerializer, 404: ErrorResponseSerializer},
    )
    @action(detail=True, methods=['post', 'delete'])
    def favorite(self, request, pk=None):
        """POST saves the deal, DELETE un-saves it. Both are idempotent."""
        if request.method == 'DELETE':
            remove_favorite(user=request.user, deal_id=pk)
            return Response({'deal_id': pk, 'is_favorited': False})

        try:
            _, created = add_favorite(user=request.user, deal_id=pk)
        except DealNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)

        return Response(
            {'deal_id': pk, 'is_favorited': True},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )

    @extend_schema(request=None, responses={200: FavoriteStatusSerializer, 404: ErrorResponseSerializer})
    @action(detail=True, methods=['post'], url_path='favorite/toggle', url_name='favorite-toggle')
    def toggle_favorite(self, request, pk=None):
        """Flip the saved state of the deal."""
        try:
            is_favorited = toggle_favorite_service(user=request.user, deal_id=pk)
        except DealNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)

        return Response({'deal_id': pk, 'is_favorited': is_favorited})

    @extend_schema(
        request=RedeemRequestSerializer,
        responses={201: DealRedemptionSerializer, 404: ErrorResponseSerializer},
    )
    @action(detail=True, methods=['post'])
    def redeem(self, request, pk=None):
        """Record a redemption of the deal."""
        serializer = RedeemRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            redemption = redeem_deal(
                user=request.user,
                deal_id=pk,
                qr_code=serializer.validated_data['qr_code'],
            )
        except DealNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)

        return Response(DealRedemptionSerializer(redemption).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: DealRedemptionSerializer(many=True), 403: ErrorResponseSerializer})
    @action(detail=True, methods=['get'], url_name='redemptions')
    def redemptions(self, request, pk=None):
        """Redemptions of a deal, for the owning business."""
        try:
            deal = get_deal_by_id(deal_id=pk)
        except DealNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)

        if not deal.business.is_owned_by(request.user):
            return _error("You can only view redemptions of your own deals", status.HTTP_403_FORBIDDEN)

        redemptions = get_deal_redemptions(deal_id=deal.id)
        return Response(DealRedemptionSerializer(redemptions, many=True).data)

    @extend_schema(responses={200: DealSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def favorites(self, request):
        """Deals the current student has saved."""
        deals = get_user_favorites(user=request.user)
        page = self.paginate_queryset(deals)
        serializer = DealSerializer(page, many=True, context=self.get_serializer_context())
        return self.get_paginated_response(serializer.data)

    @extend_schema(responses={200: DealRedemptionSerializer(many=True)})
    @action(detail=False, methods=['get'], url_path='redemptions', url_name='my-redemptions')
    def my_redemptions(self, request):
        """The current student's redemption history, newest first."""
        redemptions = get_user_redemptions(user=request.user)
        page = self.paginate_queryset(redemptions)
        serializer = DealRedemptionSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @extend_schema(responses={200: DealSerializer(many=True), 404: ErrorResponseSerializer})
    @action(detail=False, methods=['get'])
    def mine(self, request):
        """All deals of the caller's business, active or not."""
        business = Business.objects.filter(owner=request.user).first()
        if business is None:
            return _error("No business profile found", status.HTTP_404_NOT_FOUND)

        deals = get_business_deals(business_id=business.id)
        return Response(DealSerializer(deals, many=True).data)

    @extend_schema(
        responses={
            200: PolymorphicProxySerializer(
                component_name='Dashboard',
                serializers=[StudentStatisticsSerializer, BusinessDashboardSerializer],
                resource_type_field_name=None,
            ),
            404: ErrorResponseSerializer,
        },
        description="Student or business dashboard statistics depending on the caller's role.",
    )
    @action(detail=False, methods=['get'])
    def dashboard(self, request):
        """Dashboard statistics for the current user."""
        user = request.user

        if user.role == UserRole.STUDENT:
            stats = get_student_statistics(user=user)
            return Response(StudentStatisticsSerializer(stats).data)

        business = Business.objects.filter(owner=user).first()
        if business is None:
            return _error("No business profile found", status.HTTP_404_NOT_FOUND)

        stats = get_business_statistics(business=business)
        ending_soon = get_ending_soon_deals(business=business)
        return Response(BusinessDashboardSerializer({
            'statistics': stats,
            'ending_soon': ending_soon,
        }).data)
