import logging

from rest_framework import viewsets, mixins, status, serializers
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from apps.accounts.permissions import IsBusiness
from apps.deals.serializers import DealSerializer, DealListSerializer, BusinessStatisticsSerializer
from apps.deals.services import (
    get_business_deals,
    get_business_statistics,
    get_ending_soon_deals,
)
from apps.reviews.serializers import ReviewSerializer
from apps.reviews.services import get_business_reviews
from .models import Business
from .serializers import (
    BusinessSerializer,
    BusinessListSerializer,
    BusinessCreateSerializer,
    BusinessUpdateSerializer,
    ExternalReviewSerializer,
    ExternalReviewCreateSerializer,
    DuplicateCheckRequestSerializer,
    DuplicateMatchSerializer,
)
from .services import (
    create_business,
    get_business_by_id,
    get_business_for_owner,
    get_all_businesses,
    update_business,
    search_businesses,
    find_potential_duplicates,
    add_external_review,
    remove_external_review,
    BusinessNotFoundError,
    BusinessAlreadyExistsError,
    DuplicateBusinessError,
    InvalidBusinessDataError,
    UnauthorizedBusinessActionError,
    ExternalReviewNotFoundError,
)

logger = logging.getLogger(__name__)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class BusinessPagination(PageNumberPagination):
    """Custom pagination for businesses."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _error(message, status_code):
    return Response({'error': str(message)}, status=status_code)


class BusinessViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for Business profiles.

    list: Browse active businesses (filters: category, search)
    create: Set up the caller's business profile (business accounts)
    retrieve: Get a business with its external review links
    update / partial_update: Edit the business profile (owner)

    Businesses are never deleted through the API; owners deactivate them.
    """

    queryset = Business.objects.filter(is_active=True).prefetch_related('external_reviews')
    serializer_class = BusinessSerializer
    pagination_class = BusinessPagination
    lookup_value_regex = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'

    BUSINESS_ACTIONS = (
        'create', 'update', 'partial_update', 'mine',
        'statistics', 'external_reviews', 'check_duplicates',
    )

    def get_permissions(self):
        if self.action in self.BUSINESS_ACTIONS:
            return [IsBusiness()]
        return [AllowAny()]

    def get_queryset(self):
        """
        Filter businesses based on query parameters.

        Filters (list only):
        - category: Business category, 'all' for every category
        - search: Substring over name, description, category and address
        """
        if self.action != 'list':
            return super().get_queryset()

        search = self.request.query_params.get('search')
        if search:
            return search_businesses(search=search)

        return get_all_businesses(category=self.request.query_params.get('category'))

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action in ('list', 'search'):
            return BusinessListSerializer
        if self.action == 'create':
            return BusinessCreateSerializer
        if self.action in ('update', 'partial_update'):
            return BusinessUpdateSerializer
        return BusinessSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter('category', str, description="Business category or 'all'"),
            OpenApiParameter('search', str, description='Search term'),
        ],
        responses={200: BusinessListSerializer(many=True)},
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def retrieve(self, request, *args, **kwargs):
        """Get a business. Owners can also see their inactive profile."""
        try:
            business = get_business_by_id(business_id=kwargs.get('pk'), include_inactive=True)
        except BusinessNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)

        if not business.is_active and not business.is_owned_by(request.user):
            return _error("Business not found", status.HTTP_404_NOT_FOUND)

        return Response(BusinessSerializer(business).data)

    @extend_schema(
        request=BusinessCreateSerializer,
        responses={201: BusinessSerializer, 400: ErrorResponseSerializer},
    )
    def create(self, request, *args, **kwargs):
        """Create the caller's business profile."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            business = create_business(owner=request.user, **serializer.validated_data)
        except (
            BusinessAlreadyExistsError,
            DuplicateBusinessError,
            InvalidBusinessDataError,
            UnauthorizedBusinessActionError,
        ) as e:
            return _error(e, status.HTTP_400_BAD_REQUEST)

        return Response(BusinessSerializer(business).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=BusinessUpdateSerializer,
        responses={
            200: BusinessSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
    )
    def update(self, request, *args, **kwargs):
        """Edit a business profile. PUT and PATCH both apply only the fields sent."""
        serializer = BusinessUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            business = update_business(
                business_id=kwargs.get('pk'),
                user=request.user,
                **serializer.validated_data
            )
        except BusinessNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)
        except UnauthorizedBusinessActionError as e:
            return _error(e, status.HTTP_403_FORBIDDEN)
        except InvalidBusinessDataError as e:
            return _error(e, status.HTTP_400_BAD_REQUEST)

        return Response(BusinessSerializer(business).data)

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    @extend_schema(responses={200: BusinessSerializer, 404: ErrorResponseSerializer})
    @action(detail=False, methods=['get'])
    def mine(self, request):
        """The caller's own business profile, active or not."""
        try:
            business = get_business_for_owner(owner=request.user)
        except BusinessNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)

        return Response(BusinessSerializer(business).data)

    @extend_schema(
        parameters=[OpenApiParameter('q', str, description='Search term')],
        responses={200: BusinessListSerializer(many=True)},
    )
    @action(detail=False, methods=['get'])
    def search(self, request):
        """Search active businesses."""
        businesses = search_businesses(search=request.query_params.get('q', ''))
        page = self.paginate_queryset(businesses)
        serializer = BusinessListSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @extend_schema(responses={200: DealSerializer(many=True), 404: ErrorResponseSerializer})
    @action(detail=True, methods=['get'])
    def deals(self, request, pk=None):
        """Deals of a business. The owner also sees inactive deals."""
        try:
            business = get_business_by_id(business_id=pk, include_inactive=True)
        except BusinessNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)

        deals = get_business_deals(business_id=business.id)
        if not business.is_owned_by(request.user):
            if not business.is_active:
                return _error("Business not found", status.HTTP_404_NOT_FOUND)
            deals = deals.filter(is_active=True)

        return Response(DealSerializer(deals, many=True).data)

    @extend_schema(responses={200: ReviewSerializer(many=True), 404: ErrorResponseSerializer})
    @action(detail=True, methods=['get'])
    def reviews(self, request, pk=None):
        """Reviews of a business, newest first."""
        try:
            business = get_business_by_id(business_id=pk)
        except BusinessNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)

        reviews = get_business_reviews(business_id=business.id)
        return Response(ReviewSerializer(reviews, many=True).data)

    @extend_schema(responses={200: BusinessStatisticsSerializer, 403: ErrorResponseSerializer})
    @action(detail=True, methods=['get'])
    def statistics(self, request, pk=None):
        """Dashboard statistics of a business, for its owner."""
        try:
            business = get_business_by_id(business_id=pk, include_inactive=True)
        except BusinessNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)

        if not business.is_owned_by(request.user):
            return _error("You can only view statistics of your own business", status.HTTP_403_FORBIDDEN)

        data = BusinessStatisticsSerializer(get_business_statistics(business=business)).data
        data['ending_soon'] = DealListSerializer(get_ending_soon_deals(business=business), many=True).data
        return Response(data)

    @extend_schema(
        request=ExternalReviewCreateSerializer,
        responses={
            201: ExternalReviewSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
    )
    @action(detail=True, methods=['post'], url_path='external-reviews', url_name='external-reviews')
    def external_reviews(self, request, pk=None):
        """Attach an external review link to the business."""
        serializer = ExternalReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            external_review = add_external_review(
                business_id=pk,
                user=request.user,
                **serializer.validated_data
            )
        except BusinessNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)
        except UnauthorizedBusinessActionError as e:
            return _error(e, status.HTTP_403_FORBIDDEN)
        except InvalidBusinessDataError as e:
            return _error(e, status.HTTP_400_BAD_REQUEST)

        return Response(ExternalReviewSerializer(external_review).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=DuplicateCheckRequestSerializer,
        responses={200: DuplicateMatchSerializer(many=True)},
        description="List existing businesses that look like the one being set up.",
    )
    @action(detail=False, methods=['post'], url_path='check-duplicates', url_name='check-duplicates')
    def check_duplicates(self, request):
        """Fuzzy duplicate check before business setup."""
        serializer = DuplicateCheckRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        matches = find_potential_duplicates(
            name=serializer.validated_data['name'],
            address=serializer.validated_data['address'],
        )
        data = [
            {'business': business, 'similarity_score': score, 'match_type': match_type}
            for business, score, match_type in matches
        ]
        return Response(DuplicateMatchSerializer(data, many=True).data)


@extend_schema(
    request=None,
    responses={
        204: None,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Remove an external review link from the caller's business.",
    tags=['businesses'],
)
@api_view(['DELETE'])
@permission_classes([IsBusiness])
def remove_external_review_link(request, external_review_id):
    """Remove an external review link."""
    try:
        remove_external_review(external_review_id=external_review_id, user=request.user)
    except ExternalReviewNotFoundError as e:
        return _error(e, status.HTTP_404_NOT_FOUND)
    except UnauthorizedBusinessActionError as e:
        return _error(e, status.HTTP_403_FORBIDDEN)

    return Response(status=status.HTTP_204_NO_CONTENT)
