from rest_framework import status, viewsets, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError, PermissionDenied, NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.accounts.permissions import IsStudentOrReadOnly
from .models import Review
from .serializers import ReviewSerializer, ReviewUpdateSerializer, ReviewFilterSerializer
from .permissions import IsReviewAuthorOrReadOnly
from .services import (
    create_review,
    update_review,
    delete_review,
    get_user_review,
    get_user_reviews,
    ReviewNotFoundError,
    DuplicateReviewError,
    InvalidRatingError,
    BusinessNotFoundError,
    UnauthorizedReviewActionError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class ReviewPagination(PageNumberPagination):
    """Custom pagination for reviews."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ReviewViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Review CRUD operations.

    list: Get all reviews (with filters)
    create: Review a business (students, one review per business)
    retrieve: Get a specific review
    update: Update a review (author only)
    partial_update: Partially update a review (author only)
    destroy: Delete a review (author only)

    Every write recomputes the business rating.
    """

    queryset = Review.objects.select_related('author', 'business')
    serializer_class = ReviewSerializer
    permission_classes = [IsStudentOrReadOnly, IsReviewAuthorOrReadOnly]
    pagination_class = ReviewPagination

    def get_queryset(self):
        """
        Filter reviews based on query parameters.

        Filters:
        - business: UUID of business
        - author: UUID of author
        - rating: Exact rating (1-5)
        - min_rating: Minimum rating
        """
        queryset = super().get_queryset()

        params = {key: value for key, value in self.request.query_params.items() if value}
        filters = ReviewFilterSerializer(data=params)
        filters.is_valid(raise_exception=True)
        data = filters.validated_data

        if 'business' in data:
            queryset = queryset.filter(business_id=data['business'])

        if 'author' in data:
            queryset = queryset.filter(author_id=data['author'])

        if 'rating' in data:
            queryset = queryset.filter(rating=data['rating'])

        if 'min_rating' in data:
            queryset = queryset.filter(rating__gte=data['min_rating'])

        return queryset.order_by('-created_at')

    def get_serializer_class(self):
        """Use a restricted serializer for edits."""
        if self.action in ('update', 'partial_update'):
            return ReviewUpdateSerializer
        return ReviewSerializer

    def perform_create(self, serializer):
        """Create review using service layer."""
        try:
            review = create_review(
                author=self.request.user,
                business_id=serializer.validated_data['business'].id,
                rating=serializer.validated_data['rating'],
                comment=serializer.validated_data.get('comment', ''),
            )
        except UnauthorizedReviewActionError as e:
            raise PermissionDenied(str(e))
        except (DuplicateReviewError, BusinessNotFoundError, InvalidRatingError) as e:
            raise ValidationError(str(e))

        serializer.instance = review

    def update(self, request, *args, **kwargs):
        """Update review, then respond with the full review."""
        super().update(request, *args, **kwargs)
        review = Review.objects.select_related('author', 'business').get(id=kwargs.get('pk'))
        return Response(ReviewSerializer(review).data)

    def perform_update(self, serializer):
        """Update review using service layer."""
        try:
            review = update_review(
                review_id=serializer.instance.id,
                user=self.request.user,
                rating=serializer.validated_data.get('rating'),
                comment=serializer.validated_data.get('comment'),
            )
        except ReviewNotFoundError as e:
            raise NotFound(str(e))
        except UnauthorizedReviewActionError as e:
            raise PermissionDenied(str(e))
        except InvalidRatingError as e:
            raise ValidationError(str(e))

        serializer.instance = review

    def perform_destroy(self, instance):
        """Delete review using service layer."""
        try:
            delete_review(review_id=instance.id, user=self.request.user)
        except ReviewNotFoundError as e:
            raise NotFound(str(e))
        except UnauthorizedReviewActionError as e:
            raise PermissionDenied(str(e))

    @action(detail=False, methods=['get'], permission_classes=[IsAuthenticated])
    def my_reviews(self, request):
        """Get current user's reviews."""
        reviews = get_user_reviews(user=request.user)
        page = self.paginate_queryset(reviews)

        if page is not None:
            serializer = ReviewSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        serializer = ReviewSerializer(reviews, many=True)
        return Response(serializer.data)

    @extend_schema(
        parameters=[
            OpenApiParameter('business', OpenApiTypes.UUID, required=True, description='Business UUID'),
        ],
        responses={200: ReviewSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        description="Get the current user's review of a business.",
    )
    @action(detail=False, methods=['get'], permission_classes=[IsAuthenticated])
    def mine(self, request):
        """Get the current user's review of one business."""
        business_id = request.query_params.get('business')
        if not business_id:
            return Response(
                {'error': 'business is required'},
                status=status.HTTP_400_BAD_REQUEST
            )

        review = get_user_review(business_id=business_id, user=request.user)
        if review is None:
            return Response(
                {'error': 'You have not reviewed this business'},
                status=status.HTTP_404_NOT_FOUND
            )

        return Response(ReviewSerializer(review).data)
