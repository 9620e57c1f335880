from decimal import Decimal
from rest_framework import serializers
from .models import Business, BusinessCategory, ExternalReview, ReviewPlatform


class ExternalReviewSerializer(serializers.ModelSerializer):
    """Serializer for external review links."""

    class Meta:
        model = ExternalReview
        fields = [
            'id',
            'platform',
            'platform_name',
            'rating',
            'review_count',
            'review_url',
            'business_place_id',
            'created_at',
        ]
        read_only_fields = fields


class ExternalReviewCreateSerializer(serializers.Serializer):
    """Serializer for attaching an external review link."""

    platform = serializers.ChoiceField(choices=ReviewPlatform.choices)
    platform_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    rating = serializers.DecimalField(max_digits=3, decimal_places=2, min_value=Decimal('0'), max_value=Decimal('5'))
    review_count = serializers.IntegerField(required=False, allow_null=True, min_value=0, default=None)
    review_url = serializers.URLField(required=False, allow_blank=True, default='', max_length=500)
    business_place_id = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')


class BusinessSerializer(serializers.ModelSerializer):
    """Main serializer for business profiles."""

    external_reviews = ExternalReviewSerializer(many=True, read_only=True)

    class Meta:
        model = Business
        fields = [
            'id',
            'owner',
            'name',
            'description',
            'category',
            'address',
            'phone',
            'website',
            'logo',
            'images',
            'rating',
            'review_count',
            'is_active',
            'google_place_id',
            'yelp_business_id',
            'external_reviews',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class BusinessListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for business lists."""

    class Meta:
        model = Business
        fields = [
            'id',
            'name',
            'category',
            'address',
            'logo',
            'rating',
            'review_count',
        ]
        read_only_fields = fields


class BusinessCreateSerializer(serializers.Serializer):
    """Serializer for business setup."""

    name = serializers.CharField(max_length=200)
    description = serializers.CharField()
    category = serializers.ChoiceField(choices=BusinessCategory.choices)
    address = serializers.CharField(max_length=300)
    phone = serializers.CharField(max_length=30)
    website = serializers.URLField(required=False, allow_blank=True, default='', max_length=500)
    logo = serializers.URLField(required=False, allow_blank=True, default='', max_length=500)
    images = serializers.ListField(child=serializers.URLField(max_length=500), required=False, default=list)
    google_place_id = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    yelp_business_id = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')


class BusinessUpdateSerializer(serializers.Serializer):
    """Serializer for editing a business profile. Every field is optional."""

    name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=BusinessCategory.choices, required=False)
    address = serializers.CharField(max_length=300, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    website = serializers.URLField(required=False, allow_blank=True, max_length=500)
    logo = serializers.URLField(required=False, allow_blank=True, max_length=500)
    images = serializers.ListField(child=serializers.URLField(max_length=500), required=False)
    is_active = serializers.BooleanField(required=False)
    google_place_id = serializers.CharField(max_length=200, required=False, allow_blank=True)
    yelp_business_id = serializers.CharField(max_length=200, required=False, allow_blank=True)


class DuplicateCheckRequestSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    address = serializers.CharField(max_length=300, required=False, allow_blank=True, default='')


class DuplicateMatchSerializer(serializers.Serializer):
    business = BusinessListSerializer()
    similarity_score = serializers.IntegerField()
    match_type = serializers.CharField()
