from rest_framework import serializers
from .models import Deal, DealCategory, DealRedemption


class DealSerializer(serializers.ModelSerializer):
    """Main serializer for deals."""

    business_name = serializers.CharField(read_only=True)
    is_favorited = serializers.SerializerMethodField()

    class Meta:
        model = Deal
        fields = [
            'id',
            'business',
            'business_name',
            'title',
            'description',
            'discount',
            'category',
            'start_date',
            'end_date',
            'image',
            'terms',
            'is_active',
            'is_seasonal',
            'seasonal_tag',
            'coupon_code',
            'view_count',
            'redemption_count',
            'is_favorited',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_is_favorited(self, obj):
        """True if the requesting user has saved this deal."""
        favorite_ids = self.context.get('favorite_ids')
        if favorite_ids is None:
            return False
        return obj.id in favorite_ids


class DealListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for deal lists."""

    business_name = serializers.CharField(read_only=True)

    class Meta:
        model = Deal
        fields = [
            'id',
            'business',
            'business_name',
            'title',
            'discount',
            'category',
            'end_date',
            'image',
            'is_seasonal',
            'seasonal_tag',
            'view_count',
            'created_at',
        ]
        read_only_fields = fields


class DealCreateSerializer(serializers.Serializer):
    """Serializer for posting a deal."""

    title = serializers.CharField(max_length=200)
    description = serializers.CharField()
    discount = serializers.CharField(max_length=100)
    category = serializers.ChoiceField(choices=DealCategory.choices)
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField()
    is_active = serializers.BooleanField(required=False, default=True)
    terms = serializers.CharField(required=False, allow_blank=True, default='')
    image = serializers.URLField(required=False, allow_blank=True, default='', max_length=500)
    is_seasonal = serializers.BooleanField(required=False, default=False)
    seasonal_tag = serializers.CharField(required=False, allow_blank=True, default='', max_length=100)
    coupon_code = serializers.CharField(required=False, allow_blank=True, default='', max_length=50)


class DealUpdateSerializer(serializers.Serializer):
    """Serializer for editing a deal. Every field is optional."""

    title = serializers.CharField(max_length=200, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    discount = serializers.CharField(max_length=100, required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=DealCategory.choices, required=False)
    start_date = serializers.DateTimeField(required=False)
    end_date = serializers.DateTimeField(required=False)
    is_active = serializers.BooleanField(required=False)
    terms = serializers.CharField(required=False, allow_blank=True)
    image = serializers.URLField(required=False, allow_blank=True, max_length=500)
    is_seasonal = serializers.BooleanField(required=False)
    seasonal_tag = serializers.CharField(required=False, allow_blank=True, max_length=100)
    coupon_code = serializers.CharField(required=False, allow_blank=True, max_length=50)


class DealRedemptionSerializer(serializers.ModelSerializer):
    """Serializer for redemption records."""

    deal_title = serializers.CharField(source='deal.title', read_only=True)
    business_name = serializers.CharField(source='deal.business.name', read_only=True)

    class Meta:
        model = DealRedemption
        fields = [
            'id',
            'deal',
            'deal_title',
            'business_name',
            'user',
            'redeemed_at',
            'qr_code',
        ]
        read_only_fields = fields


class RedeemRequestSerializer(serializers.Serializer):
    """Optional payload for redeeming a deal."""

    qr_code = serializers.CharField(required=False, allow_blank=True, default='', max_length=500)


class FavoriteStatusSerializer(serializers.Serializer):
    deal_id = serializers.UUIDField()
    is_favorited = serializers.BooleanField()


class BusinessStatisticsSerializer(serializers.Serializer):
    total_deals = serializers.IntegerField()
    active_deals = serializers.IntegerField()
    seasonal_deals = serializers.IntegerField()
    total_views = serializers.IntegerField()
    total_redemptions = serializers.IntegerField()
    conversion_rate = serializers.FloatField()


class StudentStatisticsSerializer(serializers.Serializer):
    saved_count = serializers.IntegerField()
    redeemed_count = serializers.IntegerField()
    active_deals = serializers.IntegerField()
    estimated_savings = serializers.DecimalField(max_digits=10, decimal_places=2)


class BusinessDashboardSerializer(serializers.Serializer):
    statistics = BusinessStatisticsSerializer()
    ending_soon = DealListSerializer(many=True)
