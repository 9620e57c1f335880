from rest_framework import serializers
from .models import Review
from apps.accounts.models import User
from apps.businesses.models import Business


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class ReviewSerializer(serializers.ModelSerializer):
    """Main review serializer."""

    author = UserMinimalSerializer(read_only=True)
    business = serializers.PrimaryKeyRelatedField(queryset=Business.objects.all())
    business_name = serializers.CharField(source='business.name', read_only=True)

    class Meta:
        model = Review
        fields = [
            'id',
            'business',
            'business_name',
            'author',
            'rating',
            'comment',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'author', 'business_name', 'created_at', 'updated_at']

    def validate_rating(self, value):
        if value < 1 or value > 5:
            raise serializers.ValidationError("Rating must be between 1 and 5")
        return value


class ReviewUpdateSerializer(serializers.ModelSerializer):
    """Serializer for editing a review. Business cannot change."""

    class Meta:
        model = Review
        fields = ['rating', 'comment']
        extra_kwargs = {
            'rating': {'required': False},
            'comment': {'required': False},
        }


class ReviewFilterSerializer(serializers.Serializer):
    """Query parameters accepted by the review list."""

    business = serializers.UUIDField(required=False)
    author = serializers.UUIDField(required=False)
    rating = serializers.IntegerField(required=False, min_value=1, max_value=5)
    min_rating = serializers.IntegerField(required=False, min_value=1, max_value=5)
