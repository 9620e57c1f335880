from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal
import uuid
import re


class BusinessCategory(models.TextChoices):
    FOOD = 'food', 'Food & Dining'
    RETAIL = 'retail', 'Retail & Shopping'
    SERVICES = 'services', 'Services'
    ENTERTAINMENT = 'entertainment', 'Entertainment'
    HEALTH = 'health', 'Health & Fitness'
    OTHER = 'other', 'Other'


class ReviewPlatform(models.TextChoices):
    GOOGLE = 'google', 'Google'
    YELP = 'yelp', 'Yelp'
    FACEBOOK = 'facebook', 'Facebook'
    TRIPADVISOR = 'tripadvisor', 'TripAdvisor'
    OTHER = 'other', 'Other'


class Business(models.Model):
    """Merchant profile owned by a single business account."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.OneToOneField('accounts.User', on_delete=models.CASCADE, related_name='business')
    name = models.CharField(max_length=200, db_index=True)
    name_normalized = models.CharField(max_length=200, db_index=True, editable=False)
    description = models.TextField()
    category = models.CharField(max_length=30, choices=BusinessCategory.choices, default=BusinessCategory.OTHER)
    address = models.CharField(max_length=300)
    address_normalized = models.CharField(max_length=300, editable=False)
    phone = models.CharField(max_length=30)
    website = models.URLField(blank=True, max_length=500)
    logo = models.URLField(blank=True, max_length=500)
    images = models.JSONField(default=list, blank=True)
    rating = models.DecimalField(
        max_digits=3, decimal_places=2, default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00')), MaxValueValidator(Decimal('5.00'))]
    )
    review_count = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    google_place_id = models.CharField(max_length=200, blank=True)
    yelp_business_id = models.CharField(max_length=200, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'businesses'
        indexes = [
            models.Index(fields=['is_active', 'created_at'], name='businesses_active_created_idx'),
            models.Index(fields=['category'], name='businesses_category_idx'),
            models.Index(fields=['rating'], name='businesses_rating_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        self.name_normalized = self.normalize_string(self.name)
        self.address_normalized = self.normalize_string(self.address)
        super().save(*args, **kwargs)

    @staticmethod
    def normalize_string(text):
        text = (text or '').lower().strip()
        text = re.sub(r'\s+', ' ', text)
        text = re.sub(r'[^\w\s-]', '', text)
        return text

    def is_owned_by(self, user):
        return self.owner_id == getattr(user, 'id', None)


class ExternalReview(models.Model):
    """Link to the business's rating on an outside review platform."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    business = models.ForeignKey(Business, on_delete=models.CASCADE, related_name='external_reviews')
    platform = models.CharField(max_length=20, choices=ReviewPlatform.choices)
    platform_name = models.CharField(max_length=100)
    rating = models.DecimalField(
        max_digits=3, decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00')), MaxValueValidator(Decimal('5.00'))]
    )
    review_count = models.PositiveIntegerField(null=True, blank=True)
    review_url = models.URLField(blank=True, max_length=500)
    business_place_id = models.CharField(max_length=200, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'external_reviews'
        ordering = ['platform', 'created_at']

    def __str__(self):
        return f"{self.business.name} on {self.platform_name} ({self.rating})"
