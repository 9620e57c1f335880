from django.db import models
import uuid


class DealCategory(models.TextChoices):
    FOOD = 'food', 'Food & Dining'
    RETAIL = 'retail', 'Retail & Shopping'
    SERVICES = 'services', 'Services'
    ENTERTAINMENT = 'entertainment', 'Entertainment'
    HEALTH = 'health', 'Health & Fitness'
    OTHER = 'other', 'Other'


class DealSort(models.TextChoices):
    NEWEST = 'newest', 'Newest First'
    POPULAR = 'popular', 'Most Popular'
    ENDING = 'ending', 'Ending Soon'


class Deal(models.Model):
    """Time-bounded discount offer published by a business."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    business = models.ForeignKey('businesses.Business', on_delete=models.CASCADE, related_name='deals')
    title = models.CharField(max_length=200)
    description = models.TextField()
    discount = models.CharField(max_length=100)
    category = models.CharField(max_length=30, choices=DealCategory.choices)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    image = models.URLField(blank=True, max_length=500)
    terms = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    redemption_count = models.PositiveIntegerField(default=0)
    view_count = models.PositiveIntegerField(default=0)
    is_seasonal = models.BooleanField(default=False)
    seasonal_tag = models.CharField(max_length=100, blank=True)
    coupon_code = models.CharField(max_length=50, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'deals'
        indexes = [
            models.Index(fields=['is_active', 'created_at'], name='deals_active_created_idx'),
            models.Index(fields=['business', 'created_at'], name='deals_business_created_idx'),
            models.Index(fields=['category'], name='deals_category_idx'),
            models.Index(fields=['end_date'], name='deals_end_date_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.business.name} - {self.title}"

    @property
    def business_name(self):
        return self.business.name


class Favorite(models.Model):
    """A student's saved deal. Existence of the row means 'saved'."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='favorites')
    deal = models.ForeignKey(Deal, on_delete=models.CASCADE, related_name='favorites')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'favorites'
        unique_together = [['user', 'deal']]
        indexes = [
            models.Index(fields=['user', 'created_at'], name='favorites_user_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user.get_display_name()} saved {self.deal.title}"


class DealRedemption(models.Model):
    """Append-only record that a student used a deal. Not unique per user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='redemptions')
    deal = models.ForeignKey(Deal, on_delete=models.CASCADE, related_name='redemptions')
    redeemed_at = models.DateTimeField(auto_now_add=True)
    qr_code = models.CharField(max_length=500, blank=True)

    class Meta:
        db_table = 'deal_redemptions'
        indexes = [
            models.Index(fields=['user', 'redeemed_at'], name='redemptions_user_at_idx'),
            models.Index(fields=['deal', 'redeemed_at'], name='redemptions_deal_at_idx'),
        ]
        ordering = ['-redeemed_at']

    def __str__(self):
        return f"{self.user.get_display_name()} redeemed {self.deal.title}"
