# Generated manually for the businesses app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Business',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(db_index=True, max_length=200)),
                ('name_normalized', models.CharField(db_index=True, editable=False, max_length=200)),
                ('description', models.TextField()),
                ('category', models.CharField(choices=[('food', 'Food & Dining'), ('retail', 'Retail & Shopping'), ('services', 'Services'), ('entertainment', 'Entertainment'), ('health', 'Health & Fitness'), ('other', 'Other')], default='other', max_length=30)),
                ('address', models.CharField(max_length=300)),
                ('address_normalized', models.CharField(editable=False, max_length=300)),
                ('phone', models.CharField(max_length=30)),
                ('website', models.URLField(blank=True, max_length=500)),
                ('logo', models.URLField(blank=True, max_length=500)),
                ('images', models.JSONField(blank=True, default=list)),
                ('rating', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=3, validators=[MinValueValidator(Decimal('0.00')), MaxValueValidator(Decimal('5.00'))])),
                ('review_count', models.PositiveIntegerField(default=0)),
                ('is_active', models.BooleanField(default=True)),
                ('google_place_id', models.CharField(blank=True, max_length=200)),
                ('yelp_business_id', models.CharField(blank=True, max_length=200)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='business', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'businesses',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['is_active', 'created_at'], name='businesses_active_created_idx'),
                    models.Index(fields=['category'], name='businesses_category_idx'),
                    models.Index(fields=['rating'], name='businesses_rating_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ExternalReview',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('platform', models.CharField(choices=[('google', 'Google'), ('yelp', 'Yelp'), ('facebook', 'Facebook'), ('tripadvisor', 'TripAdvisor'), ('other', 'Other')], max_length=20)),
                ('platform_name', models.CharField(max_length=100)),
                ('rating', models.DecimalField(decimal_places=2, max_digits=3, validators=[MinValueValidator(Decimal('0.00')), MaxValueValidator(Decimal('5.00'))])),
                ('review_count', models.PositiveIntegerField(blank=True, null=True)),
                ('review_url', models.URLField(blank=True, max_length=500)),
                ('business_place_id', models.CharField(blank=True, max_length=200)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('business', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='external_reviews', to='businesses.business')),
            ],
            options={
                'db_table': 'external_reviews',
                'ordering': ['platform', 'created_at'],
            },
        ),
    ]
