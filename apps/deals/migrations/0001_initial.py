# Generated manually for the deals app

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('businesses', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Deal',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField()),
                ('discount', models.CharField(max_length=100)),
                ('category', models.CharField(choices=[('food', 'Food & Dining'), ('retail', 'Retail & Shopping'), ('services', 'Services'), ('entertainment', 'Entertainment'), ('health', 'Health & Fitness'), ('other', 'Other')], max_length=30)),
                ('start_date', models.DateTimeField()),
                ('end_date', models.DateTimeField()),
                ('image', models.URLField(blank=True, max_length=500)),
                ('terms', models.TextField(blank=True)),
                ('is_active', models.BooleanField(default=True)),
                ('redemption_count', models.PositiveIntegerField(default=0)),
                ('view_count', models.PositiveIntegerField(default=0)),
                ('is_seasonal', models.BooleanField(default=False)),
                ('seasonal_tag', models.CharField(blank=True, max_length=100)),
                ('coupon_code', models.CharField(blank=True, max_length=50)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('business', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='deals', to='businesses.business')),
            ],
            options={
                'db_table': 'deals',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['is_active', 'created_at'], name='deals_active_created_idx'),
                    models.Index(fields=['business', 'created_at'], name='deals_business_created_idx'),
                    models.Index(fields=['category'], name='deals_category_idx'),
                    models.Index(fields=['end_date'], name='deals_end_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Favorite',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('deal', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='favorites', to='deals.deal')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='favorites', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'favorites',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'created_at'], name='favorites_user_created_idx'),
                ],
                'unique_together': {('user', 'deal')},
            },
        ),
        migrations.CreateModel(
            name='DealRedemption',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('redeemed_at', models.DateTimeField(auto_now_add=True)),
                ('qr_code', models.CharField(blank=True, max_length=500)),
                ('deal', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='redemptions', to='deals.deal')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='redemptions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'deal_redemptions',
                'ordering': ['-redeemed_at'],
                'indexes': [
                    models.Index(fields=['user', 'redeemed_at'], name='redemptions_user_at_idx'),
                    models.Index(fields=['deal', 'redeemed_at'], name='redemptions_deal_at_idx'),
                ],
            },
        ),
    ]
