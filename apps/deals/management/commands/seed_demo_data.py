"""
Management command to populate the database with demo businesses and deals.

Usage:
    python manage.py seed_demo_data [--clear]

This creates:
- 6 business accounts, each with a business profile
- 11 deals valid from today
- 1 student account

Businesses that already exist are left alone, so the command can be re-run.
"""

from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.accounts.services import register_business, register_student
from apps.businesses.services import create_business
from apps.deals.services import create_deal

DEMO_PASSWORD = 'password123'
DEMO_EMAIL_TEMPLATE = 'demo-business-{}@example.com'
DEMO_STUDENT_EMAIL = 'demo.student' + settings.STUDENT_EMAIL_DOMAIN

DEMO_BUSINESSES = [
    {
        'name': 'Arbutus Pizza & Subs',
        'description': 'Family-owned pizza place serving Italian-style pizzas, subs, and wings. Open late for study sessions.',
        'category': 'food',
        'address': '1234 Sulphur Spring Rd, Arbutus, MD 21227',
        'phone': '(410) 555-0101',
        'website': 'https://example.com/arbutus-pizza',
    },
    {
        'name': 'Campus Corner Coffee',
        'description': 'Local coffee shop with artisanal coffee, pastries, and a quiet study room. Free WiFi.',
        'category': 'food',
        'address': '5678 Wilkens Ave, Arbutus, MD 21227',
        'phone': '(410) 555-0102',
        'website': 'https://example.com/campus-corner',
    },
    {
        'name': 'Retriever Gym & Fitness',
        'description': 'Full-service gym with student rates. Equipment, classes, and personal training.',
        'category': 'health',
        'address': '9012 Route 1, Arbutus, MD 21227',
        'phone': '(410) 555-0103',
        'website': 'https://example.com/retriever-gym',
    },
    {
        'name': 'Arbutus Bookstore',
        'description': 'Independent bookstore with textbooks, novels, and school supplies.',
        'category': 'retail',
        'address': '3456 Maiden Choice Ln, Arbutus, MD 21227',
        'phone': '(410) 555-0104',
        'website': 'https://example.com/arbutus-books',
    },
    {
        'name': 'Quick Cuts Hair Salon',
        'description': 'Hair salon with student pricing. Walk-ins welcome.',
        'category': 'services',
        'address': '7890 Washington Blvd, Arbutus, MD 21227',
        'phone': '(410) 555-0105',
        'website': 'https://example.com/quick-cuts',
    },
    {
        'name': 'Billiards & Games',
        'description': 'Pool hall and arcade. Student nights every Thursday.',
        'category': 'entertainment',
        'address': '2345 Sulphur Spring Rd, Arbutus, MD 21227',
        'phone': '(410) 555-0106',
        'website': 'https://example.com/billiards-games',
    },
]

# (business index, title, discount, category, days valid, description, terms)
DEMO_DEALS = [
    (0, '20% Off Large Pizzas', '20% Off', 'food', 30,
     'Get 20% off any large pizza with your student ID. Dine-in or takeout.',
     'Valid Monday-Thursday only. Cannot be combined with other offers.'),
    (0, 'Buy 1 Get 1 Free Wings', 'Buy 1 Get 1 Free', 'food', 14,
     'Buy any order of wings and get a second order of equal or lesser value free.',
     'Orders of 10 wings or more. Dine-in only.'),
    (1, '$2 Off Any Coffee Drink', '$2 Off', 'food', 60,
     'Get $2 off any coffee, latte, cappuccino, or espresso drink.',
     'One per customer per day.'),
    (1, 'Free Pastry with Coffee', 'Free Pastry', 'food', 7,
     'Buy any coffee and get a free pastry of your choice.',
     'Valid Monday-Friday 7am-10am while supplies last.'),
    (2, '50% Off First Month', '50% Off', 'health', 45,
     'New members get 50% off their first month with full access to the facilities.',
     'New members only.'),
    (2, 'Free Personal Training Session', 'Free Session', 'health', 21,
     'A free one-on-one training session with a 3-month membership.',
     'One per person.'),
    (3, '15% Off All Textbooks', '15% Off', 'retail', 90,
     'Save 15% on all textbooks with your student ID.',
     'New textbooks only.'),
    (3, 'Buy 2 Get 1 Free School Supplies', 'Buy 2 Get 1 Free', 'retail', 20,
     'Buy any two school supply items and get a third of equal or lesser value free.',
     'Notebooks, pens, folders, and binders.'),
    (4, 'Student Discount - $5 Off', '$5 Off', 'services', 30,
     'Get $5 off any haircut or style with your student ID.',
     'Walk-ins subject to availability.'),
    (5, '50% Off Game Time on Thursdays', '50% Off', 'entertainment', 90,
     'Half price pool tables and arcade games every Thursday night.',
     'Valid Thursday 5pm-11pm.'),
    (5, 'Free Appetizer with Drink Purchase', 'Free App', 'entertainment', 14,
     'Buy any drink and get a free appetizer from the menu.',
     'One per customer.'),
]


class Command(BaseCommand):
    help = 'Create demo businesses and deals'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Remove previously seeded demo accounts (and their data) first',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing demo data...')
            self.clear_data()

        self.stdout.write('Creating demo data...')

        businesses = self.create_businesses()
        deal_count = self.create_deals(businesses)
        self.create_student()

        self.stdout.write(self.style.SUCCESS(
            f'Added {len(businesses)} businesses and {deal_count} deals!'
        ))
        self.stdout.write('')
        self.stdout.write('Demo accounts:')
        self.stdout.write(f'  {DEMO_EMAIL_TEMPLATE.format(1)} ... {DEMO_EMAIL_TEMPLATE.format(len(DEMO_BUSINESSES))} / {DEMO_PASSWORD}')
        self.stdout.write(f'  {DEMO_STUDENT_EMAIL} / {DEMO_PASSWORD}')

    def clear_data(self):
        """Delete demo accounts; businesses, deals and reviews cascade."""
        emails = [DEMO_EMAIL_TEMPLATE.format(i) for i in range(1, len(DEMO_BUSINESSES) + 1)]
        emails.append(DEMO_STUDENT_EMAIL)
        User.objects.filter(email__in=emails).delete()

    def create_businesses(self):
        """Create one business account and profile per demo business."""
        created = []
        for index, data in enumerate(DEMO_BUSINESSES, start=1):
            email = DEMO_EMAIL_TEMPLATE.format(index)
            if User.objects.filter(email=email).exists():
                self.stdout.write(f'  Skipping {data["name"]} (already seeded)')
                continue

            owner = register_business(email=email, password=DEMO_PASSWORD, name=data['name'])
            business = create_business(owner=owner, **data)
            created.append((index - 1, business))
            self.stdout.write(f'  Created business: {business.name}')

        return created

    def create_deals(self, businesses):
        """Create the demo deals of the newly created businesses."""
        by_index = dict(businesses)
        now = timezone.now()
        count = 0

        for index, title, discount, category, days, description, terms in DEMO_DEALS:
            business = by_index.get(index)
            if business is None:
                continue

            create_deal(
                business=business,
                title=title,
                description=description,
                discount=discount,
                category=category,
                start_date=now,
                end_date=now + timedelta(days=days),
                terms=terms,
            )
            count += 1

        return count

    def create_student(self):
        if User.objects.filter(email=DEMO_STUDENT_EMAIL).exists():
            return
        register_student(email=DEMO_STUDENT_EMAIL, password=DEMO_PASSWORD, name='Demo Student')
