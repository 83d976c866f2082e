"""
Management command to create sample data for trying out the app.

Usage:
    python manage.py create_sample_data

This creates:
- 3 users (admin, alice, bob)
- A mix of active, redeemed and expired coupons for alice and bob
"""

from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.accounts.services import ensure_user_profile
from apps.coupons.models import Coupon


class Command(BaseCommand):
    help = 'Create sample users and coupons'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        self.create_coupons(users)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        self.stdout.write('  alice@example.com / password123')
        self.stdout.write('  bob@example.com / password123')

    def clear_data(self):
        """Clear all data from the database."""
        Coupon.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()
        User.objects.filter(email='admin@example.com').delete()

    def create_users(self):
        self.stdout.write('  Creating users...')

        accounts = [
            ('admin', 'admin@example.com', 'Admin User', 'admin123', True),
            ('alice', 'alice@example.com', 'Alice', 'password123', False),
            ('bob', 'bob@example.com', 'Bob', 'password123', False),
        ]

        users = {}
        for key, email, name, password, is_admin in accounts:
            user, _ = User.objects.get_or_create(
                email=email,
                defaults={
                    'display_name': name,
                    'is_staff': is_admin,
                    'is_superuser': is_admin,
                }
            )
            user.set_password(password)
            user.save()
            ensure_user_profile(user=user)
            users[key] = user

        return users

    def create_coupons(self, users):
        self.stdout.write('  Creating coupons...')

        today = timezone.localdate()
        samples = [
            (users['alice'], 'שופרסל', 100, 'Weekly groceries', today + timedelta(days=30), False),
            (users['alice'], 'BUYME', 200, 'Birthday gift card', None, False),
            (users['alice'], 'ויקטורי', 50, '', today - timedelta(days=3), False),
            (users['alice'], 'Cinema City', 75, 'Two tickets', today + timedelta(days=90), True),
            (users['bob'], 'כללית', 40, 'Pharmacy discount', today + timedelta(days=7), False),
            (users['bob'], 'עובדים בריא', 15, '', None, False),
        ]

        for user, store, amount, description, expiry_date, is_redeemed in samples:
            Coupon.objects.get_or_create(
                user=user,
                store=store,
                amount=amount,
                defaults={
                    'description': description,
                    'expiry_date': expiry_date,
                    'is_redeemed': is_redeemed,
                }
            )
