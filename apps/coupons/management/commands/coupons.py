"""
Manage a user's coupons from the shell.

Usage:
    python manage.py coupons --email alice@example.com list --status active
    python manage.py coupons --email alice@example.com add --store BUYME --amount 100
    python manage.py coupons --email alice@example.com redeem --id <uuid>
    python manage.py coupons --email alice@example.com delete --id <uuid>
"""

import uuid
from datetime import date

from django.core.management.base import BaseCommand, CommandError

from apps.accounts.models import User
from apps.coupons.models import MAX_AMOUNT
from apps.coupons.services import (
    CouponCollection,
    STATUS_FILTERS,
    ORDERING_FIELDS,
    DIRECTIONS,
)
from apps.coupons.services.coupon_collection import ERROR, FAILURES


class Command(BaseCommand):
    help = "List, add, redeem or delete a user's coupons"

    def add_arguments(self, parser):
        parser.add_argument('action', choices=['list', 'add', 'redeem', 'delete'])
        parser.add_argument('--email', required=True, help='Owner of the coupons')
        parser.add_argument('--id', dest='coupon_id', help='Coupon id (redeem, delete)')

        # list
        parser.add_argument('--status', choices=STATUS_FILTERS, default='all')
        parser.add_argument('--search')
        parser.add_argument('--ordering', choices=ORDERING_FIELDS, default='created_at')
        parser.add_argument('--direction', choices=DIRECTIONS, default='desc')

        # add
        parser.add_argument('--store')
        parser.add_argument('--amount', type=int)
        parser.add_argument('--description', default='')
        parser.add_argument('--link', default='')
        parser.add_argument('--code', dest='coupon_code', default='')
        parser.add_argument('--expires', dest='expiry_date', type=date.fromisoformat)

    def handle(self, *args, **options):
        try:
            user = User.objects.get(email__iexact=options['email'])
        except User.DoesNotExist:
            raise CommandError(f"No user with email {options['email']}")

        collection = CouponCollection(user, notify=self.notify)
        action = options['action']

        try:
            if action == 'list':
                self.list_coupons(collection, options)
            elif action == 'add':
                self.add_coupon(collection, options)
            else:
                if not options['coupon_id']:
                    raise CommandError(f'--id is required for {action}')
                getattr(collection, action)(self.parse_coupon_id(options['coupon_id']))
        except FAILURES as e:
            raise CommandError(str(e))

    def parse_coupon_id(self, value):
        try:
            return uuid.UUID(str(value))
        except ValueError:
            raise CommandError(f'Not a valid coupon id: {value}')

    def notify(self, level, message):
        if level == ERROR:
            self.stderr.write(self.style.ERROR(message))
        else:
            self.stdout.write(self.style.SUCCESS(message))

    def list_coupons(self, collection, options):
        coupons = collection.load(
            status=options['status'],
            search=options['search'],
            ordering=options['ordering'],
            direction=options['direction'],
        )

        if not coupons:
            self.stdout.write('No coupons.')
            return

        for coupon in coupons:
            expiry = coupon.expiry_date.isoformat() if coupon.expiry_date else '-'
            self.stdout.write(
                f'{coupon.id}  {coupon.store:<20} {coupon.amount:>6}  {expiry:<10}  {coupon.status}'
            )

    def add_coupon(self, collection, options):
        if not options['store'] or options['amount'] is None:
            raise CommandError('--store and --amount are required for add')
        if not 0 <= options['amount'] <= MAX_AMOUNT:
            raise CommandError(f'--amount must be between 0 and {MAX_AMOUNT}')

        coupon = collection.create(
            store=options['store'],
            amount=options['amount'],
            description=options['description'],
            link=options['link'],
            coupon_code=options['coupon_code'],
            expiry_date=options['expiry_date'],
        )
        self.stdout.write(str(coupon.id))
