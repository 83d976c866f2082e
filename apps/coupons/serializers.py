from django.utils import timezone
from rest_framework import serializers
from .models import Coupon, OTHER_OPTION, STORE_OPTIONS, AMOUNT_OPTIONS, MAX_AMOUNT
from .services import STATUS_FILTERS, ORDERING_FIELDS, DIRECTIONS


class CouponSerializer(serializers.ModelSerializer):
    """Main serializer for coupons."""

    status = serializers.CharField(read_only=True)
    is_expired = serializers.BooleanField(read_only=True)
    is_usable = serializers.BooleanField(read_only=True)
    form_values = serializers.SerializerMethodField()

    class Meta:
        model = Coupon
        fields = [
            'id',
            'store',
            'amount',
            'description',
            'link',
            'image_url',
            'coupon_code',
            'expiry_date',
            'is_redeemed',
            'status',
            'is_expired',
            'is_usable',
            'form_values',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_form_values(self, obj):
        """Values as the edit form shows them: unknown presets become "Other"."""
        amount = str(obj.amount)
        store_is_preset = obj.store in STORE_OPTIONS
        amount_is_preset = amount in AMOUNT_OPTIONS

        return {
            'store': obj.store if store_is_preset else OTHER_OPTION,
            'custom_store': '' if store_is_preset else obj.store,
            'amount': amount if amount_is_preset else OTHER_OPTION,
            'custom_amount': '' if amount_is_preset else amount,
        }


class CouponFormSerializer(serializers.Serializer):
    """
    Validates coupon create/edit input.

    "Other" in store or amount means the value comes from custom_store or
    custom_amount. The resolved values replace the form fields in
    validated_data so services receive plain coupon fields.
    """

    store = serializers.CharField(max_length=200)
    custom_store = serializers.CharField(max_length=200, required=False, allow_blank=True)
    amount = serializers.CharField(max_length=20)
    custom_amount = serializers.CharField(max_length=20, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    link = serializers.URLField(max_length=500, required=False, allow_blank=True)
    image_url = serializers.CharField(max_length=500, required=False, allow_blank=True)
    coupon_code = serializers.CharField(max_length=100, required=False, allow_blank=True)
    expiry_date = serializers.DateField(required=False, allow_null=True)
    expected_updated_at = serializers.DateTimeField(required=False, write_only=True)

    def validate_expiry_date(self, value):
        if value is None or value >= timezone.localdate():
            return value

        # Editing a coupon that has already expired keeps its date
        if self.instance is not None and self.instance.expiry_date == value:
            return value

        raise serializers.ValidationError('Expiry date cannot be in the past.')

    def validate(self, attrs):
        errors = {}

        if 'store' in attrs:
            store = attrs['store'].strip()
            if store == OTHER_OPTION:
                store = attrs.get('custom_store', '').strip()
                if not store:
                    errors['custom_store'] = 'Enter a store name.'
            attrs['store'] = store

        if 'amount' in attrs:
            field = 'amount'
            raw = attrs['amount'].strip()
            if raw == OTHER_OPTION:
                field = 'custom_amount'
                raw = attrs.get('custom_amount', '').strip()

            if not raw:
                errors[field] = 'Enter an amount.'
            elif not raw.isdecimal():
                errors[field] = 'Amount must be a whole number of 0 or more.'
            elif int(raw) > MAX_AMOUNT:
                errors[field] = f'Amount cannot be more than {MAX_AMOUNT}.'
            else:
                attrs['amount'] = int(raw)

        if errors:
            raise serializers.ValidationError(errors)

        attrs.pop('custom_store', None)
        attrs.pop('custom_amount', None)
        return attrs


class CouponFilterSerializer(serializers.Serializer):
    """Query parameters accepted by the coupon list."""

    status = serializers.ChoiceField(choices=STATUS_FILTERS, default='all')
    search = serializers.CharField(required=False, allow_blank=True)
    ordering = serializers.ChoiceField(choices=ORDERING_FIELDS, default='created_at')
    direction = serializers.ChoiceField(choices=DIRECTIONS, default='desc')


class ImageUploadSerializer(serializers.Serializer):
    image = serializers.FileField()


class ImageUrlSerializer(serializers.Serializer):
    image_url = serializers.CharField()


class CouponOptionsSerializer(serializers.Serializer):
    stores = serializers.ListField(child=serializers.CharField())
    amounts = serializers.ListField(child=serializers.CharField())
    other = serializers.CharField()
