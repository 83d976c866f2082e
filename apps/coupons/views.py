from rest_framework import viewsets, status, serializers
from rest_framework.decorators import action
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter
from .models import Coupon, STORE_OPTIONS, AMOUNT_OPTIONS, OTHER_OPTION
from .permissions import IsCouponOwner
from .serializers import (
    CouponSerializer,
    CouponFormSerializer,
    CouponFilterSerializer,
    ImageUploadSerializer,
    ImageUrlSerializer,
    CouponOptionsSerializer,
)
from .services import (
    get_user_coupons,
    create_coupon,
    update_coupon,
    redeem_coupon,
    delete_coupon,
    upload_coupon_image,
    CouponNotFoundError,
    CouponConflictError,
    ImageTooLargeError,
    InvalidImageError,
    StorageUnavailableError,
)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
    code = serializers.CharField()


def _error(exc, status_code):
    return Response(
        {'error': str(exc), 'code': exc.code},
        status=status_code
    )


@extend_schema_view(
    list=extend_schema(
        parameters=[
            OpenApiParameter('status', str, enum=['all', 'active', 'inactive', 'redeemed', 'expired']),
            OpenApiParameter('search', str),
            OpenApiParameter('ordering', str, enum=['created_at', 'store', 'amount', 'expiry_date']),
            OpenApiParameter('direction', str, enum=['asc', 'desc']),
        ],
        description="List the current user's coupons. Not paginated.",
    ),
    create=extend_schema(
        request=CouponFormSerializer,
        responses={201: CouponSerializer, 400: ErrorResponseSerializer},
    ),
    update=extend_schema(
        request=CouponFormSerializer,
        responses={200: CouponSerializer, 404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
    ),
    partial_update=extend_schema(
        request=CouponFormSerializer,
        responses={200: CouponSerializer, 404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
    ),
)
class CouponViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the current user's coupons.

    list: Get coupons (status filter, search, sort)
    create: Create a coupon
    retrieve: Get a coupon
    update: Update a coupon (optionally guarded by expected_updated_at)
    partial_update: Partially update a coupon
    destroy: Permanently delete a coupon
    """

    serializer_class = CouponSerializer
    permission_classes = [IsAuthenticated, IsCouponOwner]
    pagination_class = None

    def get_queryset(self):
        # Other users' coupons 404 rather than 403
        return Coupon.objects.filter(user=self.request.user)

    def list(self, request, *args, **kwargs):
        """List coupons with filters from query parameters."""
        filters = CouponFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        coupons = get_user_coupons(user=request.user, **filters.validated_data)
        return Response(CouponSerializer(coupons, many=True).data)

    def create(self, request, *args, **kwargs):
        """Create a new coupon."""
        serializer = CouponFormSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data.copy()
        data.pop('expected_updated_at', None)

        coupon = create_coupon(user=request.user, **data)

        return Response(
            CouponSerializer(coupon).data,
            status=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        """Update a coupon; a stale expected_updated_at returns 409."""
        partial = kwargs.pop('partial', False)
        coupon = self.get_object()

        serializer = CouponFormSerializer(coupon, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data.copy()
        expected_updated_at = data.pop('expected_updated_at', None)

        try:
            coupon = update_coupon(
                coupon_id=coupon.id,
                user=request.user,
                data=data,
                expected_updated_at=expected_updated_at,
            )
        except CouponNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)
        except CouponConflictError as e:
            return _error(e, status.HTTP_409_CONFLICT)

        return Response(CouponSerializer(coupon).data)

    def destroy(self, request, *args, **kwargs):
        """Permanently delete a coupon."""
        coupon = self.get_object()

        try:
            delete_coupon(coupon_id=coupon.id, user=request.user)
        except CouponNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        request=None,
        responses={200: CouponSerializer, 404: ErrorResponseSerializer},
    )
    @action(detail=True, methods=['post'])
    def redeem(self, request, pk=None):
        """Mark coupon as redeemed. Repeating it changes nothing."""
        coupon = self.get_object()

        try:
            coupon = redeem_coupon(coupon_id=coupon.id, user=request.user)
        except CouponNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)

        return Response(CouponSerializer(coupon).data)

    @extend_schema(
        request={'multipart/form-data': ImageUploadSerializer},
        responses={
            201: ImageUrlSerializer,
            400: ErrorResponseSerializer,
            503: ErrorResponseSerializer,
        },
    )
    @action(
        detail=False,
        methods=['post'],
        url_path='images',
        url_name='images',
        parser_classes=[MultiPartParser, FormParser],
    )
    def upload_image(self, request):
        """Upload a coupon image and get back its public URL."""
        serializer = ImageUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            image_url = upload_coupon_image(
                user=request.user,
                image=serializer.validated_data['image'],
            )
        except (ImageTooLargeError, InvalidImageError) as e:
            return _error(e, status.HTTP_400_BAD_REQUEST)
        except StorageUnavailableError as e:
            return _error(e, status.HTTP_503_SERVICE_UNAVAILABLE)

        return Response({'image_url': image_url}, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: CouponOptionsSerializer})
    @action(detail=False, methods=['get'], url_path='options', url_name='options')
    def presets(self, request):
        """Store and amount presets offered by the coupon form."""
        return Response({
            'stores': STORE_OPTIONS,
            'amounts': AMOUNT_OPTIONS,
            'other': OTHER_OPTION,
        })
