from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'coupons'

router = SimpleRouter()
router.register(r'', views.CouponViewSet, basename='coupon')

urlpatterns = [
    # Coupon ViewSet routes
    # GET    /api/coupons/                - List coupons (?status=&search=&ordering=&direction=)
    # POST   /api/coupons/                - Create coupon
    # GET    /api/coupons/{id}/           - Get coupon
    # PUT    /api/coupons/{id}/           - Update coupon
    # PATCH  /api/coupons/{id}/           - Partial update
    # DELETE /api/coupons/{id}/           - Delete coupon

    # Custom actions
    # POST   /api/coupons/{id}/redeem/    - Mark as redeemed
    # POST   /api/coupons/images/         - Upload coupon image
    # GET    /api/coupons/options/        - Store and amount presets

    path('', include(router.urls)),
]
