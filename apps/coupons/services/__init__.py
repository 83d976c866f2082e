from .exceptions import (
    CouponsServiceError,
    CouponNotFoundError,
    CouponConflictError,
    CouponImageError,
    ImageTooLargeError,
    InvalidImageError,
    StorageUnavailableError,
)
from .coupon_management import (
    create_coupon,
    update_coupon,
    redeem_coupon,
    delete_coupon,
    get_coupon_by_id,
)
from .coupon_search import (
    get_user_coupons,
    filter_by_status,
    search_coupons,
    sort_coupons,
    STATUS_FILTERS,
    ORDERING_FIELDS,
    DIRECTIONS,
)
from .image_storage import upload_coupon_image, build_image_key
from .coupon_collection import CouponCollection

__all__ = [
    # Exceptions
    'CouponsServiceError',
    'CouponNotFoundError',
    'CouponConflictError',
    'CouponImageError',
    'ImageTooLargeError',
    'InvalidImageError',
    'StorageUnavailableError',
    # Coupon management
    'create_coupon',
    'update_coupon',
    'redeem_coupon',
    'delete_coupon',
    'get_coupon_by_id',
    # Listing
    'get_user_coupons',
    'filter_by_status',
    'search_coupons',
    'sort_coupons',
    'STATUS_FILTERS',
    'ORDERING_FIELDS',
    'DIRECTIONS',
    # Images
    'upload_coupon_image',
    'build_image_key',
    # Collection
    'CouponCollection',
]
