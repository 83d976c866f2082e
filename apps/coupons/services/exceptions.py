"""Domain-specific exceptions for coupons services."""


class CouponsServiceError(Exception):
    """Base exception for coupons services."""
    code = 'coupons_error'


class CouponNotFoundError(CouponsServiceError):
    """Raised when coupon does not exist or belongs to another user."""
    code = 'coupon_not_found'


class CouponConflictError(CouponsServiceError):
    """Raised when the coupon changed since the caller last read it."""
    code = 'coupon_conflict'


class CouponImageError(CouponsServiceError):
    """Base exception for coupon image uploads."""
    code = 'image_error'


class ImageTooLargeError(CouponImageError):
    """Raised when an image exceeds the upload size limit."""
    code = 'image_too_large'


class InvalidImageError(CouponImageError):
    """Raised when the uploaded file is not an image."""
    code = 'invalid_image'


class StorageUnavailableError(CouponImageError):
    """Raised when the image storage cannot be written."""
    code = 'storage_unavailable'
