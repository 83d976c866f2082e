import logging

from django.contrib.auth.views import redirect_to_login
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.conf import settings

logger = logging.getLogger(__name__)


def serve_frontend(request, page, require_auth=False, guest_only=False, **kwargs):
    """
    Render a frontend page.

    Pages with require_auth send anonymous visitors to the login page and keep
    the requested path in ?next= so login can return there. Guest-only pages
    (login, register) send signed-in users home.
    """
    if require_auth and not request.user.is_authenticated:
        return redirect_to_login(request.get_full_path(), settings.LOGIN_URL)

    if guest_only and request.user.is_authenticated:
        return redirect(settings.LOGIN_REDIRECT_URL)

    context = {'page': page, **kwargs}
    return render(request, f'{page}.html', context)


def health_check(request):
    """Liveness probe."""
    return JsonResponse({'status': 'ok'})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    logger.error("Unhandled server error on %s", request.path)
    return JsonResponse({
        'error': 'Internal server error',
        'status': 500
    }, status=500)
