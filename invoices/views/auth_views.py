from django.conf import settings
from django.contrib.auth import logout
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from .. import queries
from ..auth_gate import authenticate


def _safe_next(request) -> str:
    target = request.POST.get("next") or request.GET.get("next") or ""
    if target and url_has_allowed_host_and_scheme(
        target, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return target
    return settings.LOGIN_REDIRECT_URL


def login_view(request):
    error_message = None
    if request.method == "POST":
        error_message = authenticate(request, None, request.POST.dict())
        if error_message is None:
            return redirect(_safe_next(request))

    return render(request, "pages/auth/login.html", {
        "error_message": error_message,
        "next": request.POST.get("next") or request.GET.get("next", ""),
        "email": request.POST.get("email", ""),
    }, status=401 if error_message else 200)


@require_POST
def logout_view(request):
    logout(request)
    return redirect(settings.LOGOUT_REDIRECT_URL)


def home(request):
    return redirect(settings.LOGIN_URL)


@login_required
def dashboard(request):
    return render(request, "pages/dashboard/overview.html", {
        "cards": queries.fetch_card_data(),
    })
