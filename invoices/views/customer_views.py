from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from .. import actions, queries
from ..cache import CUSTOMERS_ROUTE, get_listing_cache


@login_required
def customer_list(request):
    query = request.GET.get("query", "").strip()
    try:
        page = max(int(request.GET.get("page", 1)), 1)
    except (TypeError, ValueError):
        page = 1

    listing = get_listing_cache().get_or_compute(
        CUSTOMERS_ROUTE,
        lambda: {
            "customers": queries.fetch_filtered_customers(query, page),
            "total_pages": queries.fetch_customer_pages(query),
        },
        query=query,
        page=page,
    )

    return render(request, "pages/customers/list.html", {
        "customers": listing["customers"],
        "total_pages": listing["total_pages"],
        "page_range": range(1, listing["total_pages"] + 1),
        "current_page": page,
        "query": query,
    })


@login_required
def customer_create(request):
    if request.method != "POST":
        return render(request, "pages/customers/form.html", {
            "state": actions.ActionState(),
            "values": {},
        })

    submission = request.POST.dict()
    submission.update(request.FILES.dict())
    result = actions.create_customer(actions.ActionState(), submission)
    if isinstance(result, actions.Committed):
        return redirect(result.redirect_to + "/")

    # The file input cannot be refilled, only the text fields.
    return render(request, "pages/customers/form.html", {
        "state": result.to_state(),
        "values": request.POST.dict(),
    }, status=400 if isinstance(result, actions.Rejected) else 500)


@login_required
@require_POST
def customer_delete(request, customer_id):
    result = actions.delete_customer(customer_id)
    if isinstance(result, actions.Committed):
        messages.success(request, result.message)
    else:
        messages.error(request, result.message)
    return redirect("invoices:customer_list")
