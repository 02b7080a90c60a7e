from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import Http404
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from .. import actions, queries
from ..cache import INVOICES_ROUTE, get_listing_cache
from ..models import Invoice


def _page_number(request) -> int:
    try:
        return max(int(request.GET.get("page", 1)), 1)
    except (TypeError, ValueError):
        return 1


@login_required
def invoice_list(request):
    query = request.GET.get("query", "").strip()
    page = _page_number(request)

    listing = get_listing_cache().get_or_compute(
        INVOICES_ROUTE,
        lambda: {
            "invoices": queries.fetch_filtered_invoices(query, page),
            "total_pages": queries.fetch_invoice_pages(query),
        },
        query=query,
        page=page,
    )

    return render(request, "pages/invoices/list.html", {
        "invoices": listing["invoices"],
        "total_pages": listing["total_pages"],
        "page_range": range(1, listing["total_pages"] + 1),
        "current_page": page,
        "query": query,
    })


def _render_form(request, state, values, invoice_id=None, status=200):
    return render(request, "pages/invoices/form.html", {
        "state": state,
        "values": values,
        "invoice_id": invoice_id,
        "customers": queries.fetch_customers(),
        "status_choices": Invoice.Status.choices,
    }, status=status)


@login_required
def invoice_create(request):
    if request.method != "POST":
        return _render_form(request, actions.ActionState(), {})

    submission = request.POST.dict()
    result = actions.create_invoice(actions.ActionState(), submission)
    if isinstance(result, actions.Committed):
        return redirect(result.redirect_to + "/")
    return _render_form(request, result.to_state(), submission, status=400 if isinstance(result, actions.Rejected) else 500)


@login_required
def invoice_edit(request, invoice_id):
    invoice = queries.fetch_invoice_by_id(invoice_id)
    if invoice is None:
        raise Http404("Invoice not found")

    if request.method != "POST":
        values = {
            "customerId": invoice["customer_id"],
            "amount": invoice["amount"],
            "status": invoice["status"],
        }
        return _render_form(request, actions.ActionState(), values, invoice_id=invoice_id)

    submission = request.POST.dict()
    result = actions.update_invoice(invoice_id, actions.ActionState(), submission)
    if isinstance(result, actions.Committed):
        return redirect(result.redirect_to + "/")
    return _render_form(
        request,
        result.to_state(),
        submission,
        invoice_id=invoice_id,
        status=400 if isinstance(result, actions.Rejected) else 500,
    )


@login_required
@require_POST
def invoice_delete(request, invoice_id):
    result = actions.delete_invoice(invoice_id)
    if isinstance(result, actions.Committed):
        messages.success(request, result.message)
    else:
        messages.error(request, result.message)
    return redirect("invoices:invoice_list")
