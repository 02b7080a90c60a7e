from django import template

from ..utils import CurrencyHelper

register = template.Library()


@register.filter
def currency(cents, code="USD"):
    """Render an amount stored in cents, e.g. 1250 -> $12.50."""
    if cents in (None, ""):
        return ""
    return CurrencyHelper.format_amount(int(cents), code)
