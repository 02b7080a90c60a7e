from django.contrib import admin
from .models import Customer, Invoice


class ReadOnlyAdminMixin:
    """Writes go through the mutation actions; the admin only browses."""

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class InvoiceInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = Invoice
    extra = 0
    fields = ('id', 'amount', 'status', 'date')
    readonly_fields = fields


@admin.register(Customer)
class CustomerAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ('name', 'email', 'image_url')
    search_fields = ('name', 'email')
    readonly_fields = ('id', 'name', 'email', 'image_url')
    inlines = [InvoiceInline]


@admin.register(Invoice)
class InvoiceAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ('id', 'customer', 'amount', 'status', 'date')
    list_filter = ('status',)
    search_fields = ('id', 'customer__name', 'customer__email')
    date_hierarchy = 'date'
    readonly_fields = ('id', 'customer', 'amount', 'status', 'date')
