from django.contrib import admin
from .models import FeeRecord, Payment

@admin.register(FeeRecord)
class FeeRecordAdmin(admin.ModelAdmin):
    list_display = ("student", "category", "description", "amount", "status", "balance_due", "academic_year", "semester")
    list_filter = ("status", "category", "academic_year", "semester")
    search_fields = ("student__student_number", "description")

@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("student", "amount", "method", "receipt_number", "paid_at")
    search_fields = ("student__student_number", "receipt_number")
