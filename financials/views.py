from django.contrib.auth.decorators import login_required
from django.shortcuts import render

from students.decorators import require_student
from .services import fee_statement


@login_required
@require_student
def index(request):
    statement = fee_statement(request.student)
    if statement["outstanding"] > 0:
        balance_status = f"Current Payment Due: {statement['outstanding_label']}"
    else:
        balance_status = "Currently no payment due"
    ctx = {
        "active_nav": "financials",
        "student": request.student,
        "statement": statement,
        "balance_status": balance_status,
    }
    return render(request, "financials/index.html", ctx)
