from django.contrib.auth.decorators import login_required
from django.shortcuts import render

from clearance.services import attendance_percentage
from students.decorators import require_student
from .models import AttendanceRecord


@login_required
@require_student
def index(request):
    student = request.student
    summary = attendance_percentage(student.id)
    counts = {value: 0 for value, _ in AttendanceRecord.STATUS_CHOICES}
    recent = AttendanceRecord.objects.filter(
        student=student, date__gte=summary["window_start"]
    ).select_related("course").order_by("-date")
    for record in recent:
        counts[record.status] = counts.get(record.status, 0) + 1
    ctx = {
        "active_nav": "attendance",
        "student": student,
        "summary": summary,
        "counts": counts,
        "recent": list(recent[:20]),
    }
    return render(request, "attendance/index.html", ctx)
