from django.shortcuts import redirect, render
from django.urls import reverse

from academics.services import pending_assignments, upcoming_exams, upcoming_lectures, week_attendance
from clearance.services import attendance_percentage, quick_check
from financials.services import fee_statement


def home(request):
    if not request.user.is_authenticated:
        return redirect("account_login")
    name = getattr(request.user, "first_name", "") or request.user.email
    ctx = {
        "name": name,
        "student_label": "No student record linked",
        "academics_url": reverse("academics:index"),
        "examinations_url": reverse("academics:examinations"),
        "coursework_url": reverse("academics:coursework"),
        "lectures_url": reverse("academics:lectures"),
        "attendance_url": reverse("attendance:index"),
        "financials_url": reverse("financials:index"),
        "active_nav": "dashboard",
    }
    st = getattr(request, "student", None)
    if st:
        ctx.update(
            {
                "student": st,
                "student_label": f"{st.full_name} ({st.student_number})",
                "clearance": quick_check(st.id),
                "attendance": attendance_percentage(st.id),
                "week_attendance": week_attendance(st),
                "pending_assignments_count": pending_assignments(st).count(),
                "upcoming_exams_count": upcoming_exams(st).count(),
                "upcoming_lectures": list(upcoming_lectures(st)),
                "outstanding_label": fee_statement(st)["outstanding_label"],
            }
        )
    return render(request, "home.html", ctx)
