from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from .decorators import require_student


@login_required
@require_student
def profile(request):
    st = request.student
    return JsonResponse(
        {
            "id": st.id,
            "student_number": st.student_number,
            "full_name": st.full_name,
            "email": st.email,
            "program": st.program,
            "program_code": st.program_code,
            "year_of_study": st.year_of_study,
            "semester": st.semester,
            "academic_year": st.academic_year,
        }
    )
