# backend/core/views.py

from django.http import HttpResponse

def home(request):
    return HttpResponse("Welcome to the association console! Navigate to /admin/ or /api/overdue/")
