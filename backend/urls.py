from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from backend.core.views import home

urlpatterns = [
    path("", home, name="home"),
    path("admin/", admin.site.urls),

    # Auth
    path("api/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("api/", include("users.urls")),

    # Apps
    path("api/", include("accounts.urls")),
    path("api/", include("shares.urls")),
    path("api/", include("savings.urls")),
    path("api/", include("charges.urls")),
    path("api/overdue/", include("overdue.urls")),
]
