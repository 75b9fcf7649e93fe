from rest_framework.routers import SimpleRouter
from . import views

app_name = "accounts"

router = SimpleRouter()
router.register("schools", views.SchoolViewSet, basename="school")
router.register("members", views.MemberViewSet, basename="member")

urlpatterns = router.urls
