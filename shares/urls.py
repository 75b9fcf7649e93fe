from rest_framework.routers import SimpleRouter
from . import views

app_name = "shares"

router = SimpleRouter()
router.register("share-types", views.ShareTypeViewSet, basename="share-type")
router.register("shares", views.ShareViewSet, basename="share")

urlpatterns = router.urls
