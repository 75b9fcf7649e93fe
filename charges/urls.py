from rest_framework.routers import SimpleRouter
from . import views

app_name = "charges"

router = SimpleRouter()
router.register("charges/types", views.ServiceChargeTypeViewSet, basename="charge-type")
router.register("charges/applied", views.AppliedServiceChargeViewSet, basename="applied-charge")

urlpatterns = router.urls
