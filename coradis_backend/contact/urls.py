from django.urls import include, path
from rest_framework.routers import SimpleRouter

from contact.views import ContactMessageViewSet

app_name = "contact"

router = SimpleRouter()
router.register(r"", ContactMessageViewSet, basename="messages")

urlpatterns = [
    path("", include(router.urls)),
]
