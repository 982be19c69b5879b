from django.urls import include, path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

urlpatterns = [
    path("auth/token/", TokenObtainPairView.as_view(), name="auth-token"),
    path(
        "auth/token/refresh/", TokenRefreshView.as_view(), name="auth-token-refresh"
    ),
    path("cart/", include("apps.carts.urls")),
    path("users/", include("apps.users.urls")),
]
