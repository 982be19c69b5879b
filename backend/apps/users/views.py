from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import build_user_service
from .serializers import AddressSerializer, AddressWriteSerializer, UserSerializer

logger = get_logger(__name__).bind(component="users", layer="view")


@extend_schema(tags=["Users"])
class UserDetailView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_user_service()
    log = logger.bind(view="UserDetailView")

    @extend_schema(
        summary="Get user",
        description=(
            "Returns the authenticated user's profile. Pass q=address to fetch only the "
            "shipping address. Users may only read their own record."
        ),
        parameters=[
            OpenApiParameter("user_id", int, OpenApiParameter.PATH),
            OpenApiParameter("q", str, OpenApiParameter.QUERY, required=False, enum=["address"]),
        ],
        responses={
            200: UserSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, user_id: int):
        self.log.debug("Fetching user", user_id=user_id, actor_id=request.user.id)
        if request.query_params.get("q") == "address":
            payload = self.service.get_address(request.user, user_id)
            return Response(AddressSerializer(payload).data)
        dto = self.service.get_user(request.user, user_id)
        return Response(UserSerializer(dto).data)

    @extend_schema(
        summary="Set shipping address",
        parameters=[OpenApiParameter("user_id", int, OpenApiParameter.PATH)],
        request=AddressWriteSerializer,
        responses={
            200: UserSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            403: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def put(self, request, user_id: int):
        serializer = AddressWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info("Updating shipping address", user_id=user_id)
        dto = self.service.set_address(
            request.user, user_id, serializer.validated_data["address"]
        )
        return Response(UserSerializer(dto).data)
