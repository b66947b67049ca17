import logging

from django.contrib.auth import authenticate, get_user_model
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.tokens import RefreshToken

from .serializers import LoginSerializer, AdminProfileSerializer

logger = logging.getLogger("registrations.auth")

User = get_user_model()

INVALID_CREDENTIALS = "Invalid email or password"


class LoginView(APIView):
    """
    POST /api/auth/login/   {"email": "...", "password": "..."}

    Staff accounts only. Returns a JWT pair plus the admin profile.
    """
    # JWT stays listed so AuthenticationFailed maps to 401, not 403
    authentication_classes = [JWTAuthentication]
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]
        password = serializer.validated_data["password"]

        account = User.objects.filter(email__iexact=email, is_staff=True).first()
        if account is None:
            logger.warning(f"Admin login failed: unknown email {email}")
            raise AuthenticationFailed(INVALID_CREDENTIALS)

        # Django still authenticates by username
        user = authenticate(request, username=account.get_username(), password=password)
        if user is None:
            logger.warning(f"Admin login failed: bad password for {email}")
            raise AuthenticationFailed(INVALID_CREDENTIALS)

        refresh = RefreshToken.for_user(user)
        logger.info(f"Admin login: user={user.id}")
        return Response({
            "success": True,
            "access": str(refresh.access_token),
            "refresh": str(refresh),
            "admin": AdminProfileSerializer(user).data,
        })


class MeView(APIView):
    """GET /api/auth/me/ -> the signed-in admin (session check)."""
    permission_classes = [IsAdminUser]

    def get(self, request):
        return Response({
            "success": True,
            "admin": AdminProfileSerializer(request.user).data,
        })
