import logging

from django.http import HttpResponse
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from teams import store
from teams.constants import ENDPOINT_REGISTER
from teams.identifiers import is_registration_id
from teams.receipt_generator import generate_receipt_pdf, receipt_filename
from teams.serializers import RegistrationSerializer, PublicTeamSerializer
from teams.services import register_team
from teams.throttles import RegistrationRateThrottle

logger = logging.getLogger("registrations.teams")


def _registration_id_param(request):
    # Ids are issued upper-case; lookups accept any case
    registration_id = (request.query_params.get("id") or "").strip().upper()
    if not registration_id:
        raise ValidationError({"id": ["Registration ID is required"]})
    return registration_id


class RegisterTeamView(APIView):
    """
    POST /api/register/   public team registration
    GET  /api/register/?id=<registrationId>   public team summary
    """
    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = [RegistrationRateThrottle]
    rate_limit_endpoint = ENDPOINT_REGISTER

    def post(self, request):
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        team = register_team(serializer.to_registration())

        return Response(
            {
                "success": True,
                "registrationId": team.registration_id,
                "teamId": team.id,
                "message": "Team registered successfully!",
            },
            status=status.HTTP_200_OK,
        )

    def get(self, request):
        team = store.get_team_by_registration_id(_registration_id_param(request))
        return Response({"success": True, "team": PublicTeamSerializer(team).data})


class RegistrationReceiptView(APIView):
    """
    GET /api/register/receipt/?id=<registrationId>
    Streams the PDF receipt as an attachment.
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        registration_id = _registration_id_param(request)
        if not is_registration_id(registration_id):
            raise ValidationError({"id": ["Invalid registration ID format"]})

        team = store.get_team_by_registration_id(registration_id)
        pdf_bytes = generate_receipt_pdf(team)

        response = HttpResponse(pdf_bytes, content_type="application/pdf")
        response["Content-Disposition"] = f'attachment; filename="{receipt_filename(team.registration_id)}"'
        response["Content-Length"] = str(len(pdf_bytes))
        response["Cache-Control"] = "no-store, max-age=0"
        return response
