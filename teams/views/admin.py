import io
import logging

from django.http import HttpResponse
from django.utils import timezone
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from teams import store, state_machine
from teams.exporters import write_teams_csv
from teams.notifications import dispatch_status_update
from teams.qr import team_badge_data_url
from teams.serializers import (
    TeamQuerySerializer,
    StatusUpdateSerializer,
    TeamIdSerializer,
    TeamSerializer,
)

logger = logging.getLogger("registrations.teams")


class AdminTeamsView(APIView):
    """
    Staff-only team review API.

    GET   /api/admin/?department=&status=&search=&page=&limit=
    PATCH /api/admin/   {"teamId": 1, "status": "APPROVED"}
    POST  /api/admin/   {"teamId": 1}  -> QR badge as a data URL
    """
    permission_classes = [IsAdminUser]

    def get(self, request):
        query_serializer = TeamQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)
        query = query_serializer.to_query()

        page = store.list_teams(query)
        # Breakdowns cover every team; total follows the filters
        stats = store.get_team_stats()
        stats["total"] = page.total

        return Response({
            "success": True,
            "teams": TeamSerializer(page.teams, many=True).data,
            "pagination": {
                "page": page.page,
                "limit": page.limit,
                "total": page.total,
                "totalPages": page.total_pages,
            },
            "stats": stats,
        })

    def patch(self, request):
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        team = store.get_team(serializer.validated_data["teamId"])
        new_status = serializer.validated_data["status"]

        ok, reason = state_machine.transition(team, new_status, actor=request.user)
        if not ok:
            raise ValidationError({"status": [reason]})

        dispatch_status_update(team, new_status)

        return Response({"success": True, "team": TeamSerializer(team).data})

    def post(self, request):
        serializer = TeamIdSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        team = store.get_team(serializer.validated_data["teamId"])

        return Response({
            "success": True,
            "qrCode": team_badge_data_url(team),
            "team": {
                "registrationId": team.registration_id,
                "teamName": team.team_name,
                "department": team.department,
            },
        })


class AdminExportView(APIView):
    """
    GET /api/admin/export/?department=&status=
    All matching teams as CSV, newest first.
    """
    permission_classes = [IsAdminUser]

    def get(self, request):
        query_serializer = TeamQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)
        query = query_serializer.to_query()

        buffer = io.StringIO()
        count = write_teams_csv(
            buffer,
            store.iter_export_teams(department=query.department, status=query.status),
        )
        logger.info(f"CSV export: rows={count}, actor={request.user.id}")

        filename = f"registrations-{timezone.now().date().isoformat()}.csv"
        return HttpResponse(
            buffer.getvalue(),
            content_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
