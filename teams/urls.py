from django.urls import path

from .views import (
    RegisterTeamView,
    RegistrationReceiptView,
    AdminTeamsView,
    AdminExportView,
)

urlpatterns = [
    # Public
    path("register/", RegisterTeamView.as_view(), name="team-register"),
    path("register/receipt/", RegistrationReceiptView.as_view(), name="team-receipt"),

    # Staff only
    path("admin/", AdminTeamsView.as_view(), name="admin-teams"),
    path("admin/export/", AdminExportView.as_view(), name="admin-export"),
]
