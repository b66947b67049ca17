from .register import RegisterTeamView, RegistrationReceiptView
from .admin import AdminTeamsView, AdminExportView
