# teams/constants.py

# --- Departments (all CHARUSAT faculties) ---
DEPARTMENTS = [
    # CSPIT
    "CSPIT - AIML",
    "CSPIT - CSE",
    "CSPIT - IT",
    "CSPIT - CE",
    "CSPIT - EE",
    "CSPIT - EC",
    "CSPIT - ME",
    "CSPIT - CL",
    # DEPSTAR
    "DEPSTAR - IT",
    "DEPSTAR - CE",
    "DEPSTAR - CSE",
    # Other faculties
    "PDPIAS",
    "BDIAS",
    "IIIM",
    "CLASS",
    "RPCP",
    "CMPICA",
    "MTIN",
    "ARIP",
]

DEPARTMENT_CHOICES = [(dept, dept) for dept in DEPARTMENTS]

# Only 1st and 2nd year students are eligible
YEAR_FIRST = "1st Year"
YEAR_SECOND = "2nd Year"
YEARS = [YEAR_FIRST, YEAR_SECOND]
YEAR_CHOICES = [(year, year) for year in YEARS]

# --- Team size ---
MIN_TEAM_SIZE = 3
MAX_TEAM_SIZE = 5

# --- Field formats ---
TEAM_NAME_PATTERN = r"^[a-zA-Z0-9\s\-_]+$"
PHONE_PATTERN = r"^[6-9]\d{9}$"

# Query-string value meaning "no filter"
FILTER_ALL = "all"

# Rate-limited endpoints
ENDPOINT_REGISTER = "/api/register"
