"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

ANNUAL_VACATION_DAYS = 22
NET_SALARY_RATIO = Decimal("0.77")
DEFAULT_CURRENT_EMPLOYER = "bd054"
DEFAULT_TRAINING_PROVIDER = "Empresa"
SALARY_UPDATE_REASON = "Atualização salarial"

MIN_EVALUATION_SCORE = Decimal("0.0")
MAX_EVALUATION_SCORE = Decimal("5.0")

API_PREFIX = "/api"
SERVICE_NAME = "HR Pro API"

DUPLICATE_NIF_MESSAGE = "NIF já existe na base de dados"
DUPLICATE_EMAIL_MESSAGE = "Email já existe na base de dados"
