"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

DEFAULT_STORAGE_KEY = "attendance-schools-v3"
DEFAULT_LEGACY_STORAGE_KEY = "attendance-classes-v2"
DEFAULT_LEGACY_SCHOOL_NAME = "Minha Escola"

DEFAULT_SCAN_DEBOUNCE_SECONDS = 2.0
DEFAULT_QR_BOX_SIZE = 8
DEFAULT_QR_BORDER = 2

MONTH_NAMES_PT_BR = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)

# Monthly report labels
REPORT_TITLE = "CONTROLE DE FREQUÊNCIA"
REPORT_FILE_PREFIX = "Frequencia"
REPORT_YEAR_LABEL = "Ano"
REPORT_MONTH_LABEL = "Mês"
REPORT_SCHOOL_LABEL = "Escola"
REPORT_NUMBER_HEADER = "Nº"
REPORT_NAME_HEADER = "Nome"
REPORT_LEGEND = (
    ("P", "Presença"),
    ("F", "Falta"),
    ("FJ", "Falta Justificada"),
)
