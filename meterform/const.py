"""Constants for meterform."""

# Durable storage slots
USER_KEY = "user"
OFFLINE_DATA_KEY = "offlineData"

# Remote formatting endpoint
DEFAULT_API_URL = "https://apihub.staging.appply.link/chatgpt"
DEFAULT_MODEL = "gpt-4o"
DEFAULT_SYSTEM_PROMPT = (
    "Sie sind ein hilfreicher Assistent. "
    "Bitte formatieren Sie die folgenden Daten für eine Google-Tabelle."
)

# Defaults for a freshly registered user
DEFAULT_USER_NAME = "Neuer Benutzer"
DEFAULT_USER_EMAIL = "benutzer@example.com"
USER_CODE_LENGTH = 8

# Draft fields that hold a photo URI
PHOTO_FIELDS = ("meter_photo", "distance_photo")
