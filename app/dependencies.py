from app.config import load_settings
from app.services.chatwoot_service import ChatwootService
from app.services.relay_service import SubmissionRelay

# Raises ConfigError before the listener binds if Chatwoot settings are incomplete.
settings = load_settings()

# Initialize Singletons
chatwoot_service = ChatwootService(settings)
relay = SubmissionRelay(chatwoot_service)


def get_relay() -> SubmissionRelay:
    return relay
