from blogapi.clients.ai_client import AiClient
from blogapi.clients.email_client import EmailClient

__all__ = ["AiClient", "EmailClient"]
