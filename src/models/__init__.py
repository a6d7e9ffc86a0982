from .webhook_response import WebhookResponse
