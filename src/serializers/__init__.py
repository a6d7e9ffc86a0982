from .auth_serializer import LoginRequest
from .order_serializer import build_order_request
from .webhook_serializer import StatusPush
