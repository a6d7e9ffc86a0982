from .order_routes import order_router
from .webhook_routes import webhook_router
