from .order_controller import get_order_status, login, place_order
from .webhook_controller import process_status_push
