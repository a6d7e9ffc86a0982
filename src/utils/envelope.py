import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Union

from config.app_vars import PIKNDEL_SOURCE


def build_control(version: Union[str, int, float] = 1) -> Dict[str, Any]:
    """
    Build the "Control" envelope PIKNDEL expects on every request.

    :param version: Endpoint specific version, e.g. "3.2" for place_order.
    :return: Fresh envelope with a unique RequestId.
    """
    return {
        "RequestId": str(uuid.uuid4()),
        "Source": PIKNDEL_SOURCE,
        "RequestTime": int(datetime.now(timezone.utc).timestamp()),
        "Version": str(version),
    }
