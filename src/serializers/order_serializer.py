import math
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from utils.exceptions import InputValidationError


def _or(value: Any, default: Any) -> Any:
    """Return ``value`` unless it is empty (None, "", 0, False)."""
    return value if value else default


def _text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _flag(value: Any) -> str:
    if value is None:
        return "0"
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


_LEADING_NUMBER = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def _to_float(value: Any) -> float:
    """Parse the leading number of a string ("12abc" -> 12.0); unusable input is 0.0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return 0.0
        value = match.group(0)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def first_info(detail: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """``Info`` arrives either as an object or as a list of one object."""
    info = detail.get("Info")
    if isinstance(info, list):
        return info[0] if info else None
    return info or None


class PikndelPickup(BaseModel):
    UniqueNo: str
    PersonName: Optional[str] = None
    Mobile: Optional[str] = None
    AddressType: str = "Home"
    HouseNo: str = ""
    Landmark: str = ""
    Address: Optional[str] = None
    Lat: str = ""
    Lng: str = ""
    Pincode: Optional[str] = None
    CashPaid: str = "0"
    CashCollection: str = "0"
    Comment: str = ""
    PickupDate: str = ""
    PickupSlot: str = ""
    RTOName: Optional[str] = None
    RTOMobile: Optional[str] = None
    RTOAddr: Optional[str] = None
    RTOPincode: Optional[str] = None


class PikndelItem(BaseModel):
    Qty: Any = None
    Type: str = "Goods"
    IsFragile: str = "0"
    IsLiquid: str = "0"
    Name: Optional[str] = None
    Cost: Any = None
    Length: Any = 0
    Width: Any = 0
    Height: Any = 0
    ActualWeight: Any = 1
    EWayBillNo: str = ""


class PikndelDelivery(BaseModel):
    UniqueNo: str
    PersonName: Optional[str] = None
    Mobile: Optional[str] = None
    AddressType: str = "Home"
    HouseNo: str = ""
    Landmark: str = ""
    Address: Optional[str] = None
    Lat: str = ""
    Lng: str = ""
    Pincode: Optional[str] = None
    # Number on delivery, string on pickup
    CashCollection: float = 0.0
    Comment: str = ""


class PikndelInfo(BaseModel):
    Pickup: PikndelPickup
    Item: List[PikndelItem]
    Delivery: PikndelDelivery


class PikndelOrderDetail(BaseModel):
    PreAWBNo: str = ""
    ClientUniqueNo: Optional[str] = None
    VehicleType: str = "Bike"
    BrandName: str = ""
    OrderType: str = "B2C"
    InvoiceNo: str = ""
    InvoiceUrl: str = ""
    InvoiceValue: str = "0.00"
    EWAYBillNo: str = ""
    TotalActualWeight: Optional[str] = None
    Info: List[PikndelInfo]


class PikndelOrderRequest(BaseModel):
    UserId: str
    OrderDetails: List[PikndelOrderDetail]


def validate_order_payload(payload: Any):
    """
    Check the fields PIKNDEL rejects an order without, in a fixed order.

    Raises InputValidationError naming the first missing field.
    """
    if not isinstance(payload, dict) or not payload.get("UserId"):
        raise InputValidationError("placeOrder: UserId is required.")

    order_details = payload.get("OrderDetails")
    if not isinstance(order_details, list) or len(order_details) == 0:
        raise InputValidationError(
            "placeOrder: OrderDetails must be a non-empty array."
        )

    detail = order_details[0]
    if not isinstance(detail, dict):
        detail = {}
    if not detail.get("ClientUniqueNo"):
        raise InputValidationError(
            "placeOrder: OrderDetails[0].ClientUniqueNo is required."
        )
    if not detail.get("TotalActualWeight"):
        raise InputValidationError(
            "placeOrder: OrderDetails[0].TotalActualWeight is required."
        )

    info = first_info(detail)
    if not isinstance(info, dict):
        raise InputValidationError("placeOrder: OrderDetails[0].Info is required.")
    if not info.get("Pickup"):
        raise InputValidationError("placeOrder: Info.Pickup is required.")
    if not info.get("Delivery"):
        raise InputValidationError("placeOrder: Info.Delivery is required.")

    items = info.get("Item")
    if not isinstance(items, list) or len(items) == 0:
        raise InputValidationError("placeOrder: Info.Item must be a non-empty array.")


def prepare_pickup(pickup: Dict[str, Any]) -> PikndelPickup:
    person_name = _text(pickup.get("PersonName"))
    mobile = _text(pickup.get("Mobile"))
    address = _text(pickup.get("Address"))
    pincode = _text(pickup.get("Pincode"))

    return PikndelPickup(
        UniqueNo=_or(mobile, ""),
        PersonName=person_name,
        Mobile=mobile,
        AddressType=str(_or(pickup.get("AddressType"), "Home")),
        HouseNo=str(_or(pickup.get("HouseNo"), "")),
        Landmark=str(_or(pickup.get("Landmark"), "")),
        Address=address,
        Lat=str(_or(pickup.get("Lat"), "")),
        Lng=str(_or(pickup.get("Lng"), "")),
        Pincode=pincode,
        CashPaid=str(_or(pickup.get("CashPaid"), "0")),
        CashCollection=str(_or(pickup.get("CashCollection"), "0")),
        Comment=str(_or(pickup.get("Comment"), "")),
        PickupDate=str(_or(pickup.get("PickupDate"), "")),
        PickupSlot=str(_or(pickup.get("PickupSlot"), "")),
        # Return-to-origin contact defaults to the pickup contact
        RTOName=_text(_or(pickup.get("RTOName"), person_name)),
        RTOMobile=_text(_or(pickup.get("RTOMobile"), mobile)),
        RTOAddr=_text(_or(pickup.get("RTOAddr"), address)),
        RTOPincode=_text(_or(pickup.get("RTOPincode"), pincode)),
    )


def prepare_item(item: Dict[str, Any]) -> PikndelItem:
    if not isinstance(item, dict):
        raise InputValidationError("placeOrder: Info.Item entries must be objects.")

    return PikndelItem(
        Qty=item.get("Qty"),
        Type=str(_or(item.get("Type"), "Goods")),
        IsFragile=_flag(item.get("IsFragile")),
        IsLiquid=_flag(item.get("IsLiquid")),
        Name=_text(_or(item.get("Name"), None)),
        Cost=item.get("Cost"),
        Length=_or(item.get("Length"), 0),
        Width=_or(item.get("Width"), 0),
        Height=_or(item.get("Height"), 0),
        ActualWeight=_or(item.get("ActualWeight"), 1),
        # Both spellings are seen in caller payloads; capital W is what PIKNDEL accepts
        EWayBillNo=str(_or(item.get("EWayBillNo"), _or(item.get("EwayBillNo"), ""))),
    )


def prepare_delivery(delivery: Dict[str, Any]) -> PikndelDelivery:
    mobile = _text(delivery.get("Mobile"))
    return PikndelDelivery(
        UniqueNo=_or(mobile, ""),
        PersonName=_text(delivery.get("PersonName")),
        Mobile=mobile,
        AddressType=str(_or(delivery.get("AddressType"), "Home")),
        HouseNo=str(_or(delivery.get("HouseNo"), "")),
        Landmark=str(_or(delivery.get("Landmark"), "")),
        Address=_text(delivery.get("Address")),
        Lat=str(_or(delivery.get("Lat"), "")),
        Lng=str(_or(delivery.get("Lng"), "")),
        Pincode=_text(delivery.get("Pincode")),
        CashCollection=_to_float(delivery.get("CashCollection")),
        Comment=str(_or(delivery.get("Comment"), "")),
    )


def prepare_order_detail(detail: Dict[str, Any], index: int) -> PikndelOrderDetail:
    info = first_info(detail) if isinstance(detail, dict) else None
    if (
        not isinstance(info, dict)
        or not isinstance(info.get("Pickup"), dict)
        or not isinstance(info.get("Delivery"), dict)
    ):
        raise InputValidationError(
            f"placeOrder: OrderDetails[{index}].Info with Pickup and Delivery is required."
        )

    return PikndelOrderDetail(
        PreAWBNo=str(_or(detail.get("PreAWBNo"), "")),
        ClientUniqueNo=_text(detail.get("ClientUniqueNo")),
        VehicleType=str(_or(detail.get("VehicleType"), "Bike")),
        BrandName=str(_or(detail.get("BrandName"), "")),
        OrderType=str(_or(detail.get("OrderType"), "B2C")),
        InvoiceNo=str(_or(detail.get("InvoiceNo"), "")),
        InvoiceUrl=str(_or(detail.get("InvoiceUrl"), "")),
        InvoiceValue=str(_or(detail.get("InvoiceValue"), "0.00")),
        EWAYBillNo=str(_or(detail.get("EWAYBillNo"), "")),
        TotalActualWeight=_text(detail.get("TotalActualWeight")),
        Info=[
            PikndelInfo(
                Pickup=prepare_pickup(info["Pickup"]),
                Item=[prepare_item(item) for item in info.get("Item") or []],
                Delivery=prepare_delivery(info["Delivery"]),
            )
        ],
    )


def build_order_request(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Transform a caller order payload into the PIKNDEL place_order body.
    Args:
        payload: Caller order with UserId and OrderDetails.
    Returns:
        Dict matching the PIKNDEL v2.5 order structure.
    """
    validate_order_payload(payload)

    order = PikndelOrderRequest(
        UserId=str(payload["UserId"]),
        OrderDetails=[
            prepare_order_detail(detail, index)
            for index, detail in enumerate(payload["OrderDetails"])
        ],
    )
    return order.model_dump()
