from sqlalchemy import JSON, BigInteger, Column, DateTime, Integer, Text
from sqlalchemy.sql import func

from config.database import Base


class WebhookResponse(Base):
    """One row per status push received from PIKNDEL. Insert-only."""

    __tablename__ = "pikndel_webhook_responses"

    id = Column(
        Integer,
        nullable=False,
        primary_key=True,
        index=True,
        unique=True,
        autoincrement=True,
    )
    awb_no = Column(Text, nullable=True, index=True)
    short_code = Column(Text, nullable=True)
    activity = Column(Text, nullable=True)
    timestamp = Column(BigInteger, nullable=True)
    # Entire JSON body as sent by PIKNDEL
    raw_payload = Column(JSON)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
