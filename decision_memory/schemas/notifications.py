"""Pydantic schemas for notifications, insights and feature flags."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class NotificationType(StrEnum):
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    BILLING = "BILLING"


class Notification(BaseModel):
    id: str
    type: NotificationType = NotificationType.INFO
    title: str
    message: str = ""
    link: str | None = None
    is_read: bool = False
    created_at: datetime


class Insight(BaseModel):
    """Server-generated observation about a workspace's decision history."""

    id: str
    title: str
    description: str = ""
    insight_type: str = "GENERAL"
    impact: str = Field("MEDIUM", description="HIGH, MEDIUM or LOW")
    action: str = "Review related decisions"
    confidence: int = 85


class FeatureFlag(BaseModel):
    key: str
    enabled: bool
    scope: str = "global"
