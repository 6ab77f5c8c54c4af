"""Enums package initialization."""

from models.enums.FileTypeEnum import FileTypeEnum
from models.enums.ResponseEnums import ExtractionStatusEnum, PipelineEventEnum

__all__ = ["FileTypeEnum", "ExtractionStatusEnum", "PipelineEventEnum"]
