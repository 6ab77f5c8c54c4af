"""Models package initialization."""

from models.enums import ExtractionStatusEnum, FileTypeEnum, PipelineEventEnum

__all__ = ["FileTypeEnum", "ExtractionStatusEnum", "PipelineEventEnum"]
