"""Structured events emitted while the batch pipeline runs."""
from dataclasses import dataclass
from typing import Callable, Optional

from models.enums import PipelineEventEnum


@dataclass(frozen=True)
class PipelineEvent:
    kind: PipelineEventEnum
    file_name: Optional[str] = None
    batch_index: int = 0
    batch_count: int = 0
    processed: int = 0
    succeeded: int = 0
    failed: int = 0
    total: int = 0
    error: Optional[str] = None
    partial: bool = False


EventListener = Callable[[PipelineEvent], None]
