"""Status enumerations for pipeline results and events."""
from enum import Enum


class ExtractionStatusEnum(str, Enum):
    """Outcome of a single resume, as shown to the user."""
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


class PipelineEventEnum(str, Enum):
    """Kinds of events emitted by the batch pipeline."""
    JOB_STARTED = "job_started"
    JOB_SUCCEEDED = "job_succeeded"
    JOB_FAILED = "job_failed"
    BATCH_COMPLETED = "batch_completed"
