"""Pydantic schemas for resume extraction jobs and results."""
import os
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from models.enums import ExtractionStatusEnum, FileTypeEnum


# Column order of the CSV report
CSV_FIELDS = ["fileName", "name", "email", "phone", "address"]


class ResumeJob(BaseModel):
    """One input file, resolved once at enumeration."""
    model_config = ConfigDict(frozen=True)

    path: str
    file_name: str
    file_type: FileTypeEnum

    @classmethod
    def from_path(cls, file_path: str) -> "ResumeJob":
        path = os.path.abspath(file_path)
        return cls(
            path=path,
            file_name=os.path.basename(path),
            file_type=FileTypeEnum.from_path(path),
        )


class ExtractionResult(BaseModel):
    """Contact fields extracted from one resume."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file_name: str = Field(alias="fileName")
    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    error: Optional[str] = None

    @classmethod
    def failed(cls, file_name: str, error: str) -> "ExtractionResult":
        return cls(file_name=file_name, error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def has_data(self) -> bool:
        return any((self.name, self.email, self.phone, self.address))

    @property
    def status(self) -> ExtractionStatusEnum:
        if not self.succeeded:
            return ExtractionStatusEnum.FAILED
        if not self.has_data:
            return ExtractionStatusEnum.PARTIAL
        return ExtractionStatusEnum.SUCCESS

    def to_row(self) -> dict:
        """Row for the CSV report, keyed by ``CSV_FIELDS``."""
        return self.model_dump(by_alias=True, include={"file_name", "name", "email", "phone", "address"})


class FailedFile(BaseModel):
    """A file that ended with an error, and the error message."""
    file: str
    error: str


class RunSummary(BaseModel):
    """Totals reported at the end of a run."""
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    partial: int = 0
    failures: List[FailedFile] = Field(default_factory=list)
