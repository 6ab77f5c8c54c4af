"""Error types raised across the extraction pipeline."""


class ResumeHarvestError(Exception):
    """Base class for all application errors."""


class ConfigurationError(ResumeHarvestError):
    """Missing or placeholder credentials; aborts the run before any file is touched."""


class UnsupportedFormatError(ResumeHarvestError):
    """File extension is not one of the supported resume formats."""


class DecodeError(ResumeHarvestError):
    """Text could not be extracted from a document."""


class InsufficientContentError(ResumeHarvestError):
    """Extracted text is too short to be worth sending to the model."""


class ModelCallError(ResumeHarvestError):
    """Completion request failed or its reply could not be parsed."""


class OrganizeError(ResumeHarvestError):
    """A processed file could not be moved to its target directory."""


class ReportWriteError(ResumeHarvestError):
    """The CSV report could not be written."""
