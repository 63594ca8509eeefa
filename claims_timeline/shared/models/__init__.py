from .enums import ClaimKind, Theme, WarningCode
from .common import Interval, Warning
from .domain import (
    DEFAULT_COLORS,
    NOT_AVAILABLE,
    AggregateSummary,
    AttributeValue,
    BatchResult,
    ClaimAttributes,
    ClaimItem,
    FileError,
    FolderProcessingOptions,
    JsonFileInfo,
    MedicalServiceAttributes,
    NormalizationConfig,
    PrescriptionAttributes,
    RenderOptions,
    TimelineDocument,
    TimelineSummary,
)

__all__ = [
    "ClaimKind",
    "Theme",
    "WarningCode",
    "Interval",
    "Warning",
    "DEFAULT_COLORS",
    "NOT_AVAILABLE",
    "AggregateSummary",
    "AttributeValue",
    "BatchResult",
    "ClaimAttributes",
    "ClaimItem",
    "FileError",
    "FolderProcessingOptions",
    "JsonFileInfo",
    "MedicalServiceAttributes",
    "NormalizationConfig",
    "PrescriptionAttributes",
    "RenderOptions",
    "TimelineDocument",
    "TimelineSummary",
]
