from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .common import Interval, Warning
from .enums import ClaimKind, Theme

NOT_AVAILABLE = "N/A"

AttributeValue = Union[str, int, float]

DEFAULT_COLORS: dict[str, str] = {
    ClaimKind.PRESCRIPTION_PENDING.value: "#FF6B6B",
    ClaimKind.PRESCRIPTION_HISTORY.value: "#4ECDC4",
    ClaimKind.MEDICAL_SERVICE.value: "#45B7D1",
}


class NormalizationConfig(BaseModel):
    """Where to find each claims section and how to read its dates."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    rx_tba_path: str = Field(default="rxTba", alias="rxTbaPath")
    rx_history_path: str = Field(default="rxHistory", alias="rxHistoryPath")
    med_history_path: str = Field(default="medHistory", alias="medHistoryPath")
    date_format: str = Field(default="YYYY-MM-DD", alias="dateFormat")
    colors: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_COLORS))

    def section_path(self, kind: ClaimKind) -> str:
        return {
            ClaimKind.PRESCRIPTION_PENDING: self.rx_tba_path,
            ClaimKind.PRESCRIPTION_HISTORY: self.rx_history_path,
            ClaimKind.MEDICAL_SERVICE: self.med_history_path,
        }[kind]

    def color_for(self, kind: ClaimKind) -> str:
        return self.colors.get(kind.value) or DEFAULT_COLORS[kind.value]


class PrescriptionAttributes(BaseModel):
    category: Literal["prescription"] = "prescription"
    days_supply: int
    medication: str
    dosage: str = NOT_AVAILABLE
    prescriber: str = NOT_AVAILABLE
    pharmacy: str = NOT_AVAILABLE
    ndc: str = NOT_AVAILABLE
    quantity: AttributeValue = NOT_AVAILABLE
    copay: AttributeValue = NOT_AVAILABLE
    extra: dict[str, Any] = Field(default_factory=dict)


class MedicalServiceAttributes(BaseModel):
    category: Literal["medical_service"] = "medical_service"
    claim_id: str = NOT_AVAILABLE
    provider: str = NOT_AVAILABLE
    service_type: str = NOT_AVAILABLE
    charged_amount: AttributeValue = NOT_AVAILABLE
    allowed_amount: AttributeValue = NOT_AVAILABLE
    paid_amount: AttributeValue = NOT_AVAILABLE
    procedure_code: str = NOT_AVAILABLE
    extra: dict[str, Any] = Field(default_factory=dict)


ClaimAttributes = Annotated[
    Union[PrescriptionAttributes, MedicalServiceAttributes],
    Field(discriminator="category"),
]


class ClaimItem(BaseModel):
    id: str
    kind: ClaimKind
    label: str
    color_tag: str
    interval: Interval
    attributes: ClaimAttributes


class TimelineSummary(BaseModel):
    total_items: int = Field(ge=1)
    kinds: list[ClaimKind] = Field(min_length=1)


class TimelineDocument(BaseModel):
    items: list[ClaimItem] = Field(min_length=1)
    span: Interval
    summary: TimelineSummary
    warnings: list[Warning] = Field(default_factory=list)


class RenderOptions(BaseModel):
    theme: Theme = Theme.AUTO
    title: Optional[str] = None
    width: int = Field(default=1200, ge=400, le=5000)
    height: int = Field(default=600, ge=300, le=3000)
    interactive: bool = True


# ── Batch models ─────────────────────────────────────────────────────────


class JsonFileInfo(BaseModel):
    name: str
    path: str
    size: int = Field(ge=0)
    is_valid_claims: bool = False
    claims_count: Optional[int] = None
    claim_kinds: Optional[list[ClaimKind]] = None
    error: Optional[str] = None


class FolderProcessingOptions(BaseModel):
    recursive: bool = True
    output_dir: Optional[str] = None
    render: RenderOptions = Field(default_factory=RenderOptions)


class FileError(BaseModel):
    file: str
    error: str


class AggregateSummary(BaseModel):
    total_items: int = 0
    kinds: list[ClaimKind] = Field(default_factory=list)
    span: Optional[Interval] = None


class BatchResult(BaseModel):
    files_scanned: int = 0
    files_succeeded: int = 0
    files_failed: int = 0
    output_files: list[str] = Field(default_factory=list)
    errors: list[FileError] = Field(default_factory=list)
    summary: AggregateSummary = Field(default_factory=AggregateSummary)
