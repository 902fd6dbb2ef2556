# -*- coding: utf-8 -*-
"""
Car and work log models
"""
from typing import Optional, List, Dict, Any, Union, Literal, Annotated
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class ServiceStage(str, Enum):
    """Fixed repair pipeline, in order"""
    DISASSEMBLY = "Desmontagem"
    REPAIR = "Reparo e Primer"
    SANDING = "Lixamento"
    PAINTING = "Pintura"
    POLISHING = "Polimento"
    WASHING = "Lavagem"


STAGES_ORDER: List[ServiceStage] = [
    ServiceStage.DISASSEMBLY,
    ServiceStage.REPAIR,
    ServiceStage.SANDING,
    ServiceStage.PAINTING,
    ServiceStage.POLISHING,
    ServiceStage.WASHING,
]


class CarStatus(str, Enum):
    """Car status. HISTORY is only a listing view over completed cars."""
    IN_PROGRESS = "Em Andamento"
    COMPLETED = "Concluído"
    HISTORY = "Histórico"


class Attachment(BaseModel):
    """Binary file (photo) kept in memory as base64 text"""
    filename: str
    content_type: str = ""
    data: str = Field("", description="Base64 payload, empty when the source had no mime type")
    size: int = 0


class CarPart(BaseModel):
    """Part listed on the intake form"""
    id: str
    name: str
    selected: bool = False


class StageDetail(BaseModel):
    """Per-stage photos, expenses and stage-specific data"""
    photos: List[Attachment] = Field(default_factory=list)
    expenses: float = 0.0
    details: Dict[str, Any] = Field(default_factory=dict)


# ==================== Work Log ====================

class CommentNote(BaseModel):
    """Free-text comment written when a stage is completed"""
    kind: Literal["comment"] = "comment"
    text: str


class ProblemReport(BaseModel):
    """Problem raised on a car; only `resolved` ever changes"""
    kind: Literal["problem"] = "problem"
    text: str
    resolved: bool = False


WorkLogNote = Annotated[Union[CommentNote, ProblemReport], Field(discriminator="kind")]


class MaterialSummary(BaseModel):
    """Display line of a consumed material, e.g. 750 ml"""
    name: str
    quantity: str


class WorkLogEntry(BaseModel):
    """Immutable work log record"""
    id: str
    timestamp: datetime
    stage: ServiceStage
    employee_name: str
    note: Optional[WorkLogNote] = None
    photos: List[Attachment] = Field(default_factory=list)
    materials_used: List[MaterialSummary] = Field(default_factory=list)
    cost: Optional[float] = None

    class Config:
        frozen = True

    @property
    def is_problem(self) -> bool:
        return isinstance(self.note, ProblemReport)

    @property
    def is_open_problem(self) -> bool:
        return isinstance(self.note, ProblemReport) and not self.note.resolved


class MaterialToDeduct(BaseModel):
    """Material consumed by a stage, to be taken out of stock"""
    name: str
    quantity: float
    unit: str


# ==================== Stage Data ====================

class BrokenPart(BaseModel):
    name: str = ""
    cost: float = Field(0.0, ge=0)


class DisassemblyData(BaseModel):
    has_broken_part: bool = False
    details: Optional[BrokenPart] = None


class RepairData(BaseModel):
    """Checked consumables (name -> quantity) and putty weight in grams"""
    materials: Dict[str, float] = Field(default_factory=dict)
    putty_weight: float = Field(0.0, ge=0)


class PaintingData(BaseModel):
    painter_id: Optional[str] = None
    paint_name: str = "Tinta Metálica Azul"
    paint_qty: float = Field(0.0, ge=0, description="Paint volume in ml")
    varnish_qty: float = Field(0.0, ge=0, description="Varnish volume in ml")


class FinishingData(BaseModel):
    """Polishing and washing only record completion flags"""
    polishing_done: bool = True
    washing_done: bool = True


# ==================== Car ====================

class CarBase(BaseModel):
    """Vehicle and customer descriptors"""
    brand: str = Field(..., min_length=1, description="Marca")
    model: str = Field(..., min_length=1, description="Modelo")
    year: Optional[int] = Field(None, description="Ano")
    vin: str = Field("", description="Chassi")
    plate: str = Field(..., min_length=1, description="Placa")
    customer: str = Field(..., min_length=1, description="Cliente (nome / telefone)")
    description: str = ""
    delivery_date: Optional[date] = None
    exit_date: Optional[date] = None
    service_value: float = Field(0.0, ge=0, description="Valor cobrado do cliente")


class CarCreate(CarBase):
    """Car intake data"""
    parts: List[CarPart] = Field(default_factory=list)
    images: List[Attachment] = Field(default_factory=list)


class Car(CarBase):
    """Car going through the repair pipeline"""
    id: str
    images: List[Attachment] = Field(default_factory=list)
    parts: List[CarPart] = Field(default_factory=list)
    status: CarStatus = CarStatus.IN_PROGRESS
    current_stage: ServiceStage = ServiceStage.DISASSEMBLY
    stage_details: Dict[ServiceStage, StageDetail] = Field(default_factory=dict)
    accumulated_cost: float = 0.0
    work_log: List[WorkLogEntry] = Field(default_factory=list)
    has_unread_update: bool = False
    has_problem_report: bool = False
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def _fill_stage_details(self):
        for stage in STAGES_ORDER:
            self.stage_details.setdefault(stage, StageDetail())
        return self

    @property
    def stage_index(self) -> int:
        return STAGES_ORDER.index(self.current_stage)

    @property
    def is_last_stage(self) -> bool:
        return self.stage_index == len(STAGES_ORDER) - 1


class StageCompletion(BaseModel):
    """Payload of a stage completion"""
    employee_id: Optional[str] = Field(None, description="Funcionário responsável")
    password: str = Field("", description="Senha do funcionário")
    comments: str = ""
    photos: List[str] = Field(default_factory=list, description="Photos as data URLs")
    stage_data: Dict[str, Any] = Field(default_factory=dict)


class ProblemCreate(BaseModel):
    """Problem reported on a car"""
    employee_name: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)


class PhotosAdd(BaseModel):
    photos: List[str] = Field(..., description="Photos as data URLs")
