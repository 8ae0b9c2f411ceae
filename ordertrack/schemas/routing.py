"""工艺路线数据结构"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.clock import as_naive_utc
from ..models.enums import LogStatus, StepStatus


class RouteStepCreate(BaseModel):
    """追加路线步骤；step_no 为空时自动取当前最大值 + 1"""
    step_no: Optional[int] = Field(None, gt=0)
    operation_id: int
    workshop_id: Optional[int] = None
    planned_minutes: Optional[int] = Field(None, ge=0)
    planned_start: Optional[datetime] = None
    planned_finish: Optional[datetime] = None

    @field_validator("planned_start", "planned_finish")
    @classmethod
    def to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_naive_utc(value)

    @model_validator(mode="after")
    def check_window(self):
        if self.planned_start and self.planned_finish and self.planned_finish < self.planned_start:
            raise ValueError("planned_finish must not be earlier than planned_start")
        return self


class RouteStepRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_item_id: int
    step_no: int
    operation_id: int
    workshop_id: Optional[int] = None
    status: StepStatus
    planned_minutes: Optional[int] = None
    planned_start: Optional[datetime] = None
    planned_finish: Optional[datetime] = None


class StepStatusUpdate(BaseModel):
    status: StepStatus


class OperationLogStart(BaseModel):
    equipment_id: Optional[int] = None
    operator_id: Optional[int] = None
    started_at: Optional[datetime] = None

    @field_validator("started_at")
    @classmethod
    def to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_naive_utc(value)


class OperationLogFinish(BaseModel):
    status: LogStatus = LogStatus.DONE
    result_note: Optional[str] = None
    finished_at: Optional[datetime] = None

    @field_validator("finished_at")
    @classmethod
    def to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_naive_utc(value)

    @model_validator(mode="after")
    def check_final(self):
        if self.status == LogStatus.IN_PROGRESS:
            raise ValueError("a finished log must be DONE or FAILED")
        return self


class OperationLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    route_step_id: int
    equipment_id: Optional[int] = None
    operator_id: Optional[int] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    status: LogStatus
    result_note: Optional[str] = None
