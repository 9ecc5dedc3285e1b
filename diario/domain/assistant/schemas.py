"""Assistant schemas - report generation and evolution rewriting"""

from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from ...shared.validators import validate_choice

REPORT_MODES = ("guided", "free")
REPORT_PERIODS = ("month", "quarter", "semester", "all")


class ReportRequest(BaseModel):
    """
    Report generation request.

    ``guided`` builds a clinical report for one patient over ``period``;
    ``free`` answers ``command`` using all of the user's data.
    """

    mode: str = "guided"
    patient_id: Optional[int] = None
    clinic_id: Optional[int] = None
    period: str = "all"
    command: Optional[str] = None

    @field_validator("mode")
    @classmethod
    def check_mode(cls, v):
        return validate_choice(v, REPORT_MODES, "mode")

    @field_validator("period")
    @classmethod
    def check_period(cls, v):
        return validate_choice(v, REPORT_PERIODS, "period")

    @model_validator(mode="after")
    def check_mode_fields(self):
        if self.mode == "guided" and self.patient_id is None:
            raise ValueError("patient_id is required for guided reports")
        if self.mode == "free" and not (self.command and self.command.strip()):
            raise ValueError("command is required for free reports")
        return self


class ImproveEvolutionRequest(BaseModel):
    text: Optional[str] = None


class ImproveEvolutionResponse(BaseModel):
    improved: str
