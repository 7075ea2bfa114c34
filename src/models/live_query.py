"""Models for records returned by the metrics/incident API."""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiRecord(BaseModel):
    """Base class for API records; camelCase on the wire, snake_case in code."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ManagementZone(ApiRecord):
    """Management zone a problem belongs to."""

    id: Optional[str] = None
    name: str


class Problem(ApiRecord):
    """One problem record from the problems-listing endpoint."""

    problem_id: str = Field(alias="problemId")
    title: str
    status: str
    severity_level: str = Field(alias="severityLevel")
    start_time: int = Field(alias="startTime")
    end_time: Optional[int] = Field(default=None, alias="endTime")
    affected_entities: list[dict[str, Any]] = Field(
        default_factory=list, alias="affectedEntities"
    )
    management_zones: list[ManagementZone] = Field(
        default_factory=list, alias="managementZones"
    )

    @property
    def ended(self) -> bool:
        """Open problems carry no end time or a negative one."""
        return self.end_time is not None and self.end_time > 0


class EnvironmentInfo(ApiRecord):
    """Response of the environment-info endpoint."""

    environment_id: str = Field(alias="environmentId")
    state: str
    create_time: str = Field(alias="createTime")


class LiveQueryResult(BaseModel):
    """Structured data fetched from the live API for one message."""

    query_type: Literal["problems", "environment"]
    environment_url: str
    problems: list[Problem] = Field(default_factory=list)
    environment: Optional[EnvironmentInfo] = None
    fetched_at: datetime


class LiveQueryResponse(BaseModel):
    """Live data optionally combined with the model's analysis of it."""

    result: LiveQueryResult
    analysis: Optional[str] = None
