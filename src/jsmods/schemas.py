from pydantic import BaseModel, Field
from typing import Any, Literal, Optional


class StatisticsReport(BaseModel):
    """
    Aggregate node counts for one JavaScript source.
    """
    functions: int = Field(default=0, ge=0)
    classes: int = Field(default=0, ge=0)
    debuggers: int = Field(default=0, ge=0)
    imports: int = Field(default=0, ge=0)
    trys: int = Field(default=0, ge=0)
    throws: int = Field(default=0, ge=0)


class OperationResult(BaseModel):
    """
    Outcome of one facade call: status, the operation that produced it, and its payload.
    """
    status: Literal["ok", "error"]
    operation: str
    payload: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def as_tuple(self):
        """Three-part shape handed to callers that expect (status, operation, payload)."""
        return (self.status, self.operation, self.payload)
