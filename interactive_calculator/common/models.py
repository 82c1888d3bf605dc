"""Pydantic models for parsed expressions and evaluation results."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ParsedExpression(BaseModel):
    """Two operands and the operator located between them."""

    model_config = ConfigDict(frozen=True)

    left: float = Field(..., description="Left operand")
    operator: str = Field(..., min_length=1, max_length=1, description="Operator symbol")
    right: float = Field(..., description="Right operand")


class OperationResult(BaseModel):
    """Represents the outcome of one evaluated line of a batch file."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(..., ge=1, description="Line number among non-empty input lines")
    expression: str = Field(..., description="Original arithmetic expression")
    result: Optional[float] = Field(default=None, description="Evaluated numeric result")
    error: Optional[str] = Field(default=None, description="Error message if evaluation failed")

    @model_validator(mode="after")
    def result_xor_error(self) -> "OperationResult":
        """Ensure exactly one of result and error is set."""
        if (self.result is None) == (self.error is None):
            raise ValueError("Exactly one of result and error must be set")
        return self
