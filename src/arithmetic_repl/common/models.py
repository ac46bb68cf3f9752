"""Pydantic models for calculation requests, results and REPL settings."""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


ErrorKind = Literal["parse", "division_by_zero"]


class CalculationRequest(BaseModel):
    """Represents a single line of input submitted to the calculator."""

    expression: str = Field(..., description="Arithmetic expression as a string")


class CalculationResult(BaseModel):
    """
    Outcome of parsing and evaluating one expression.

    Exactly one of ``result`` or ``error`` is set.
    """

    model_config = ConfigDict(frozen=True)

    expression: str = Field(..., description="Original arithmetic expression")
    result: Optional[float] = Field(default=None, description="Evaluated numeric result")
    error: Optional[str] = Field(default=None, description="Error message when evaluation failed")
    error_kind: Optional[ErrorKind] = Field(default=None, description="Which stage failed")

    @property
    def ok(self) -> bool:
        """True when the expression produced a value."""
        return self.error is None


class ReplSettings(BaseModel):
    """Configuration of the interactive read loop."""

    model_config = ConfigDict(frozen=True)

    quit_command: str = Field(default="quit", description="Line that ends the session")
    show_banner: bool = Field(default=True, description="Print the welcome banner on start")
    prompt: str = Field(default="", description="Text written before reading each line")

    @field_validator("quit_command")
    def quit_command_must_not_be_blank(cls, v: str) -> str:
        """Ensure that the quit sentinel can actually be typed."""
        if not v.strip():
            raise ValueError("quit_command cannot be empty")
        return v
