"""Base model configuration for option and configuration structures."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base model with frozen, strict-field configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")
