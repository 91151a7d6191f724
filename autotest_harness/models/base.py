"""Base model configuration for validated wire records."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base model for records decoded from program output.

    Records are immutable and tolerate unknown fields, since the program under
    test may attach extra diagnostics to its events.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")
