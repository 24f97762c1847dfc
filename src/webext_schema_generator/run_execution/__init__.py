"""Run execution domain exports."""

from .generation_run_use_case import RunExecutionError, execute_schema_generation_run
from .run_contracts import GenerationOutcome, GenerationRequest, RunArtifacts

__all__ = [
    "GenerationRequest",
    "GenerationOutcome",
    "RunArtifacts",
    "RunExecutionError",
    "execute_schema_generation_run",
]
