"""Use case implementations for application workflows."""

from upload_watcher.application.use_cases.validate_config import ValidateConfigUseCase

__all__ = [
    "ValidateConfigUseCase",
]
