from use_cases.checks.check_service_multiple_use_case import CheckServiceMultipleUseCase
from use_cases.checks.check_service_use_case import CheckServiceUseCase

__all__ = [
    "CheckServiceMultipleUseCase",
    "CheckServiceUseCase",
]
