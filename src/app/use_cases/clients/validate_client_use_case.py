"""
Use Case: Validate Client

Runs the full validation pipeline on a payload without persisting
anything: structure and formats, uniqueness, then business-rule warnings.
"""

from typing import Any, Mapping, Optional
from uuid import UUID

from src.app.services.client_validation_service import (
    ClientValidationService,
    ValidationOptions,
    ValidationResult,
)
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return


class ValidateClientUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        data: Mapping[str, Any],
        options: Optional[ValidationOptions] = None,
        client_id: Optional[UUID] = None,
    ) -> Result[ValidationResult]:
        """
        Validate a create payload, or an update payload when client_id is
        given (only the supplied sections are checked).

        Always returns Ok: an invalid payload is a ValidationResult with
        is_valid=False, not an error.
        """
        options = options or ValidationOptions()
        validator = ClientValidationService(self.uow, locale=options.locale)

        async with self.uow:
            if client_id is not None:
                result = await validator.validate_update_data(client_id, data, options)
            else:
                result = await validator.validate_client_data(data, options)

        if result.is_valid and client_id is None:
            result = result.merge(validator.validate_business_rules(data))

        return Return.ok(result)
