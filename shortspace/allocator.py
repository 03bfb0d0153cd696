"""Short ID allocation."""

import logging
from typing import Optional

from .common.validators import is_valid_custom_id
from .database.base import ShortURLStoreBase
from .errors import (
    CapacityExhaustedError,
    DuplicateIDError,
    InvalidInputError,
    StorageFaultError,
)
from .shortcode import ShortCodeGenerator


class IdentifierAllocator:
    """Pick or validate the short ID for a new record."""

    def __init__(
        self,
        store: ShortURLStoreBase,
        generator: Optional[ShortCodeGenerator] = None,
        max_attempts: int = 5,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize allocator.

        Args:
            store: Store to check IDs against
            generator: Optional short ID generator
            max_attempts: How many generated IDs to try before giving up
            logger: Optional logger
        """
        self.store = store
        self.generator = generator or ShortCodeGenerator()
        self.max_attempts = max_attempts
        self.logger = logger or logging.getLogger(__name__)

    async def exists(self, space: str, short_id: str) -> bool:
        """Check if a short ID is taken in a space.

        Fails closed: if the store cannot answer, the ID is reported as
        taken so nothing is ever allocated on top of an unknown state.
        """
        try:
            return await self.store.short_code_exists(space, short_id)
        except StorageFaultError as e:
            self.logger.error(f"Error checking if ID '{short_id}' exists in space '{space}': {e}")
            return True

    async def allocate(
        self,
        space: str,
        url: str,
        custom_id: Optional[str] = None,
    ) -> str:
        """Return a short ID that is free in the space.

        Args:
            space: Space label
            url: Target URL (feeds the generated ID)
            custom_id: Optional caller-chosen ID

        Returns:
            The short ID to create the record under

        Raises:
            InvalidInputError: If custom_id has an invalid format
            DuplicateIDError: If custom_id is already taken
            CapacityExhaustedError: If no free ID was generated in time
        """
        if custom_id:
            is_valid, error = is_valid_custom_id(custom_id)
            if not is_valid:
                raise InvalidInputError(f"Invalid short ID: {error}")

            if await self.exists(space, custom_id):
                raise DuplicateIDError(space, custom_id)

            return custom_id

        for attempt in range(self.max_attempts):
            candidate = self.generator.generate(url, space)

            if not await self.exists(space, candidate):
                if attempt:
                    self.logger.debug(f"Generated ID after {attempt + 1} attempts: {candidate}")
                return candidate

            self.logger.warning(f"Generated ID '{candidate}' is taken in space '{space}', retrying")

        raise CapacityExhaustedError(
            f"Unable to generate a free short ID in space '{space}' after {self.max_attempts} attempts"
        )
