"""Service for checking administrator rights before serving on Windows"""
import asyncio
import logging
import sys
from typing import Optional

from devport.cli.exceptions import ElevationDenied
from devport.shared.base import BaseExecuteService

NOT_ELEVATED_MESSAGE = (
    "Running without administrator rights. Without them symlinks cannot be created, "
    "which slows down rebuilds significantly. Start the terminal as Administrator to avoid this."
)


class ServeElevationCheckService(BaseExecuteService):
    """
    Checks whether the current Windows session has administrator rights.

    `NET SESSION` only succeeds in an elevated session. A non-elevated
    session is reported as a warning, or rejected with ElevationDenied when
    the check is required. Other platforms pass straight through.
    """

    def __init__(
        self,
        required: bool = False,
        platform: Optional[str] = None,
        logger: Optional[logging.Logger] = None
    ) -> None:
        super().__init__(logger=logger)
        self.required = required
        self.platform = platform or sys.platform

    async def execute(self) -> bool:
        """
        Run the elevation check.

        Returns:
            bool: True if elevated or not on Windows, False if running non-elevated

        Raises:
            ElevationDenied: If the session is not elevated and the check is required
        """
        if not self.platform.startswith("win"):
            return True

        if await self._is_elevated():
            self.logger.debug("Running with administrator rights")
            return True

        if self.required:
            raise ElevationDenied()

        self.logger.warning(NOT_ELEVATED_MESSAGE)
        return False

    async def _is_elevated(self) -> bool:
        try:
            process = await asyncio.create_subprocess_exec(
                "NET", "SESSION",
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL
            )
        except OSError as ex:
            self.logger.debug(f"Unable to run NET SESSION: {ex}")
            return False

        return await process.wait() == 0
