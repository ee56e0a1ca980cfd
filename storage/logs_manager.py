"""
Logging Management Module (Async)

Uses aiologger for async log output:
- Daily log file naming (portal_YYYYMMDD.log) under <data_dir>/logs
- Console echo with colorama colours for warnings and errors
- Debug output only when the configured level is DEBUG
"""

from datetime import datetime
from pathlib import Path

# aiologger essentials
from aiologger.logger import Logger
from aiologger.handlers.files import AsyncFileHandler

from colorama import init as colorama_init, Fore, Style

class LogsManager:
    def __init__(self, settings):
        """
        Args:
            settings (dict): Contains at least:
                {
                    "system": {
                        "data_dir": "./data",
                        "log_level": "INFO" or "DEBUG"
                    },
                    "logging": {
                        "console_output": True
                    }
                }
        """
        system_settings = settings.get('system', {})
        data_dir = system_settings.get('data_dir', './data')
        self.log_level = system_settings.get('log_level', 'INFO').upper()
        self.console_output = settings.get('logging', {}).get('console_output', True)

        self.log_dir = Path(data_dir) / 'logs'
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = self.log_dir / f"portal_{datetime.now().strftime('%Y%m%d')}.log"

        # Created in `initialize()`
        self.logger = None
        self.file_handler = None
        self.is_initialized = False

        colorama_init(autoreset=False)

    async def initialize(self):
        """
        Async init to set up the aiologger file handler.
        Call this after creating LogsManager in your async setup.
        """
        if self.is_initialized:
            return

        try:
            self.logger = Logger(name="RentalPortal", level=self.log_level)
            self.file_handler = AsyncFileHandler(filename=str(self.log_file))
            self.logger.add_handler(self.file_handler)
            self.is_initialized = True
            await self.logger.info("Logging system initialized successfully")
        except Exception as e:
            print(f"Failed to initialize logger: {e}")
            raise

    async def shutdown(self):
        """
        Flush and close the file handler. Should be called before application exit.
        """
        if not self.is_initialized:
            return

        try:
            if self.logger:
                if self.file_handler:
                    self.logger.remove_handler(self.file_handler)
                    await self.file_handler.close()
                await self.logger.shutdown()
            self.is_initialized = False
        except Exception as e:
            # Use print since we can't log during shutdown
            print(f"Error during logs cleanup: {e}")

    def _echo(self, text: str):
        if self.console_output:
            print(text)

    # -------------------------------------------------------------------------
    # Logging methods
    # -------------------------------------------------------------------------

    async def info(self, msg: str):
        """Log an INFO-level message."""
        self._echo(f"[INFO] {msg}")
        if self.logger:
            await self.logger.info(msg)

    async def debug(self, msg: str):
        """Log a DEBUG-level message."""
        if self.log_level == "DEBUG":
            self._echo(f"[DEBUG] {msg}")
            if self.logger:
                await self.logger.debug(msg)

    async def warning(self, msg: str):
        """Log a WARNING-level message."""
        self._echo(f"{Fore.YELLOW}[WARNING] {msg}{Style.RESET_ALL}")
        if self.logger:
            await self.logger.warning(msg)

    async def error(self, msg: str):
        """Log an ERROR-level message."""
        self._echo(f"{Fore.RED}[ERROR] {msg}{Style.RESET_ALL}")
        if self.logger:
            await self.logger.error(msg)

    async def critical(self, msg: str):
        """Log a CRITICAL-level message."""
        self._echo(f"{Fore.RED}[CRITICAL] {msg}{Style.RESET_ALL}")
        if self.logger:
            await self.logger.critical(msg)
