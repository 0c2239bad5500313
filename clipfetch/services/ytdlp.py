import asyncio
import logging
from functools import lru_cache
from typing import List, NamedTuple, Optional, Protocol

from clipfetch.config.settings import ExtractorConfig, config
from clipfetch.core.errors import ExtractionFailedError

logger = logging.getLogger(__name__)

STDERR_MAX_CHARS = 2000


class CompletedProcess(NamedTuple):
    """Subprocess result"""
    returncode: int
    stdout: bytes
    stderr: bytes


class SubprocessExecutor:
    """Execute subprocess with consistent error handling"""

    @staticmethod
    async def run(
        cmd: List[str],
        timeout: Optional[float] = None
    ) -> CompletedProcess:
        """
        Run subprocess and capture its output.
        The child is killed and reaped if waiting fails or times out.
        """
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            stdin=asyncio.subprocess.DEVNULL
        )

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(),
                timeout=timeout
            )
        except BaseException:
            if process.returncode is None:
                process.kill()
                await process.wait()
            raise

        return CompletedProcess(
            returncode=process.returncode,
            stdout=stdout,
            stderr=stderr
        )


class YTDLPCommandBuilder:
    """Build yt-dlp commands"""

    def __init__(self, settings: ExtractorConfig):
        self.settings = settings

    def _common_options(self) -> List[str]:
        options = ['--no-playlist']
        if self.settings.socket_timeout is not None:
            options.extend(['--socket-timeout', str(self.settings.socket_timeout)])
        if self.settings.retries is not None:
            options.extend(['--retries', str(self.settings.retries)])
        return options

    def build_version_command(self) -> List[str]:
        return [self.settings.binary, '--version']

    def build_info_command(self, url: str) -> List[str]:
        """Build command for fetching video info"""
        return [
            self.settings.binary,
            '--dump-json',
            *self._common_options(),
            url,
        ]

    def build_download_command(
        self,
        url: str,
        format_selector: str,
        destination: str,
        merge_output_format: str
    ) -> List[str]:
        """Build command that writes the selected media to destination"""
        return [
            self.settings.binary,
            '-f', format_selector,
            '-o', destination,
            *self._common_options(),
            '--merge-output-format', merge_output_format,
            '--no-progress',
            url,
        ]


class ExtractorGateway(Protocol):
    """
    Narrow interface to the external extractor.
    Implementations raise ExtractionFailedError when the extractor fails.
    """

    async def fetch_metadata(self, url: str) -> str:
        ...

    async def fetch_media(self, url: str, format_selector: str, destination: str) -> None:
        ...


class YtDlpGateway:
    """ExtractorGateway backed by the yt-dlp executable"""

    def __init__(
        self,
        settings: ExtractorConfig,
        merge_output_format: str = "mp4",
        executor: type = SubprocessExecutor
    ):
        self.settings = settings
        self.merge_output_format = merge_output_format
        self.builder = YTDLPCommandBuilder(settings)
        self.executor = executor

    async def _run(self, cmd: List[str]) -> CompletedProcess:
        try:
            result = await self.executor.run(cmd, timeout=self.settings.timeout_seconds)
        except asyncio.TimeoutError:
            raise ExtractionFailedError(
                f"yt-dlp timed out after {self.settings.timeout_seconds}s"
            )
        except FileNotFoundError:
            raise ExtractionFailedError(f"yt-dlp executable not found: {self.settings.binary}")

        if result.returncode != 0:
            diagnostics = result.stderr.decode(errors="replace").strip()
            logger.error(f"yt-dlp exited with {result.returncode}: {diagnostics[:200]}")
            raise ExtractionFailedError(
                diagnostics[-STDERR_MAX_CHARS:],
                exit_code=result.returncode
            )
        return result

    async def fetch_metadata(self, url: str) -> str:
        result = await self._run(self.builder.build_info_command(url))
        return result.stdout.decode(errors="replace")

    async def fetch_media(self, url: str, format_selector: str, destination: str) -> None:
        cmd = self.builder.build_download_command(
            url, format_selector, destination, self.merge_output_format
        )
        await self._run(cmd)

    async def version(self) -> Optional[str]:
        """Installed yt-dlp version, or None when it cannot be run"""
        try:
            result = await self._run(self.builder.build_version_command())
        except ExtractionFailedError as e:
            logger.warning(f"Unable to determine yt-dlp version: {e}")
            return None
        return result.stdout.decode(errors="replace").strip() or None


@lru_cache(maxsize=1)
def get_extractor_gateway() -> YtDlpGateway:
    """Process-wide gateway built once from configuration"""
    return YtDlpGateway(
        config.extractor,
        merge_output_format=config.download.merge_output_format
    )
