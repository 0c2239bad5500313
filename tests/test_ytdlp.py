import asyncio
import sys

import pytest

from clipfetch.config.settings import ExtractorConfig, default_binary
from clipfetch.core.errors import ExtractionFailedError
from clipfetch.services.ytdlp import (
    CompletedProcess,
    SubprocessExecutor,
    YTDLPCommandBuilder,
    YtDlpGateway,
)

URL = "https://www.tiktok.com/@cat/video/123"


class RecordingExecutor:
    """Executor double returning a canned result"""
    calls = []
    result = CompletedProcess(0, b"", b"")
    error = None

    @classmethod
    async def run(cls, cmd, timeout=None):
        cls.calls.append((cmd, timeout))
        if cls.error:
            raise cls.error
        return cls.result


@pytest.fixture
def executor():
    RecordingExecutor.calls = []
    RecordingExecutor.result = CompletedProcess(0, b"", b"")
    RecordingExecutor.error = None
    return RecordingExecutor


def test_default_binary_is_platform_specific():
    assert default_binary() in ("yt-dlp", "yt-dlp.exe")


def test_info_command():
    builder = YTDLPCommandBuilder(ExtractorConfig(binary="/usr/bin/yt-dlp"))
    assert builder.build_info_command(URL) == ["/usr/bin/yt-dlp", "--dump-json", "--no-playlist", URL]


def test_download_command_with_network_options():
    builder = YTDLPCommandBuilder(ExtractorConfig(binary="yt-dlp", socket_timeout=10, retries=2))
    cmd = builder.build_download_command(URL, "best[ext=mp4]/best", "/tmp/video_x.mp4", "mp4")

    assert cmd[0] == "yt-dlp"
    assert cmd[cmd.index("-f") + 1] == "best[ext=mp4]/best"
    assert cmd[cmd.index("-o") + 1] == "/tmp/video_x.mp4"
    assert cmd[cmd.index("--merge-output-format") + 1] == "mp4"
    assert cmd[cmd.index("--socket-timeout") + 1] == "10"
    assert cmd[cmd.index("--retries") + 1] == "2"
    assert cmd[-1] == URL


@pytest.mark.asyncio
async def test_fetch_metadata_returns_stdout(executor):
    executor.result = CompletedProcess(0, b'{"title": "x"}', b"")
    gateway = YtDlpGateway(ExtractorConfig(binary="yt-dlp", timeout_seconds=30), executor=executor)

    assert await gateway.fetch_metadata(URL) == '{"title": "x"}'
    cmd, timeout = executor.calls[0]
    assert "--dump-json" in cmd
    assert timeout == 30


@pytest.mark.asyncio
async def test_non_zero_exit_raises_with_diagnostics(executor):
    executor.result = CompletedProcess(1, b"", b"ERROR: Unsupported URL\n")
    gateway = YtDlpGateway(ExtractorConfig(), executor=executor)

    with pytest.raises(ExtractionFailedError) as exc_info:
        await gateway.fetch_media(URL, "best", "/tmp/out.mp4")

    assert exc_info.value.exit_code == 1
    assert exc_info.value.diagnostics == "ERROR: Unsupported URL"


@pytest.mark.asyncio
async def test_timeout_raises_extraction_failed(executor):
    executor.error = asyncio.TimeoutError()
    gateway = YtDlpGateway(ExtractorConfig(timeout_seconds=5), executor=executor)

    with pytest.raises(ExtractionFailedError, match="timed out"):
        await gateway.fetch_metadata(URL)


@pytest.mark.asyncio
async def test_missing_binary_raises_extraction_failed(executor):
    executor.error = FileNotFoundError()
    gateway = YtDlpGateway(ExtractorConfig(binary="no-such-yt-dlp"), executor=executor)

    with pytest.raises(ExtractionFailedError, match="not found"):
        await gateway.fetch_metadata(URL)


@pytest.mark.asyncio
async def test_version_failure_returns_none(executor):
    executor.error = FileNotFoundError()
    gateway = YtDlpGateway(ExtractorConfig(), executor=executor)
    assert await gateway.version() is None


@pytest.mark.asyncio
async def test_subprocess_executor_captures_output():
    result = await SubprocessExecutor.run([
        sys.executable, "-c",
        "import sys; sys.stdout.write('out'); sys.stderr.write('err'); sys.exit(3)"
    ])
    assert result == CompletedProcess(3, b"out", b"err")


@pytest.mark.asyncio
async def test_subprocess_executor_kills_on_timeout():
    with pytest.raises(asyncio.TimeoutError):
        await SubprocessExecutor.run([sys.executable, "-c", "import time; time.sleep(30)"], timeout=0.5)
