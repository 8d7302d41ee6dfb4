"""
Shared test configuration/fixtures for the media upload service.
"""

import logging
import os
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock
from datetime import datetime

import pytest

# Keep the app from opening its rotating log file under data/ during tests
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("SWEEP_ON_STARTUP", "false")

from app.core.config import CloudinaryCredentials  # noqa: E402
from app.core.exceptions import CleanupError, UploadError  # noqa: E402


def setup_logging():
    """Configure logging for the whole test run."""
    log_dir = Path("test/test_output/logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "test_run.log"

    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)-8s [%(name)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = logging.FileHandler(filename=log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Drop existing handlers to avoid duplicate output
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # Noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger("app").setLevel(logging.DEBUG)
    logging.getLogger("test").setLevel(logging.DEBUG)

    return log_file


def pytest_configure(config):  # pylint: disable=unused-argument
    """Configure pytest for tests."""
    log_file = setup_logging()
    logger = logging.getLogger("pytest")
    logger.info("=" * 80)
    logger.info("STARTING TEST RUN")
    logger.info("Working directory: %s", os.getcwd())
    logger.info("Log file: %s", log_file)
    logger.info("-" * 80)


@pytest.fixture(autouse=True)
def log_test_name(request):
    """Log test name when test starts and finishes."""
    logger = logging.getLogger(request.node.nodeid)
    logger.info("🚀 Starting test: %s", request.node.name)
    start_time = datetime.now()

    def log_test_end():
        duration = (datetime.now() - start_time).total_seconds()
        has_rep_call = hasattr(request.node, "rep_call")
        if has_rep_call and request.node.rep_call.failed:
            logger.error("❌ Test failed after %.2fs", duration)
        else:
            logger.info("✅ Test finished after %.2fs", duration)

    request.addfinalizer(log_test_end)


@pytest.fixture
def credentials() -> CloudinaryCredentials:
    return CloudinaryCredentials(
        cloud_name="demo-cloud", api_key="123456789", api_secret="s3cr3t-value"
    )


@pytest.fixture
def media_file(tmp_path) -> Path:
    f = tmp_path / "photo.png"
    f.write_bytes(b"\x89PNG\r\n\x1a\nfake")
    return f


def cloudinary_response(local_path: str, cloud_name: str = "demo-cloud") -> dict:
    """Shape of a Cloudinary upload response, trimmed to the fields we read."""
    name = Path(local_path).stem
    ext = Path(local_path).suffix.lstrip(".") or "bin"
    return {
        "public_id": name,
        "version": 1700000000,
        "resource_type": "image",
        "format": ext,
        "url": f"http://res.cloudinary.com/{cloud_name}/image/upload/v1700000000/{name}.{ext}",
        "secure_url": f"https://res.cloudinary.com/{cloud_name}/image/upload/v1700000000/{name}.{ext}",
    }


@pytest.fixture
def make_response():
    return cloudinary_response


@pytest.fixture
def fake_adapters():
    """AsyncMock-based adapters for the upload use case.

    - uploader.upload returns a Cloudinary-like response, or raises UploadError
      when the file does not exist (the provider cannot read it)
    - file_store.remove deletes the file, raising CleanupError when absent
    """

    class Uploader:
        async def upload(self, local_path: str, **options) -> dict:
            if not os.path.exists(local_path):
                raise UploadError(
                    f"ENOENT: no such file or directory, open '{local_path}'",
                    local_path=local_path,
                )
            return cloudinary_response(local_path)

    class FileStore:
        async def remove(self, path: str) -> None:
            try:
                os.remove(path)
            except OSError as e:
                raise CleanupError(f"{e.strerror}: {path}", local_path=path) from e

    uploader = Uploader()
    file_store = FileStore()

    # Allow assertion on calls
    uploader.upload = AsyncMock(side_effect=uploader.upload)  # type: ignore
    file_store.remove = AsyncMock(side_effect=file_store.remove)  # type: ignore

    return SimpleNamespace(uploader=uploader, file_store=file_store)


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Add test result to report object."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)
