"""
Pytest configuration and shared fixtures for the subbuild test suite.

The external build tool is replaced by a small Python script run with the
current interpreter, so no real build tool is needed. Its behavior is
driven by FAKE_TOOL_* environment variables.
"""

import os
import shutil
import sys
import tempfile
import textwrap
from pathlib import Path

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from subbuild.models import BuildEnvironment, HelperConfig  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")
    config.addinivalue_line("markers", "performance: mark test as a performance test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


FAKE_TOOL_SOURCE = textwrap.dedent(
    """
    import os
    import sys
    import time

    mode = os.environ.get("FAKE_TOOL_MODE", "lines")
    stdout_lines = int(os.environ.get("FAKE_TOOL_STDOUT_LINES", "0"))
    stderr_lines = int(os.environ.get("FAKE_TOOL_STDERR_LINES", "0"))
    padding = "x" * int(os.environ.get("FAKE_TOOL_PADDING", "0"))
    pause = float(os.environ.get("FAKE_TOOL_SLEEP", "0"))

    if mode == "env":
        print("cwd=" + os.getcwd())
        print("manifest_dir=" + os.environ.get("CARGO_MANIFEST_DIR", "<unset>"))
        print("rustc=" + os.environ.get("RUSTC", "<unset>"))
        print("args=" + " ".join(sys.argv[1:]))
    elif mode == "invalid_utf8":
        sys.stdout.buffer.write(b"compiling\\n\\xff\\xfe broken\\n")
    elif mode == "crlf":
        sys.stdout.buffer.write(b"windows line\\r\\nno newline at end")
    elif mode == "non_ascii":
        sys.stdout.buffer.write("caf\\u00e9\\n".encode("utf-8"))
        sys.stdout.flush()
        time.sleep(pause)
    elif mode == "bad_stderr":
        sys.stderr.buffer.write(b"\\xff\\n")
        sys.stderr.flush()
        for i in range(stdout_lines):
            sys.stdout.write(f"out {i}\\n")
            sys.stdout.flush()
            time.sleep(pause)
    else:
        for i in range(max(stdout_lines, stderr_lines)):
            if i < stdout_lines:
                sys.stdout.write(f"out {i} {padding}\\n")
            if i < stderr_lines:
                sys.stderr.write(f"err {i} {padding}\\n")

    sys.stdout.flush()
    sys.stderr.flush()
    sys.exit(int(os.environ.get("FAKE_TOOL_EXIT_CODE", "0")))
    """
)


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Make every test start without a cached or configured config file."""
    monkeypatch.delenv("SUBBUILD_CONFIG", raising=False)
    monkeypatch.setattr("subbuild.config.manager._CONFIG", None)
    monkeypatch.setattr("subbuild.config.manager._CONFIG_FILE_PATH", None)
    yield


@pytest.fixture
def program_dir(temp_dir):
    """A program directory with sources, manifest and lock file."""
    program = temp_dir / "program"
    (program / "src").mkdir(parents=True)
    (program / "src" / "main.rs").write_text("fn main() {}\n")
    (program / "Cargo.toml").write_text(
        '[package]\nname = "fibonacci-program"\nversion = "0.1.0"\n'
    )
    (program / "Cargo.lock").write_text("version = 3\n")
    return program.resolve()


@pytest.fixture
def fake_tool(temp_dir):
    """Path of the fake build tool script."""
    script = temp_dir / "fake_tool.py"
    script.write_text(FAKE_TOOL_SOURCE)
    return script


@pytest.fixture
def helper_config(fake_tool):
    """HelperConfig that runs the fake tool instead of `cargo prove build`."""
    return HelperConfig(build_command=[sys.executable, str(fake_tool), "prove", "build"])


@pytest.fixture
def make_environment(temp_dir):
    """
    Factory for BuildEnvironment objects.

    Keyword arguments become extra environment variables of the child.
    """

    def _make(skip: bool = False, anchor_root=None, **variables):
        base = dict(os.environ)
        base.update({key: str(value) for key, value in variables.items()})
        return BuildEnvironment(
            anchor_root=anchor_root if anchor_root is not None else temp_dir,
            skip_signal_present=skip,
            compiler_override_present="RUSTC" in base,
            variables=base,
        )

    return _make
