"""Pytest fixtures for infrastructure tests."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from IAC.components.compute.linux_scale_set import LinuxVirtualMachineScaleSetProvider
from vmss.application.services import LinuxVirtualMachineScaleSetService


@pytest.fixture
def iac_project_root():
    """Return the IAC project root directory."""
    return Path(__file__).parent.parent.parent / "IAC"


@pytest.fixture
def python_files_in_iac(iac_project_root):
    """Return all Python files in IAC directory."""
    return [f for f in iac_project_root.rglob("*.py") if "__pycache__" not in str(f)]


@pytest.fixture
def mock_service():
    """
    Patch the service factory used by the dynamic provider.

    Yields:
        MagicMock: Service returned to every provider hook
    """
    service = MagicMock(spec=LinuxVirtualMachineScaleSetService)
    module = "IAC.components.compute.linux_scale_set"
    with patch(f"{module}.build_scale_set_service", return_value=service), \
            patch(f"{module}.configure_logging"):
        yield service


@pytest.fixture
def provider():
    """Return a dynamic provider instance."""
    return LinuxVirtualMachineScaleSetProvider()
