from __future__ import annotations

import pytest

from artiformat.models.platform import PlatformComponents, PlatformType


@pytest.mark.unit
class TestPlatformType:
    """Tests for the PlatformType hierarchy."""

    @pytest.mark.parametrize(
        "platform_type,members",
        [
            (PlatformType.UNIX, {"ubuntu", "debian", "macos"}),
            (PlatformType.LINUX, {"ubuntu", "debian"}),
            (PlatformType.UBUNTU, {"ubuntu"}),
            (PlatformType.DEBIAN, {"debian"}),
            (PlatformType.MACOS, {"macos"}),
            (PlatformType.WIN, {"win"}),
        ],
    )
    def test_matches(self, platform_type: PlatformType, members: set) -> None:
        """Test each type matches exactly its OS names."""
        for os_name in ("ubuntu", "debian", "macos", "win"):
            assert platform_type.matches(os_name) is (os_name in members)

    def test_unknown_os_matches_nothing(self) -> None:
        """Test an unknown OS name belongs to no type."""
        assert not any(t.matches("fedora") for t in PlatformType)


@pytest.mark.unit
class TestPlatformComponents:
    """Tests for PlatformComponents."""

    def test_unix_rendering(self) -> None:
        """Test unix aliases render as name, version, dash, arch."""
        components = PlatformComponents(os_name="ubuntu", os_version="22.04", os_arch="arm64")

        assert components.to_string() == "ubuntu22.04-arm64"
        assert str(components) == "ubuntu22.04-arm64"

    def test_windows_rendering(self) -> None:
        """Test Windows aliases render without a version."""
        components = PlatformComponents(os_name="win", os_arch="64")

        assert components.os_version is None
        assert components.to_string() == "win64"

    def test_predicates(self) -> None:
        """Test predicates follow the type hierarchy."""
        debian = PlatformComponents(os_name="debian", os_version="11", os_arch="x86_64")

        assert debian.is_unix is True
        assert debian.is_linux is True
        assert debian.is_debian is True
        assert debian.is_ubuntu is False
        assert debian.is_macos is False
        assert debian.is_win is False

        macos = PlatformComponents(os_name="macos", os_version="14", os_arch="arm64")
        assert macos.is_unix is True
        assert macos.is_linux is False

    def test_to_dict(self) -> None:
        """Test the JSON-ready representation."""
        assert PlatformComponents(os_name="win", os_arch="32").to_dict() == {
            "platform": "win32",
            "os_name": "win",
            "os_version": None,
            "os_arch": "32",
        }
