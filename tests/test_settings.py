"""Tests for settings types."""

import dataclasses

import pytest

from dotnetcli_mcp.dotnet.commands import DESCRIPTORS
from dotnetcli_mcp.dotnet.settings import (
    DotNetCoreBuildSettings,
    DotNetCoreExecuteSettings,
    DotNetCoreMSBuildSettings,
    DotNetCoreNuGetDeleteSettings,
    DotNetCoreNuGetPushSettings,
    DotNetCoreSettings,
    DotNetCoreVerbosity,
)


class TestDotNetCoreVerbosity:
    """Tests for the verbosity enum."""

    def test_values(self):
        assert [v.value for v in DotNetCoreVerbosity] == [
            "quiet",
            "minimal",
            "normal",
            "detailed",
            "diagnostic",
        ]

    def test_is_string(self):
        assert DotNetCoreVerbosity.NORMAL == "normal"


class TestSettingsDefaults:
    """Tests for the unset-by-default invariant."""

    @pytest.mark.parametrize("name", sorted(DESCRIPTORS))
    def test_every_option_defaults_to_none(self, name):
        """Test that a default instance carries no baked-in values."""
        settings = DESCRIPTORS[name].settings_type()
        for field in dataclasses.fields(settings):
            assert getattr(settings, field.name) is None, (name, field.name)

    @pytest.mark.parametrize("name", sorted(DESCRIPTORS))
    def test_inherits_common_settings(self, name):
        assert issubclass(DESCRIPTORS[name].settings_type, DotNetCoreSettings)


class TestVerbositySupport:
    """Tests that verbosity exists only where it is emitted."""

    @pytest.mark.parametrize("name", sorted(DESCRIPTORS))
    def test_field_matches_option_table(self, name):
        descriptor = DESCRIPTORS[name]
        emits = any(option.attribute == "verbosity" for option in descriptor.options)
        fields = {field.name for field in dataclasses.fields(descriptor.settings_type)}

        assert ("verbosity" in fields) == emits
        assert issubclass(descriptor.settings_type, DotNetCoreMSBuildSettings) == emits

    @pytest.mark.parametrize(
        "settings_type",
        [
            DotNetCoreExecuteSettings,
            DotNetCoreNuGetPushSettings,
            DotNetCoreNuGetDeleteSettings,
        ],
    )
    def test_rejected_on_non_msbuild_commands(self, settings_type):
        with pytest.raises(TypeError):
            settings_type(verbosity=DotNetCoreVerbosity.QUIET)


class TestSettingsImmutability:
    """Tests for frozen settings."""

    def test_cannot_mutate(self):
        settings = DotNetCoreBuildSettings(configuration="Release")
        with pytest.raises(dataclasses.FrozenInstanceError):
            settings.configuration = "Debug"

    def test_replace_creates_new_instance(self):
        settings = DotNetCoreBuildSettings(configuration="Release")
        changed = dataclasses.replace(settings, no_restore=True)
        assert settings.no_restore is None
        assert changed.configuration == "Release"
        assert changed.no_restore is True
