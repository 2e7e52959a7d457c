"""
Tests for post-install verification.
"""

from pathlib import Path

import pytest

from pamformula.core.errors import InstallFailure, VerificationFailure
from pamformula.core.models.platform import HostPlatform
from pamformula.core.platforms import for_platform
from pamformula.core.services.verify import check_exists, check_signature, parse_codesign_display
from tests.fakes import IDENTITY, codesign_display


@pytest.fixture
def installed(config) -> Path:
    path = config.installed_path
    path.parent.mkdir(parents=True)
    path.write_bytes(b"module")
    return path


class TestParseCodesignDisplay:
    def test_fields(self):
        info = parse_codesign_display(codesign_display())
        assert info.identifier == "pam_ssh_agent"
        assert info.authority == IDENTITY
        assert info.flags == "0x10000(runtime)"
        assert info.hardened_runtime

    def test_authority_chain_first_is_leaf(self):
        out = (
            "Identifier=pam_ssh_agent\n"
            "Authority=Developer ID Application: Example (ABCDE12345)\n"
            "Authority=Developer ID Certification Authority\n"
            "Authority=Apple Root CA\n"
        )
        info = parse_codesign_display(out)
        assert info.authority == "Developer ID Application: Example (ABCDE12345)"
        assert len(info.authorities) == 3

    def test_adhoc_has_no_authority(self):
        info = parse_codesign_display("Identifier=pam_ssh_agent\nSignature=adhoc\n")
        assert info.authority is None
        assert not info.hardened_runtime


class TestExistence:
    def test_missing(self, config):
        result = check_exists(config.installed_path)
        assert not result.exists
        assert not result.ok
        with pytest.raises(InstallFailure):
            result.raise_for_status()

    def test_present(self, installed):
        result = check_exists(installed)
        assert result.ok
        result.raise_for_status()


class TestSignatureCheck:
    def test_match(self, runner, installed):
        runner.set_output("codesign", stderr=codesign_display())
        result = check_signature(check_exists(installed), runner, "pam_ssh_agent", IDENTITY)
        assert result.ok
        assert result.signature_checked
        cmd = runner.calls_to("codesign")[0].command
        assert cmd == ["codesign", "--display", "--verbose=4", str(installed)]

    def test_identifier_mismatch(self, runner, installed):
        runner.set_output("codesign", stderr=codesign_display(identifier="libpam_ssh_agent"))
        result = check_signature(check_exists(installed), runner, "pam_ssh_agent", IDENTITY)
        assert result.exists
        assert not result.ok
        assert any("identifier" in m for m in result.mismatches)
        with pytest.raises(VerificationFailure):
            result.raise_for_status()

    def test_authority_mismatch(self, runner, installed):
        runner.set_output("codesign", stderr=codesign_display(authority="Someone Else"))
        result = check_signature(check_exists(installed), runner, "pam_ssh_agent", IDENTITY)
        assert any("authority" in m for m in result.mismatches)

    def test_runtime_flag_missing(self, runner, installed):
        runner.set_output("codesign", stderr=codesign_display(flags="0x0(none)"))
        result = check_signature(check_exists(installed), runner, "pam_ssh_agent", IDENTITY)
        assert result.mismatches == ["hardened runtime not enabled (flags=0x0(none))"]
        assert result.to_dict()["hardened_runtime"] is False
        with pytest.raises(VerificationFailure):
            result.raise_for_status()

    def test_unsigned(self, runner, installed):
        runner.set_failure("codesign", stderr="code object is not signed at all")
        result = check_signature(check_exists(installed), runner, "pam_ssh_agent", IDENTITY)
        assert not result.ok
        assert "not signed" in result.mismatches[0]

    def test_skipped_when_missing(self, runner, config):
        result = check_signature(check_exists(config.installed_path), runner, "pam_ssh_agent", IDENTITY)
        assert runner.call_count == 0
        assert not result.signature_checked

    def test_failure_leaves_artifact(self, runner, installed):
        runner.set_output("codesign", stderr=codesign_display(authority="Someone Else"))
        result = check_signature(check_exists(installed), runner, "pam_ssh_agent", IDENTITY)
        with pytest.raises(VerificationFailure):
            result.raise_for_status()
        assert installed.exists()


class TestPlatformVerify:
    def test_linux_existence_only(self, runner, config, installed):
        result = for_platform(HostPlatform.LINUX, config).verify(installed, runner)
        assert result.ok
        assert runner.call_count == 0

    def test_macos_checks_signature(self, runner, config, installed):
        runner.set_output("codesign", stderr=codesign_display())
        result = for_platform(HostPlatform.MACOS, config).verify(installed, runner)
        assert result.ok
        assert result.to_dict()["authority"] == IDENTITY
