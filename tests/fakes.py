"""
Simulated tool behaviour for cargo, security and codesign.
"""

from pathlib import Path

from pamformula.adapters.mock import MockRunner, RecordedCall

IDENTITY = "pam-ssh-agent Code Signing"


def cargo_produces(filename: str):
    """Hook that makes the mocked cargo leave ``target/release/<filename>``."""

    def _hook(call: RecordedCall) -> None:
        out = Path(call.cwd) / "target" / "release"
        out.mkdir(parents=True, exist_ok=True)
        (out / filename).write_bytes(b"\x7fELF fake module")

    return _hook


def codesign_display(
    identifier: str = "pam_ssh_agent",
    authority: str = IDENTITY,
    flags: str = "0x10000(runtime)",
) -> str:
    """Realistic ``codesign --display --verbose=4`` output."""
    return (
        "Executable=/opt/homebrew/opt/pam-ssh-agent/lib/security/pam_ssh_agent.so\n"
        f"Identifier={identifier}\n"
        "Format=Mach-O thin (arm64)\n"
        f"CodeDirectory v=20500 size=1234 flags={flags} hashes=30+7 location=embedded\n"
        "Hash type=sha256 size=32\n"
        "CandidateCDHash sha256=0123456789abcdef0123456789abcdef01234567\n"
        f"Authority={authority}\n"
        "Signed Time=18 Oct 2026 at 10:00:00\n"
        "Info.plist=not bound\n"
        "TeamIdentifier=not set\n"
        "Runtime Version=14.0.0\n"
        "Sealed Resources=none\n"
        "Internal requirements count=1 size=180\n"
    )


def identity_listing(identity: str = IDENTITY) -> str:
    """``security find-identity -v -p codesigning`` output with one identity."""
    return (
        f'  1) 0123456789ABCDEF0123456789ABCDEF01234567 "{identity}"\n'
        "     1 valid identities found\n"
    )


def no_identities() -> str:
    return "     0 valid identities found\n"


def mac_runner_ok(runner: MockRunner) -> MockRunner:
    """Configure a mock runner for a fully successful macOS install."""
    runner.on_call("cargo", cargo_produces("libpam_ssh_agent.dylib"))
    runner.set_output("security", stdout=identity_listing())
    runner.set_output("codesign", stderr=codesign_display())
    return runner


def linux_runner_ok(runner: MockRunner) -> MockRunner:
    runner.on_call("cargo", cargo_produces("libpam_ssh_agent.so"))
    return runner
