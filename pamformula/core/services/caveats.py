"""
Caveats composer — post-install instructions for the operator.

Everything here is a pure function of its arguments: same inputs, same
bytes out. Nothing is probed, nothing is written. The platform variants
gather the state (detected PAM directory, whether signing ran) and pass
it in.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

from pamformula.core.models.platform import UNDETECTED, HostPlatform, PamDirectory

PAM_CONFIG_EXAMPLE = "/etc/pam.d/sudo"
PAM_LINE_FMT = "auth       sufficient     {module}"

# Known distribution layouts, shown when no directory could be detected
_DISTRO_PAM_DIRS = (
    ("Debian/Ubuntu", "/lib/x86_64-linux-gnu/security/"),
    ("RHEL/CentOS/Fedora", "/lib64/security/"),
    ("Arch Linux", "/usr/lib/security/"),
)


def pam_line(module: str, authorized_keys: str | None = None) -> str:
    """A PAM stack line referencing ``module`` (full path or bare name)."""
    line = PAM_LINE_FMT.format(module=module)
    if authorized_keys:
        line += f" file={authorized_keys}"
    return line


def certificate_instructions(identity: str, formula_name: str = "pam-ssh-agent") -> str:
    """Walkthrough for creating and trusting the code-signing certificate."""
    return textwrap.dedent(f"""\
        **Code Signing Certificate:**

        macOS only loads PAM modules into system processes when they carry
        a trusted signature. Create a self-signed code-signing certificate
        named exactly "{identity}":

        1. Open Keychain Access and choose
           Keychain Access > Certificate Assistant > Create a Certificate...
        2. Name: {identity}
           Identity Type: Self Signed Root
           Certificate Type: Code Signing
        3. Create the certificate in the "login" keychain.
        4. Double-click the new certificate, expand "Trust" and set
           "Code Signing" to "Always Trust".
        5. Confirm it is listed as a valid identity:
           security find-identity -v -p codesigning

        Then re-run the install:
           brew reinstall {formula_name}
        """)


def compose_caveats(
    host: HostPlatform,
    installed_path: str | Path,
    pam_directory: PamDirectory = UNDETECTED,
    signing_required: bool = False,
    identity: str = "",
    formula_name: str = "pam-ssh-agent",
) -> str:
    """Compose the full caveats message for ``host``."""
    path = str(installed_path)
    sections = [_header(path)]

    if host is HostPlatform.MACOS:
        sections.append(_macos_section(path))
        if signing_required:
            sections.append(certificate_instructions(identity, formula_name))
    elif host is HostPlatform.LINUX:
        sections.append(_linux_section(path, pam_directory))
    else:
        sections.append(_generic_section(path))

    sections.append(_options_section())
    return "\n".join(sections)


def _header(path: str) -> str:
    return textwrap.dedent(f"""\
        To use pam-ssh-agent, you must now configure your system's PAM service.
        The module was installed to:
          {path}
        """)


def _macos_section(path: str) -> str:
    return textwrap.dedent(f"""\
        **macOS Instructions:**

        You do NOT need to create a symlink on macOS. Instead, edit the PAM
        configuration file for the service you want (e.g., `{PAM_CONFIG_EXAMPLE}`)
        and add the following line at the top, using the full path:

          {pam_line(path)}

        You will need root privileges to edit this file, for example:
          sudo nano {PAM_CONFIG_EXAMPLE}
        """)


def _linux_section(path: str, pam_directory: PamDirectory) -> str:
    if pam_directory is UNDETECTED:
        layouts = "\n".join(f"   - {distro}: {d}" for distro, d in _DISTRO_PAM_DIRS)
        step_one = (
            "1. Create a symlink from the installed module to your system's\n"
            "   PAM directory. No PAM directory was detected on this host; the\n"
            "   location varies by distribution:\n"
            f"{layouts}\n"
            "\n"
            "   Example:\n"
            f'     sudo ln -sf "{path}" /path/to/your/pam/security/\n'
        )
    else:
        step_one = (
            "1. Create a symlink from the installed module to your system's\n"
            "   PAM directory:\n"
            f'     sudo ln -sf "{path}" {pam_directory}/\n'
        )

    step_two = (
        f"2. Next, edit the PAM configuration file (e.g., `{PAM_CONFIG_EXAMPLE}`)\n"
        "   and add this line at the top:\n"
        "\n"
        f"     {pam_line('pam_ssh_agent.so')}\n"
    )
    return "**Linux Instructions:**\n\n" + step_one + "\n" + step_two


def _generic_section(path: str) -> str:
    return textwrap.dedent(f"""\
        **Configuration:**

        Reference the module by its full path in the PAM configuration
        file of the service you want to protect:

          {pam_line(path)}
        """)


def _options_section() -> str:
    return textwrap.dedent(f"""\
        **General Configuration Options:**

        To use a specific set of authorized keys, add the `file` parameter:
          {pam_line('...so', authorized_keys='~/.ssh/authorized_keys')}

        For more detailed information, please consult the project's README file.""")
