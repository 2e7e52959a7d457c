"""
pam-ssh-agent formula — CLI entrypoint.

Usage:
    python -m pamformula.main --help
    python -m pamformula.main install
    python -m pamformula.main caveats --platform linux
    python -m pamformula.main verify
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from pamformula import __version__
from pamformula.core.observability.logging_config import configure_logging, level_from_flags

# Exit codes
EXIT_OK = 0
EXIT_FAILED = 1
EXIT_IDENTITY_MISSING = 2
EXIT_VERIFICATION_FAILED = 3

_PLATFORM_CHOICE = click.Choice(["macos", "linux", "other"], case_sensitive=False)


@click.group()
@click.version_option(version=__version__, prog_name="pamformula")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to formula.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """pam-ssh-agent formula — build, install and sign the PAM module."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    configure_logging(
        level=level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get("PAMF_LOG_FILE"),
        log_file_level=os.environ.get("PAMF_LOG_FILE_LEVEL"),
    )


# ── Helpers ─────────────────────────────────────────────────────────


def _load_config(ctx: click.Context, install_root: str | None = None):
    from pamformula.core.config.loader import ConfigError, load_formula

    try:
        config = load_formula(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(EXIT_FAILED)

    if install_root:
        config = config.model_copy(update={"install_root": install_root})
    return config


def _runner(ctx: click.Context):
    """Runner injected by the caller (tests), else the real subprocess runner."""
    runner = ctx.obj.get("runner")
    if runner is None:
        from pamformula.adapters.shell.command import SubprocessRunner

        runner = SubprocessRunner()
    return runner


def _platform(config, platform: str | None):
    from pamformula.core.models.platform import HostPlatform
    from pamformula.core.use_cases.install import resolve_platform

    host = HostPlatform.parse(platform) if platform else None
    return resolve_platform(config, host)


def _print_verification(verification) -> None:
    if verification.ok:
        click.secho(f"✅ Verified {verification.path}", fg="green")
        if verification.signature and verification.signature.authority:
            click.echo(f"   Identifier: {verification.signature.identifier}")
            click.echo(f"   Authority:  {verification.signature.authority}")
        return

    if not verification.exists:
        click.secho(f"❌ Module not installed: {verification.path}", fg="red", err=True)
        return

    click.secho("❌ Installed but wrongly signed:", fg="red", bold=True, err=True)
    for mismatch in verification.mismatches:
        click.echo(f"   • {mismatch}", err=True)


def _verification_exit_code(verification) -> int:
    from pamformula.core.errors import InstallFailure, VerificationFailure

    try:
        verification.raise_for_status()
    except InstallFailure:
        return EXIT_FAILED
    except VerificationFailure:
        return EXIT_VERIFICATION_FAILED
    return EXIT_OK


# ── Commands ────────────────────────────────────────────────────────


@cli.command()
@click.option("--platform", type=_PLATFORM_CHOICE, default=None, help="Override host detection.")
@click.option("--source-dir", type=click.Path(file_okay=False), default=None,
              help="Unpacked source tree (default: config source_dir).")
@click.option("--install-root", default=None, help="Override the install root (<prefix>/lib).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(
    ctx: click.Context,
    platform: str | None,
    source_dir: str | None,
    install_root: str | None,
    as_json: bool,
) -> None:
    """Build the module, install it and sign it (macOS)."""
    from pamformula.core.errors import PamFormulaError, SigningIdentityMissing
    from pamformula.core.use_cases.install import run_install

    config = _load_config(ctx, install_root)
    host = _platform(config, platform)

    try:
        result = run_install(
            config,
            _runner(ctx),
            host=host,
            pam_root=ctx.obj.get("pam_root", "/"),
            source_dir=source_dir,
        )
    except SigningIdentityMissing as e:
        click.secho(f"❌ {e}", fg="red", bold=True, err=True)
        click.echo(err=True)
        click.echo(e.remediation, err=True)
        sys.exit(EXIT_IDENTITY_MISSING)
    except PamFormulaError as e:
        click.secho(f"❌ {type(e).__name__}: {e}", fg="red", err=True)
        sys.exit(EXIT_FAILED)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        click.secho(f"\n📦 {config.name} {config.version} [{result.platform.value}]",
                    fg="cyan", bold=True)
        click.echo(f"   Installed: {result.installed_path}")
        if result.signed:
            click.echo(f"   Signed as: {config.signing_identity}")
        click.echo()
        click.echo(result.caveats)
        click.echo()
        assert result.verification is not None
        _print_verification(result.verification)

    assert result.verification is not None
    sys.exit(_verification_exit_code(result.verification))


@cli.command()
@click.option("--platform", type=_PLATFORM_CHOICE, default=None, help="Override host detection.")
@click.pass_context
def caveats(ctx: click.Context, platform: str | None) -> None:
    """Print post-install instructions for this host."""
    from pamformula.core.platforms import for_platform

    config = _load_config(ctx)
    host = _platform(config, platform)
    support = for_platform(host, config, pam_root=ctx.obj.get("pam_root", "/"))
    click.echo(support.compose_caveats(config.installed_path, support.signing_required))


@cli.command()
@click.option("--platform", type=_PLATFORM_CHOICE, default=None, help="Override host detection.")
@click.option("--install-root", default=None, help="Override the install root (<prefix>/lib).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def verify(ctx: click.Context, platform: str | None, install_root: str | None, as_json: bool) -> None:
    """Check the installed module (and its signature on macOS)."""
    from pamformula.core.platforms import for_platform

    config = _load_config(ctx, install_root)
    host = _platform(config, platform)
    support = for_platform(host, config)
    result = support.verify(config.installed_path, _runner(ctx))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_verification(result)

    sys.exit(_verification_exit_code(result))


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def probe(ctx: click.Context, as_json: bool) -> None:
    """Show detected platform, PAM directory and link mode."""
    from pamformula.core.models.platform import UNDETECTED
    from pamformula.core.platforms import for_platform
    from pamformula.core.services.platform_probe import detect_pam_directory

    config = _load_config(ctx)
    host = _platform(config, None)
    support = for_platform(host, config)
    pam_dir = detect_pam_directory(ctx.obj.get("pam_root", "/"))
    knobs = support.link_directive().knobs()

    data = {
        "platform": host.value,
        "pam_directory": None if pam_dir is UNDETECTED else str(pam_dir),
        "link": knobs,
        "signing_required": support.signing_required,
        "installed_path": str(config.installed_path),
    }
    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    click.secho(f"\n🔍 Host: {host.value}", fg="cyan", bold=True)
    click.echo(f"   PAM directory: {data['pam_directory'] or 'undetected'}")
    for name, value in knobs.items():
        click.echo(f"   {name}: {value}")
    click.echo(f"   Signing required: {'yes' if support.signing_required else 'no'}")
    click.echo(f"   Install path: {data['installed_path']}")
    click.echo()


@cli.command()
@click.option("--platform", type=_PLATFORM_CHOICE, default=None, help="Override host detection.")
@click.pass_context
def info(ctx: click.Context, platform: str | None) -> None:
    """Show formula metadata and dependencies."""
    from pamformula.core.platforms import for_platform

    config = _load_config(ctx)
    host = _platform(config, platform)
    support = for_platform(host, config)

    click.secho(f"\n{config.name}: {config.version}", fg="cyan", bold=True)
    click.echo(f"   {config.desc}")
    click.echo(f"   Homepage: {config.homepage}")
    click.echo(f"   Source:   {config.url}")
    click.echo(f"   SHA-256:  {config.sha256}")
    click.echo(f"   License:  {config.license}")
    click.echo(f"   HEAD:     {config.head}")
    click.echo()
    click.secho(f"   Dependencies ({host.value}):", bold=True)
    for dep in support.dependencies():
        suffix = " (build)" if dep.build_only else ""
        click.echo(f"     • {dep.name}{suffix}")
    click.echo()


@cli.group()
def config() -> None:
    """Formula configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate formula.yml configuration."""
    from pamformula.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(EXIT_OK if result.valid else EXIT_FAILED)

    if result.valid:
        assert result.config is not None
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Formula: {result.config.name} {result.config.version}")
        click.echo(f"   Install path: {result.config.installed_path}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(EXIT_FAILED)
    click.echo()


if __name__ == "__main__":
    cli()
